# billing/services/bill_query.py

"""
BILL READS + SOFT DELETE

- soft-deleted bills (status=deleted) are hidden from normal listings
- soft delete never reverses ledger movements or payments
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from billing.models import Bill
from billing.services.exceptions import BillNotFound

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")

SORT_ORDERING = {
    "date_asc": ("billing_timestamp", "created_at"),
    "date_desc": ("-billing_timestamp", "-created_at"),
    "amount_asc": ("grand_total", "-billing_timestamp"),
    "amount_desc": ("-grand_total", "-billing_timestamp"),
}
DEFAULT_SORT = "date_desc"


def store_bills(*, store_id, include_deleted: bool = False):
    qs = Bill.objects.filter(store_id=store_id).select_related("customer")
    if not include_deleted:
        qs = qs.exclude(status=Bill.STATUS_DELETED)
    return qs.order_by(*SORT_ORDERING[DEFAULT_SORT])


def get_bill(*, store_id, bill_id) -> Bill:
    bill = (
        Bill.objects.filter(id=bill_id, store_id=store_id)
        .select_related("customer", "store")
        .prefetch_related("items", "payments")
        .first()
    )
    if bill is None:
        raise BillNotFound("Bill not found")
    return bill


def customer_bill_summary(*, store_id, customer_id) -> dict:
    row = (
        Bill.objects.filter(store_id=store_id, customer_id=customer_id)
        .exclude(status=Bill.STATUS_DELETED)
        .aggregate(
            total_bills=Count("id"),
            total_billed=Sum("grand_total"),
            total_paid=Sum("paid_amount"),
            total_dues=Sum("dues"),
            bills_with_dues=Count("id", filter=Q(dues__gt=0)),
        )
    )
    return {
        "total_bills": row["total_bills"] or 0,
        "total_billed": row["total_billed"] or ZERO,
        "total_paid": row["total_paid"] or ZERO,
        "total_dues": row["total_dues"] or ZERO,
        "bills_with_dues": row["bills_with_dues"] or 0,
    }


@transaction.atomic
def soft_delete_bills(*, store_id, bill_ids, acting_user=None) -> dict:
    wanted = {str(b) for b in bill_ids}

    bills = list(
        Bill.objects.select_for_update()
        .filter(store_id=store_id, id__in=list(wanted))
        .exclude(status=Bill.STATUS_DELETED)
    )

    now = timezone.now()
    actor = acting_user if getattr(acting_user, "pk", None) else None
    deleted = []
    for bill in bills:
        bill.status = Bill.STATUS_DELETED
        bill.deleted_at = now
        bill.deleted_by = actor
        bill.save(update_fields=["status", "deleted_at", "deleted_by", "updated_at"])
        deleted.append(str(bill.id))

    not_found = sorted(wanted - set(deleted))

    logger.info(
        "Bills soft-deleted",
        extra={"store_id": str(store_id), "deleted": deleted, "not_found": not_found},
    )
    return {"deleted": sorted(deleted), "not_found": not_found}
