# billing/services/held_bill_service.py

"""
HELD BILLS (DRAFTS)

- hold: store the client payload verbatim + customer summary + best-effort estimate
- no invoice number, no payments, no ledger movement, no customer creation
- estimate failures NEVER block holding; they are logged and stored as NULL
- retrieval hands back the payload plus a fresh suggested invoice number
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.utils import timezone

from billing.models import HeldBill
from billing.services.billing_transaction import (
    compute_totals,
    get_store,
    inline_customer_details,
    price_lines,
    resolve_tax_mode,
)
from billing.services.exceptions import DuplicateIdempotencyKey, HeldBillNotFound
from billing.services.invoice_number import generate_invoice_number
from customers.models import Customer
from customers.services.customer_resolver import get_store_customer

logger = logging.getLogger(__name__)

UNKNOWN_CUSTOMER = "Unknown Customer"


def best_effort(fn, *, default=None, label: str = "operation"):
    """
    Run fn() in a savepoint; on any exception roll the savepoint back, log, and
    return default. Only for work whose failure must not fail the caller.
    """
    try:
        with transaction.atomic():
            return fn()
    except Exception:
        logger.warning("Best-effort %s failed; using default", label, exc_info=True)
        return default


def estimate_amount(*, store_id, payload: dict) -> Decimal:
    """Steps 1-4 of a bill save, read-only. Raises on anything that would fail a save."""
    store = get_store(store_id=store_id)

    customer_id = payload.get("customer_id")
    if customer_id:
        get_store_customer(store_id=store.id, customer_id=customer_id)

    lines = price_lines(
        store_id=store.id, items=payload.get("items") or [], tax_mode=resolve_tax_mode(store)
    )
    totals = compute_totals(
        store_id=store.id, customer_id=customer_id, payload=payload, lines=lines
    )
    return totals.grand_total


def customer_summary(*, store_id, payload: dict) -> str:
    customer_id = payload.get("customer_id")
    if customer_id:
        row = (
            Customer.objects.filter(id=customer_id, store_id=store_id)
            .values("name", "phone_number")
            .first()
        )
        if row:
            return f"{row['name']} ({row['phone_number']})"
        return UNKNOWN_CUSTOMER

    details = inline_customer_details(payload)
    if details:
        return f"{details.get('name', '')} ({details.get('contact_no', '')})"

    return UNKNOWN_CUSTOMER


@transaction.atomic
def hold_bill(
    *,
    store_id,
    payload: dict,
    raw_payload=None,
    acting_user=None,
    idempotency_key: str | None = None,
) -> HeldBill:
    """
    payload:     validated data (used for the estimate + summary)
    raw_payload: what the client actually sent (stored verbatim); defaults to payload
    """
    store = get_store(store_id=store_id)

    estimate = best_effort(
        lambda: estimate_amount(store_id=store.id, payload=payload),
        default=None,
        label="held bill estimate",
    )

    try:
        with transaction.atomic():
            held = HeldBill.objects.create(
                store=store,
                payload=raw_payload if raw_payload is not None else payload,
                customer_summary=customer_summary(store_id=store.id, payload=payload),
                amount_estimate=estimate,
                idempotency_key=idempotency_key or None,
                created_by=acting_user if getattr(acting_user, "pk", None) else None,
            )
    except IntegrityError as exc:
        if idempotency_key and HeldBill.objects.filter(idempotency_key=idempotency_key).exists():
            raise DuplicateIdempotencyKey(
                "Held bill already exists with this idempotency key"
            ) from exc
        raise

    logger.info(
        "Bill held",
        extra={
            "store_id": str(store.id),
            "held_bill_id": str(held.id),
            "amount_estimate": str(estimate) if estimate is not None else None,
        },
    )
    return held


@dataclass(frozen=True)
class ResumableHeldBill:
    held: HeldBill
    suggested_invoice_number: str


def get_held_bill(*, store_id, held_id, clock=timezone.now) -> ResumableHeldBill:
    held = HeldBill.objects.filter(id=held_id, store_id=store_id).first()
    if held is None:
        raise HeldBillNotFound("Held bill not found")

    return ResumableHeldBill(
        held=held,
        suggested_invoice_number=generate_invoice_number(clock=clock),
    )


def list_held_bills(*, store_id):
    return HeldBill.objects.filter(store_id=store_id).order_by("-created_at")


@transaction.atomic
def discard_held_bill(*, store_id, held_id) -> None:
    deleted, _ = HeldBill.objects.filter(id=held_id, store_id=store_id).delete()
    if not deleted:
        raise HeldBillNotFound("Held bill not found")

    logger.info(
        "Held bill discarded",
        extra={"store_id": str(store_id), "held_bill_id": str(held_id)},
    )
