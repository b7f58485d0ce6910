# frontdesk/services/enquiries.py

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal

from django.db import transaction

from customers.models import Customer, WalletHistoryEntry
from customers.services.ledger import process_customer_and_advance
from frontdesk.models import Enquiry, EnquiryDetail

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnquiryResult:
    enquiry: Enquiry
    customer: Customer | None
    is_new_customer: bool


@transaction.atomic
def create_enquiry(*, store_id, data: dict, acting_user=None) -> EnquiryResult:
    """Capture a lead; the contact always resolves to a customer, any advance is credited."""
    enquiry_id = uuid.uuid4()
    result = process_customer_and_advance(
        store_id=store_id,
        data={
            "country_code": data["country_code"],
            "contact_no": data["contact_no"],
            "name": data["name"],
            "gender": data.get("gender") or "",
            "email": data.get("email") or "",
            "advance_amount": data.get("advance_amount"),
        },
        reference_type=WalletHistoryEntry.REF_ENQUIRY,
        reference_id=enquiry_id,
        acting_user=acting_user,
    )

    enquiry = Enquiry.objects.create(
        id=enquiry_id,
        store_id=store_id,
        customer=result.customer,
        country_code=data["country_code"],
        contact_no=data["contact_no"],
        name=data["name"],
        email=data.get("email") or "",
        gender=data["gender"],
        source=data["source"],
        enquiry_type=data["enquiry_type"],
        enquiry_status=data["enquiry_status"],
        notes=data.get("notes") or "",
        follow_up_at=data.get("follow_up_at"),
        advance_amount=data.get("advance_amount") or Decimal("0.00"),
        created_by=acting_user if getattr(acting_user, "pk", None) else None,
    )
    EnquiryDetail.objects.bulk_create(
        [
            EnquiryDetail(
                enquiry=enquiry,
                category=detail["category"],
                name=detail["name"],
                reference_id=detail.get("reference_id") or "",
            )
            for detail in data.get("details") or []
        ]
    )

    logger.info(
        "Enquiry created",
        extra={
            "store_id": str(store_id),
            "enquiry_id": str(enquiry.id),
            "customer_id": str(result.customer_id) if result.customer_id else None,
        },
    )
    return EnquiryResult(
        enquiry=enquiry,
        customer=result.customer,
        is_new_customer=result.is_new_customer,
    )
