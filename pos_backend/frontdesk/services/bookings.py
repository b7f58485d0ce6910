# frontdesk/services/bookings.py

"""
BOOKINGS

- phone_number = country_code + contact_no
- items are priced by the client (unit_price), names come from the catalog
- total_amount = sum(unit_price * quantity), payable = max(0, total - advance)
- a soft-deleted booking cannot be edited
- changing the customer moves the advance (see frontdesk.services.advance)
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction

from customers.models import Customer, WalletHistoryEntry
from customers.services.customer_resolver import resolve_record_customer
from customers.services.ledger import process_customer_and_advance
from frontdesk.models import Booking, BookingItem
from frontdesk.services.advance import move_advance, payable_amount
from frontdesk.services.catalog import store_services
from frontdesk.services.exceptions import BookingNotFound

logger = logging.getLogger(__name__)

REFERENCE_TYPE = WalletHistoryEntry.REF_BOOKING

TWOPLACES = Decimal("0.01")


@dataclass(frozen=True)
class BookingResult:
    booking: Booking
    customer: Customer | None
    is_new_customer: bool


def booking_total(items) -> Decimal:
    total = sum(
        (Decimal(str(i["unit_price"])) * int(i.get("quantity") or 1) for i in items),
        Decimal("0"),
    )
    return total.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _customer_data(data: dict) -> dict:
    return {
        "customer_id": data.get("customer_id"),
        "country_code": data["country_code"],
        "contact_no": data["contact_no"],
        "customer_name": data.get("customer_name") or "",
        "gender": data.get("gender") or "",
        "email": data.get("email") or "",
        "address": data.get("address") or "",
        "advance_amount": data.get("advance_amount"),
    }


def _record_fields(data: dict) -> dict:
    total = booking_total(data.get("items") or [])
    return {
        "country_code": data["country_code"],
        "contact_no": data["contact_no"],
        "phone_number": f"{data['country_code']}{data['contact_no']}",
        "customer_name": data["customer_name"],
        "gender": data["gender"],
        "email": data.get("email") or "",
        "address": data.get("address") or "",
        "booking_datetime": data["booking_datetime"],
        "venue_type": data["venue_type"],
        "remarks": data.get("remarks") or "",
        "total_amount": total,
        "advance_amount": data.get("advance_amount") or Decimal("0.00"),
        "payable_amount": payable_amount(total, data.get("advance_amount")),
        "payment_mode": data["payment_mode"],
    }


def _write_items(booking: Booking, items, services_by_id):
    rows = []
    for item in items:
        service = services_by_id[uuid.UUID(str(item["service_id"]))]
        rows.append(
            BookingItem(
                booking=booking,
                service=service,
                service_name=service.name,
                unit_price=item["unit_price"],
                staff_id=item.get("staff_id"),
                staff_name=item.get("staff_name") or "",
                quantity=item.get("quantity") or 1,
                scheduled_at=item.get("scheduled_at"),
                venue=item.get("venue") or "",
            )
        )
    BookingItem.objects.bulk_create(rows)


@transaction.atomic
def create_booking(*, store_id, data: dict, acting_user=None) -> BookingResult:
    items = data.get("items") or []
    services_by_id = store_services(
        store_id=store_id, service_ids=[i["service_id"] for i in items]
    )

    booking_id = uuid.uuid4()
    result = process_customer_and_advance(
        store_id=store_id,
        data=_customer_data(data),
        reference_type=REFERENCE_TYPE,
        reference_id=booking_id,
        acting_user=acting_user,
    )

    actor = acting_user if getattr(acting_user, "pk", None) else None
    booking = Booking.objects.create(
        id=booking_id,
        store_id=store_id,
        customer=result.customer,
        status=data.get("status") or Booking.STATUS_SCHEDULED,
        created_by=actor,
        updated_by=actor,
        **_record_fields(data),
    )
    _write_items(booking, items, services_by_id)

    logger.info(
        "Booking created",
        extra={
            "store_id": str(store_id),
            "booking_id": str(booking.id),
            "total_amount": str(booking.total_amount),
            "advance_amount": str(booking.advance_amount),
        },
    )
    return BookingResult(
        booking=booking,
        customer=result.customer,
        is_new_customer=result.is_new_customer,
    )


@transaction.atomic
def update_booking(*, store_id, booking_id, data: dict, acting_user=None) -> BookingResult:
    booking = (
        Booking.objects.select_for_update()
        .filter(id=booking_id, store_id=store_id, deleted_at__isnull=True)
        .first()
    )
    if booking is None:
        raise BookingNotFound("Booking not found")

    items = data.get("items") or []
    services_by_id = store_services(
        store_id=store_id, service_ids=[i["service_id"] for i in items]
    )

    resolved = resolve_record_customer(
        store_id=store_id, data=_customer_data(data), acting_user=acting_user
    )
    customer = resolved.customer if resolved is not None else None

    move_advance(
        store_id=store_id,
        reference_type=REFERENCE_TYPE,
        reference_id=booking.id,
        old_customer_id=booking.customer_id,
        old_amount=booking.advance_amount,
        new_customer_id=customer.id if customer is not None else None,
        new_amount=data.get("advance_amount"),
        acting_user=acting_user,
    )

    for field, value in _record_fields(data).items():
        setattr(booking, field, value)
    if data.get("status"):
        booking.status = data["status"]
    booking.customer = customer
    booking.updated_by = acting_user if getattr(acting_user, "pk", None) else None
    booking.save()

    booking.items.all().delete()
    _write_items(booking, items, services_by_id)

    if customer is not None:
        customer.refresh_from_db(fields=["advance_amount"])

    logger.info(
        "Booking updated",
        extra={"store_id": str(store_id), "booking_id": str(booking.id)},
    )
    return BookingResult(
        booking=booking,
        customer=customer,
        is_new_customer=resolved.is_new_customer if resolved is not None else False,
    )
