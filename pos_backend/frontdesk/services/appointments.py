# frontdesk/services/appointments.py

"""
APPOINTMENTS

create:
- id is allocated up front so the advance credit references it directly
- customer resolved (customer_id or phone, find-or-create) and any advance credited
- services must belong to the store; total and duration are summed from the catalog

update:
- row locked, services replaced
- advance difference moved through the ledger (see frontdesk.services.advance)
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from customers.models import Customer, WalletHistoryEntry
from customers.services.customer_resolver import resolve_record_customer
from customers.services.ledger import process_customer_and_advance
from frontdesk.models import Appointment, AppointmentService
from frontdesk.services.advance import move_advance, payable_amount
from frontdesk.services.catalog import store_services
from frontdesk.services.exceptions import AppointmentNotFound

logger = logging.getLogger(__name__)

REFERENCE_TYPE = WalletHistoryEntry.REF_APPOINTMENT


@dataclass(frozen=True)
class AppointmentResult:
    appointment: Appointment
    customer: Customer | None
    is_new_customer: bool


def _customer_data(data: dict) -> dict:
    return {
        "customer_id": data.get("customer_id"),
        "phone_number": data.get("phone_number"),
        "customer_name": data.get("customer_name") or "",
        "gender": data.get("gender") or "",
        "advance_amount": data.get("advance_amount"),
    }


def _record_fields(data: dict, services) -> dict:
    total = sum((s.price for s in services), Decimal("0.00"))
    return {
        "phone_number": data["phone_number"],
        "customer_name": data.get("customer_name") or "",
        "gender": data.get("gender") or "",
        "source": data.get("source") or "",
        "appointment_date": data["date"],
        "appointment_time": data["time"],
        "total_duration_minutes": sum(s.duration_minutes for s in services),
        "total_amount": total,
        "advance_amount": data.get("advance_amount") or Decimal("0.00"),
        "payable_amount": payable_amount(total, data.get("advance_amount")),
        "payment_mode": data.get("payment_mode") or "",
        "notes": data.get("notes") or "",
    }


def _line_services(entries, services_by_id) -> list:
    return [services_by_id[uuid.UUID(str(e["service_id"]))] for e in entries]


def _write_services(appointment: Appointment, entries, services_by_id):
    AppointmentService.objects.bulk_create(
        [
            AppointmentService(
                appointment=appointment,
                service=services_by_id[uuid.UUID(str(entry["service_id"]))],
                staff_id=entry.get("staff_id"),
                position=entry["position"] if entry.get("position") is not None else index,
            )
            for index, entry in enumerate(entries)
        ]
    )


@transaction.atomic
def create_appointment(*, store_id, data: dict, acting_user=None) -> AppointmentResult:
    entries = data.get("services") or []
    services_by_id = store_services(
        store_id=store_id, service_ids=[e["service_id"] for e in entries]
    )

    appointment_id = uuid.uuid4()
    result = process_customer_and_advance(
        store_id=store_id,
        data=_customer_data(data),
        reference_type=REFERENCE_TYPE,
        reference_id=appointment_id,
        acting_user=acting_user,
    )

    actor = acting_user if getattr(acting_user, "pk", None) else None
    appointment = Appointment.objects.create(
        id=appointment_id,
        store_id=store_id,
        customer=result.customer,
        status=data.get("status") or Appointment.STATUS_SCHEDULED,
        created_by=actor,
        updated_by=actor,
        **_record_fields(data, _line_services(entries, services_by_id)),
    )
    _write_services(appointment, entries, services_by_id)

    logger.info(
        "Appointment created",
        extra={
            "store_id": str(store_id),
            "appointment_id": str(appointment.id),
            "customer_id": str(result.customer_id) if result.customer_id else None,
            "advance_amount": str(appointment.advance_amount),
        },
    )
    return AppointmentResult(
        appointment=appointment,
        customer=result.customer,
        is_new_customer=result.is_new_customer,
    )


@transaction.atomic
def update_appointment(*, store_id, appointment_id, data: dict, acting_user=None) -> AppointmentResult:
    appointment = (
        Appointment.objects.select_for_update()
        .filter(id=appointment_id, store_id=store_id)
        .first()
    )
    if appointment is None:
        raise AppointmentNotFound("Appointment not found")

    entries = data.get("services") or []
    services_by_id = store_services(
        store_id=store_id, service_ids=[e["service_id"] for e in entries]
    )

    resolved = resolve_record_customer(
        store_id=store_id, data=_customer_data(data), acting_user=acting_user
    )
    customer = resolved.customer if resolved is not None else None

    move_advance(
        store_id=store_id,
        reference_type=REFERENCE_TYPE,
        reference_id=appointment.id,
        old_customer_id=appointment.customer_id,
        old_amount=appointment.advance_amount,
        new_customer_id=customer.id if customer is not None else None,
        new_amount=data.get("advance_amount"),
        acting_user=acting_user,
    )

    for field, value in _record_fields(data, _line_services(entries, services_by_id)).items():
        setattr(appointment, field, value)
    if data.get("status"):
        appointment.status = data["status"]
    appointment.customer = customer
    appointment.updated_by = acting_user if getattr(acting_user, "pk", None) else None
    appointment.save()

    appointment.services.all().delete()
    _write_services(appointment, entries, services_by_id)

    if customer is not None:
        customer.refresh_from_db(fields=["advance_amount"])

    logger.info(
        "Appointment updated",
        extra={"store_id": str(store_id), "appointment_id": str(appointment.id)},
    )
    return AppointmentResult(
        appointment=appointment,
        customer=customer,
        is_new_customer=resolved.is_new_customer if resolved is not None else False,
    )


def mark_appointment_billed(*, store_id, appointment_id) -> bool:
    """Flag the appointment a bill was raised for. Unknown or cancelled appointments are left alone."""
    updated = (
        Appointment.objects.filter(id=appointment_id, store_id=store_id)
        .exclude(status=Appointment.STATUS_CANCELLED)
        .update(status=Appointment.STATUS_BILLED, updated_at=timezone.now())
    )
    return bool(updated)
