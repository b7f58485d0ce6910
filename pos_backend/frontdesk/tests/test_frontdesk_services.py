"""
FRONT DESK SERVICE TESTS

Run with:
    python manage.py test frontdesk -v 2

Covers:
- upfront advance credited once, history row references the record id
- totals computed server-side
- edits move only the advance difference; customer change moves it across
- a bill raised for an appointment flags it as billed
"""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from billing.services.billing_transaction import save_bill
from billing.tests.helpers import BillingFixtureMixin
from catalog.models import Service
from customers.models import Customer, WalletHistoryEntry
from customers.services import ledger
from customers.services.exceptions import InsufficientBalance
from frontdesk.models import Appointment, Booking, Enquiry
from frontdesk.services.appointments import (
    create_appointment,
    mark_appointment_billed,
    update_appointment,
)
from frontdesk.services.bookings import booking_total, create_booking, update_booking
from frontdesk.services.enquiries import create_enquiry
from frontdesk.services.exceptions import BookingNotFound, ServiceNotFound

D = Decimal


class FrontdeskFixtureMixin(BillingFixtureMixin):
    def _appointment_data(self, *, phone="+919800000001", advance="0", services=None, **extra):
        data = {
            "phone_number": phone,
            "customer_name": "Asha",
            "date": datetime.date(2024, 6, 1),
            "time": datetime.time(10, 30),
            "services": services
            or [
                {"service_id": self.haircut.id, "staff_id": None, "position": 0},
                {"service_id": self.facial.id, "staff_id": None, "position": 1},
            ],
            "advance_amount": D(advance),
        }
        data.update(extra)
        return data

    def _booking_data(self, *, contact_no="9800000001", advance="0", items=None, **extra):
        data = {
            "country_code": "+91",
            "contact_no": contact_no,
            "customer_name": "Asha",
            "gender": "female",
            "booking_datetime": timezone.now(),
            "venue_type": "outdoor",
            "items": items
            or [
                {"service_id": self.haircut.id, "unit_price": D("450.00"), "quantity": 2},
                {"service_id": self.facial.id, "unit_price": D("999.50"), "quantity": 1},
            ],
            "advance_amount": D(advance),
            "payment_mode": "cash",
        }
        data.update(extra)
        return data

    def _history(self, customer):
        return list(
            WalletHistoryEntry.objects.filter(customer=customer).order_by("created_at", "id")
        )


class AppointmentServiceTests(FrontdeskFixtureMixin, TestCase):
    def test_create_credits_advance_against_the_appointment_id(self):
        result = create_appointment(
            store_id=self.store.id, data=self._appointment_data(advance="200"), acting_user=self.user
        )

        appointment = result.appointment
        self.assertEqual(result.customer.id, self.customer.id)
        self.assertFalse(result.is_new_customer)
        self.assertEqual(self._balance(), D("200.00"))

        (entry,) = self._history(self.customer)
        self.assertEqual(entry.amount, D("200.00"))
        self.assertEqual(entry.reference_type, WalletHistoryEntry.REF_APPOINTMENT)
        self.assertEqual(entry.reference_id, appointment.id)
        self.assertEqual(entry.description, f"Advance payment for appointment #{appointment.id}")

    def test_totals_come_from_the_catalog(self):
        self.haircut.duration_minutes = 30
        self.haircut.save()
        self.facial.duration_minutes = 45
        self.facial.save()

        appointment = create_appointment(
            store_id=self.store.id, data=self._appointment_data(advance="200")
        ).appointment
        appointment.refresh_from_db()

        self.assertEqual(appointment.total_amount, D("1500.00"))
        self.assertEqual(appointment.total_duration_minutes, 75)
        self.assertEqual(appointment.payable_amount, D("1300.00"))
        self.assertEqual(
            list(appointment.services.values_list("service_id", flat=True)),
            [self.haircut.id, self.facial.id],
        )

    def test_advance_larger_than_total_leaves_nothing_payable(self):
        appointment = create_appointment(
            store_id=self.store.id, data=self._appointment_data(advance="2000")
        ).appointment
        self.assertEqual(appointment.payable_amount, D("0.00"))

    def test_no_advance_writes_no_history(self):
        create_appointment(store_id=self.store.id, data=self._appointment_data())
        self.assertEqual(self._history(self.customer), [])
        self.assertEqual(self._balance(), D("0.00"))

    def test_unknown_phone_creates_customer(self):
        result = create_appointment(
            store_id=self.store.id,
            data=self._appointment_data(phone="+919811111111", advance="50"),
        )
        self.assertTrue(result.is_new_customer)
        self.assertEqual(result.customer.name, "Asha")
        self.assertEqual(result.customer.advance_amount, D("50.00"))

    def test_service_of_another_store_rolls_back_everything(self):
        foreign = Service.objects.create(store=self.other_store, name="Spa", price="800.00")
        with self.assertRaises(ServiceNotFound):
            create_appointment(
                store_id=self.store.id,
                data=self._appointment_data(
                    phone="+919811111111",
                    advance="50",
                    services=[{"service_id": foreign.id, "position": 0}],
                ),
            )

        self.assertFalse(Appointment.objects.exists())
        self.assertFalse(Customer.objects.filter(phone_number="+919811111111").exists())

    def test_raising_the_advance_credits_only_the_difference(self):
        appointment = create_appointment(
            store_id=self.store.id, data=self._appointment_data(advance="200")
        ).appointment

        update_appointment(
            store_id=self.store.id,
            appointment_id=appointment.id,
            data=self._appointment_data(advance="350"),
        )

        self.assertEqual(self._balance(), D("350.00"))
        amounts = [e.amount for e in self._history(self.customer)]
        self.assertEqual(amounts, [D("200.00"), D("150.00")])

    def test_lowering_the_advance_debits_the_difference(self):
        appointment = create_appointment(
            store_id=self.store.id, data=self._appointment_data(advance="200")
        ).appointment

        result = update_appointment(
            store_id=self.store.id,
            appointment_id=appointment.id,
            data=self._appointment_data(advance="120"),
        )

        self.assertEqual(self._balance(), D("120.00"))
        self.assertEqual(result.appointment.advance_amount, D("120"))
        self.assertEqual(self._history(self.customer)[-1].amount, D("-80.00"))

    def test_lowering_an_already_spent_advance_is_refused(self):
        appointment = create_appointment(
            store_id=self.store.id, data=self._appointment_data(advance="200")
        ).appointment
        ledger.debit(customer_id=self.customer.id, amount="150")

        with self.assertRaises(InsufficientBalance):
            update_appointment(
                store_id=self.store.id,
                appointment_id=appointment.id,
                data=self._appointment_data(advance="0", notes="edited"),
            )

        appointment.refresh_from_db()
        self.assertEqual(appointment.advance_amount, D("200.00"))
        self.assertEqual(appointment.notes, "")
        self.assertEqual(self._balance(), D("50.00"))

    def test_changing_the_customer_moves_the_advance(self):
        appointment = create_appointment(
            store_id=self.store.id, data=self._appointment_data(advance="200")
        ).appointment

        result = update_appointment(
            store_id=self.store.id,
            appointment_id=appointment.id,
            data=self._appointment_data(phone="+919822222222", advance="300"),
        )

        self.assertTrue(result.is_new_customer)
        self.assertEqual(self._balance(), D("0.00"))
        self.assertEqual(result.customer.advance_amount, D("300.00"))
        self.assertEqual(result.appointment.customer_id, result.customer.id)

    def test_services_are_replaced_on_update(self):
        appointment = create_appointment(
            store_id=self.store.id, data=self._appointment_data()
        ).appointment

        update_appointment(
            store_id=self.store.id,
            appointment_id=appointment.id,
            data=self._appointment_data(services=[{"service_id": self.facial.id}]),
        )

        appointment.refresh_from_db()
        self.assertEqual(appointment.services.count(), 1)
        self.assertEqual(appointment.total_amount, D("1000.00"))


class AppointmentBilledTests(FrontdeskFixtureMixin, TestCase):
    def test_saving_a_bill_flags_the_appointment(self):
        appointment = create_appointment(
            store_id=self.store.id, data=self._appointment_data()
        ).appointment

        save_bill(store_id=self.store.id, payload=self._payload(appointment_id=appointment.id))

        appointment.refresh_from_db()
        self.assertEqual(appointment.status, Appointment.STATUS_BILLED)

    def test_editing_a_billed_appointment_keeps_its_status(self):
        appointment = create_appointment(
            store_id=self.store.id, data=self._appointment_data()
        ).appointment
        save_bill(store_id=self.store.id, payload=self._payload(appointment_id=appointment.id))

        result = update_appointment(
            store_id=self.store.id,
            appointment_id=appointment.id,
            data=self._appointment_data(notes="walk-in extras"),
        )

        appointment.refresh_from_db()
        self.assertEqual(appointment.status, Appointment.STATUS_BILLED)
        self.assertEqual(result.appointment.notes, "walk-in extras")

    def test_explicit_status_on_edit_is_applied(self):
        appointment = create_appointment(
            store_id=self.store.id, data=self._appointment_data()
        ).appointment

        update_appointment(
            store_id=self.store.id,
            appointment_id=appointment.id,
            data=self._appointment_data(status=Appointment.STATUS_COMPLETED),
        )

        appointment.refresh_from_db()
        self.assertEqual(appointment.status, Appointment.STATUS_COMPLETED)

    def test_cancelled_appointment_is_left_alone(self):
        appointment = create_appointment(
            store_id=self.store.id,
            data=self._appointment_data(status=Appointment.STATUS_CANCELLED),
        ).appointment

        self.assertFalse(
            mark_appointment_billed(store_id=self.store.id, appointment_id=appointment.id)
        )
        appointment.refresh_from_db()
        self.assertEqual(appointment.status, Appointment.STATUS_CANCELLED)

    def test_unknown_appointment_does_not_block_the_bill(self):
        saved = save_bill(
            store_id=self.store.id, payload=self._payload(appointment_id=uuid.uuid4())
        )
        self.assertIsNotNone(saved.bill.appointment_id)


class BookingServiceTests(FrontdeskFixtureMixin, TestCase):
    def test_total_is_sum_of_unit_price_times_quantity(self):
        items = [
            {"unit_price": D("450.00"), "quantity": 2},
            {"unit_price": D("999.50"), "quantity": 1},
        ]
        self.assertEqual(booking_total(items), D("1899.50"))

    def test_create_resolves_phone_from_parts_and_credits_advance(self):
        result = create_booking(
            store_id=self.store.id, data=self._booking_data(advance="500"), acting_user=self.user
        )
        booking = result.booking

        self.assertEqual(booking.phone_number, "+919800000001")
        self.assertEqual(result.customer.id, self.customer.id)
        self.assertEqual(booking.total_amount, D("1899.50"))
        self.assertEqual(booking.payable_amount, D("1399.50"))
        self.assertEqual(self._balance(), D("500.00"))
        self.assertEqual(
            sorted(booking.items.values_list("service_name", flat=True)), ["Facial", "Haircut"]
        )

        (entry,) = self._history(self.customer)
        self.assertEqual(entry.reference_type, WalletHistoryEntry.REF_BOOKING)
        self.assertEqual(entry.reference_id, booking.id)

    def test_customer_change_moves_advance_once(self):
        booking = create_booking(
            store_id=self.store.id, data=self._booking_data(advance="500")
        ).booking

        result = update_booking(
            store_id=self.store.id,
            booking_id=booking.id,
            data=self._booking_data(contact_no="9833333333", advance="500"),
        )

        self.assertEqual(self._balance(), D("0.00"))
        self.assertEqual(result.customer.advance_amount, D("500.00"))
        self.assertEqual(
            [e.amount for e in self._history(self.customer)], [D("500.00"), D("-500.00")]
        )
        self.assertEqual(
            [e.amount for e in self._history(result.customer)], [D("500.00")]
        )

    def test_same_customer_update_without_advance_change_is_silent(self):
        booking = create_booking(
            store_id=self.store.id, data=self._booking_data(advance="500")
        ).booking

        update_booking(
            store_id=self.store.id,
            booking_id=booking.id,
            data=self._booking_data(advance="500", remarks="bring mirror"),
        )

        self.assertEqual(len(self._history(self.customer)), 1)
        self.assertEqual(self._balance(), D("500.00"))
        booking.refresh_from_db()
        self.assertEqual(booking.remarks, "bring mirror")

    def test_edit_without_status_keeps_the_current_one(self):
        booking = create_booking(
            store_id=self.store.id,
            data=self._booking_data(status=Booking.STATUS_IN_PROGRESS),
        ).booking

        update_booking(
            store_id=self.store.id, booking_id=booking.id, data=self._booking_data()
        )

        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.STATUS_IN_PROGRESS)

    def test_deleted_booking_cannot_be_edited(self):
        booking = create_booking(store_id=self.store.id, data=self._booking_data()).booking
        Booking.objects.filter(pk=booking.pk).update(deleted_at=timezone.now())

        with self.assertRaises(BookingNotFound):
            update_booking(
                store_id=self.store.id, booking_id=booking.id, data=self._booking_data()
            )


class EnquiryServiceTests(FrontdeskFixtureMixin, TestCase):
    def _data(self, **extra):
        data = {
            "country_code": "+91",
            "contact_no": "9844444444",
            "name": "Meera",
            "gender": "female",
            "source": "instagram",
            "enquiry_type": "hot",
            "enquiry_status": "pending",
            "details": [
                {"category": "service", "name": "Bridal makeup"},
                {"category": "membership-package", "name": "Gold", "reference_id": "GOLD-1"},
            ],
            "advance_amount": D("0"),
        }
        data.update(extra)
        return data

    def test_create_resolves_customer_and_stores_details(self):
        result = create_enquiry(store_id=self.store.id, data=self._data())

        self.assertTrue(result.is_new_customer)
        self.assertEqual(result.customer.phone_number, "+919844444444")
        self.assertEqual(result.customer.name, "Meera")
        self.assertEqual(result.enquiry.details.count(), 2)
        self.assertFalse(WalletHistoryEntry.objects.filter(customer=result.customer).exists())

    def test_advance_is_credited_against_the_enquiry(self):
        result = create_enquiry(store_id=self.store.id, data=self._data(advance_amount=D("1000")))

        self.assertEqual(result.customer.advance_amount, D("1000.00"))
        entry = WalletHistoryEntry.objects.get(customer=result.customer)
        self.assertEqual(entry.reference_type, WalletHistoryEntry.REF_ENQUIRY)
        self.assertEqual(entry.reference_id, result.enquiry.id)
        self.assertEqual(Enquiry.objects.count(), 1)
