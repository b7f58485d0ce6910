import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from billing.models import Bill, HeldBill
from billing.services.billing_transaction import save_bill
from billing.services.exceptions import DuplicateIdempotencyKey, HeldBillNotFound
from billing.services.held_bill_service import (
    UNKNOWN_CUSTOMER,
    best_effort,
    discard_held_bill,
    get_held_bill,
    hold_bill,
    list_held_bills,
)
from billing.tests.helpers import BillingFixtureMixin, bill_line
from customers.models import Customer, WalletHistoryEntry

D = Decimal


class BestEffortTests(TestCase):
    def test_returns_value(self):
        self.assertEqual(best_effort(lambda: 42, default=0, label="answer"), 42)

    def test_failure_returns_default(self):
        def boom():
            raise RuntimeError("nope")

        with self.assertLogs("billing.services.held_bill_service", level="WARNING"):
            self.assertIsNone(best_effort(boom, default=None, label="boom"))


class HoldBillTests(BillingFixtureMixin, TestCase):
    def _draft(self, **extra):
        payload = {
            "customer_id": self.customer.id,
            "items": [bill_line(self.haircut, cgst="9", sgst="9")],
            "discount": D("0"),
            "payment_mode": "none",
            "payments": [],
        }
        payload.update(extra)
        return payload

    def test_hold_stores_estimate_and_summary(self):
        self.customer.name = "Ravi"
        self.customer.save()

        held = hold_bill(store_id=self.store.id, payload=self._draft(), acting_user=self.user)

        self.assertEqual(held.amount_estimate, D("590.00"))
        self.assertEqual(held.customer_summary, "Ravi (+919800000001)")
        self.assertEqual(held.created_by, self.user)

    def test_hold_never_touches_ledger_or_bills(self):
        hold_bill(store_id=self.store.id, payload=self._draft())

        self.assertEqual(Bill.objects.count(), 0)
        self.assertEqual(WalletHistoryEntry.objects.count(), 0)

    def test_estimate_failure_still_holds(self):
        broken = self._draft(items=[{**bill_line(self.haircut), "id": uuid.uuid4()}])

        held = hold_bill(store_id=self.store.id, payload=broken)

        self.assertIsNone(held.amount_estimate)
        self.assertTrue(HeldBill.objects.filter(pk=held.pk).exists())

    def test_inline_customer_is_summarised_not_created(self):
        draft = self._draft(customer={"name": "Meera", "contact_no": "+919833333333"})
        draft.pop("customer_id")

        held = hold_bill(store_id=self.store.id, payload=draft)

        self.assertEqual(held.customer_summary, "Meera (+919833333333)")
        self.assertEqual(held.amount_estimate, D("590.00"))
        self.assertFalse(Customer.objects.filter(phone_number="+919833333333").exists())

    def test_unknown_customer_summary(self):
        draft = self._draft(customer_id=uuid.uuid4())

        held = hold_bill(store_id=self.store.id, payload=draft)

        self.assertEqual(held.customer_summary, UNKNOWN_CUSTOMER)
        self.assertIsNone(held.amount_estimate)

    def test_raw_payload_is_stored_verbatim(self):
        raw = {"customer_id": str(self.customer.id), "items": [], "note": "window seat"}

        held = hold_bill(store_id=self.store.id, payload=self._draft(), raw_payload=raw)

        self.assertEqual(HeldBill.objects.get(pk=held.pk).payload, raw)

    def test_duplicate_idempotency_key(self):
        hold_bill(store_id=self.store.id, payload=self._draft(), idempotency_key="h-1")
        with self.assertRaises(DuplicateIdempotencyKey):
            hold_bill(store_id=self.store.id, payload=self._draft(), idempotency_key="h-1")

    def test_held_bill_is_immutable(self):
        held = hold_bill(store_id=self.store.id, payload=self._draft())
        held.customer_summary = "changed"
        with self.assertRaises(ValidationError):
            held.save()

    def test_get_returns_suggested_invoice_number(self):
        held = hold_bill(store_id=self.store.id, payload=self._draft())

        resumable = get_held_bill(store_id=self.store.id, held_id=held.id)

        self.assertEqual(resumable.held.pk, held.pk)
        self.assertTrue(resumable.suggested_invoice_number.startswith("INV"))
        self.assertEqual(len(resumable.suggested_invoice_number), 20)

    def test_get_from_another_store_is_not_found(self):
        held = hold_bill(store_id=self.store.id, payload=self._draft())
        with self.assertRaises(HeldBillNotFound):
            get_held_bill(store_id=self.other_store.id, held_id=held.id)

    def test_list_is_store_scoped(self):
        hold_bill(store_id=self.store.id, payload=self._draft())
        hold_bill(store_id=self.store.id, payload=self._draft())

        self.assertEqual(list_held_bills(store_id=self.store.id).count(), 2)
        self.assertEqual(list_held_bills(store_id=self.other_store.id).count(), 0)

    def test_discard(self):
        held = hold_bill(store_id=self.store.id, payload=self._draft())

        discard_held_bill(store_id=self.store.id, held_id=held.id)

        self.assertFalse(HeldBill.objects.filter(pk=held.pk).exists())
        with self.assertRaises(HeldBillNotFound):
            discard_held_bill(store_id=self.store.id, held_id=held.id)

    def test_saving_a_resumed_draft_consumes_it(self):
        held = hold_bill(store_id=self.store.id, payload=self._draft())

        save_bill(store_id=self.store.id, payload=self._payload(held_bill_id=held.id))

        self.assertFalse(HeldBill.objects.filter(pk=held.pk).exists())
        self.assertEqual(Bill.objects.count(), 1)

    def test_unknown_draft_fails_the_save(self):
        with self.assertRaises(HeldBillNotFound):
            save_bill(store_id=self.store.id, payload=self._payload(held_bill_id=uuid.uuid4()))
        self.assertEqual(Bill.objects.count(), 0)
