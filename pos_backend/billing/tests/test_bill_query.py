import uuid
from decimal import Decimal

from django.test import TestCase

from billing.models import Bill
from billing.services.bill_query import (
    customer_bill_summary,
    get_bill,
    soft_delete_bills,
    store_bills,
)
from billing.services.billing_transaction import save_bill
from billing.services.exceptions import BillNotFound
from billing.tests.helpers import BillingFixtureMixin, payment_line
from customers.models import Customer

D = Decimal


class BillQueryTests(BillingFixtureMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.paid = save_bill(store_id=self.store.id, payload=self._payload()).bill
        self.partial = save_bill(
            store_id=self.store.id, payload=self._payload(payments=[payment_line("cash", "100")])
        ).bill

    def test_get_bill_is_store_scoped(self):
        self.assertEqual(get_bill(store_id=self.store.id, bill_id=self.paid.id).pk, self.paid.pk)
        with self.assertRaises(BillNotFound):
            get_bill(store_id=self.other_store.id, bill_id=self.paid.id)

    def test_customer_summary(self):
        summary = customer_bill_summary(store_id=self.store.id, customer_id=self.customer.id)

        self.assertEqual(summary["total_bills"], 2)
        self.assertEqual(summary["total_billed"], D("1000.00"))
        self.assertEqual(summary["total_paid"], D("600.00"))
        self.assertEqual(summary["total_dues"], D("400.00"))
        self.assertEqual(summary["bills_with_dues"], 1)

    def test_soft_delete_hides_bill_and_keeps_ledger(self):
        overpaid = save_bill(
            store_id=self.store.id, payload=self._payload(payments=[payment_line("cash", "700")])
        ).bill
        missing = uuid.uuid4()

        result = soft_delete_bills(
            store_id=self.store.id, bill_ids=[overpaid.id, missing], acting_user=self.user
        )

        self.assertEqual(result["deleted"], [str(overpaid.id)])
        self.assertEqual(result["not_found"], [str(missing)])

        overpaid.refresh_from_db()
        self.assertEqual(overpaid.status, Bill.STATUS_DELETED)
        self.assertIsNotNone(overpaid.deleted_at)
        self.assertEqual(overpaid.deleted_by, self.user)

        self.assertNotIn(overpaid.pk, store_bills(store_id=self.store.id).values_list("pk", flat=True))
        self.assertIn(
            overpaid.pk,
            store_bills(store_id=self.store.id, include_deleted=True).values_list("pk", flat=True),
        )
        # the 200 excess credited by the bill stays with the customer
        self.assertEqual(Customer.objects.get(pk=self.customer.pk).advance_amount, D("200.00"))

    def test_deleted_bill_cannot_change(self):
        soft_delete_bills(store_id=self.store.id, bill_ids=[self.paid.id])
        bill = Bill.objects.get(pk=self.paid.pk)
        bill.status = Bill.STATUS_PAID
        with self.assertRaises(ValueError):
            bill.save()

    def test_other_store_bills_are_not_deleted(self):
        result = soft_delete_bills(store_id=self.other_store.id, bill_ids=[self.paid.id])
        self.assertEqual(result["deleted"], [])
        self.assertEqual(Bill.objects.get(pk=self.paid.pk).status, Bill.STATUS_PAID)
