"""
CUSTOMER LEDGER TESTS

Run with:
    python manage.py test customers -v 2

Invariants exercised:
- advance_amount never goes negative
- advance_amount == sum(wallet history amounts) after any credit/debit sequence
- exactly one history row per movement, sign matches direction
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from unittest import mock

from django.core.exceptions import ValidationError
from django.db.models import Sum
from django.db.models.query import QuerySet
from django.test import TestCase

from billing.services import billing_transaction
from customers.models import Customer, WalletHistoryEntry
from customers.services import ledger
from customers.services.customer_resolver import create_customer
from customers.services.exceptions import (
    CustomerNotFound,
    InsufficientBalance,
    InvalidLedgerAmount,
    MissingPhoneNumber,
)
from store.models import Store


def _history_sum(customer) -> Decimal:
    total = WalletHistoryEntry.objects.filter(customer=customer).aggregate(
        total=Sum("amount")
    )["total"]
    return total or Decimal("0.00")


class LedgerPrimitiveTests(TestCase):
    def setUp(self):
        self.store = Store.objects.create(name="Main Salon")
        self.customer = create_customer(
            store_id=self.store.id, phone_number="+919800000001", profile={"name": "Asha"}
        )

    # =====================================================
    # CREDIT
    # =====================================================

    def test_credit_increases_balance_and_writes_positive_entry(self):
        ref = uuid.uuid4()
        movement = ledger.credit(
            customer_id=self.customer.id,
            amount="250.00",
            reference_type=WalletHistoryEntry.REF_APPOINTMENT,
            reference_id=ref,
            description="Advance payment for appointment",
        )

        self.customer.refresh_from_db()
        self.assertEqual(self.customer.advance_amount, Decimal("250.00"))
        self.assertEqual(movement.balance, Decimal("250.00"))
        self.assertEqual(movement.entry.amount, Decimal("250.00"))
        self.assertEqual(movement.entry.transaction_type, WalletHistoryEntry.TYPE_CREDIT)
        self.assertEqual(movement.entry.reference_id, ref)

    def test_credit_rejects_non_positive_amount(self):
        for bad in ("0", "-5", None):
            with self.assertRaises(InvalidLedgerAmount):
                ledger.credit(
                    customer_id=self.customer.id,
                    amount=bad,
                    reference_type=WalletHistoryEntry.REF_ADJUSTMENT,
                )
        self.assertEqual(WalletHistoryEntry.objects.count(), 0)

    def test_credit_unknown_customer(self):
        with self.assertRaises(CustomerNotFound):
            ledger.credit(
                customer_id=uuid.uuid4(),
                amount="10",
                reference_type=WalletHistoryEntry.REF_ADJUSTMENT,
            )

    def test_credit_respects_store_scope(self):
        other = Store.objects.create(name="Other")
        with self.assertRaises(CustomerNotFound):
            ledger.credit(
                customer_id=self.customer.id,
                amount="10",
                reference_type=WalletHistoryEntry.REF_ADJUSTMENT,
                store_id=other.id,
            )

    # =====================================================
    # DEBIT
    # =====================================================

    def test_debit_decreases_balance_and_writes_negative_entry(self):
        ledger.credit(
            customer_id=self.customer.id,
            amount="1000",
            reference_type=WalletHistoryEntry.REF_BOOKING,
        )
        movement = ledger.debit(customer_id=self.customer.id, amount="800")

        self.customer.refresh_from_db()
        self.assertEqual(self.customer.advance_amount, Decimal("200.00"))
        self.assertEqual(movement.entry.amount, Decimal("-800.00"))
        self.assertEqual(movement.entry.transaction_type, WalletHistoryEntry.TYPE_DEBIT)
        self.assertEqual(movement.entry.reference_type, WalletHistoryEntry.REF_BILL)

    def test_debit_of_exact_balance_leaves_zero(self):
        ledger.credit(
            customer_id=self.customer.id,
            amount="60",
            reference_type=WalletHistoryEntry.REF_ENQUIRY,
        )
        ledger.debit(customer_id=self.customer.id, amount="60")

        self.customer.refresh_from_db()
        self.assertEqual(self.customer.advance_amount, Decimal("0.00"))

    def test_debit_more_than_balance_fails_without_side_effects(self):
        ledger.credit(
            customer_id=self.customer.id,
            amount="50",
            reference_type=WalletHistoryEntry.REF_APPOINTMENT,
        )

        with self.assertRaises(InsufficientBalance) as ctx:
            ledger.debit(customer_id=self.customer.id, amount="75")

        self.assertEqual(ctx.exception.available, Decimal("50.00"))
        self.assertEqual(ctx.exception.required, Decimal("75.00"))
        self.assertIn("Available: 50.00, Required: 75.00", str(ctx.exception))

        self.customer.refresh_from_db()
        self.assertEqual(self.customer.advance_amount, Decimal("50.00"))
        self.assertEqual(WalletHistoryEntry.objects.filter(customer=self.customer).count(), 1)

    def test_debit_rejects_non_positive_amount(self):
        with self.assertRaises(InvalidLedgerAmount):
            ledger.debit(customer_id=self.customer.id, amount="0")

    # =====================================================
    # ADJUST / READS
    # =====================================================

    def test_adjust_routes_sign_to_credit_or_debit(self):
        self.assertIsNone(
            ledger.adjust(
                customer_id=self.customer.id,
                delta="0",
                reference_type=WalletHistoryEntry.REF_BOOKING,
            )
        )

        up = ledger.adjust(
            customer_id=self.customer.id,
            delta="300",
            reference_type=WalletHistoryEntry.REF_BOOKING,
        )
        down = ledger.adjust(
            customer_id=self.customer.id,
            delta="-120",
            reference_type=WalletHistoryEntry.REF_BOOKING,
        )

        self.assertEqual(up.entry.transaction_type, WalletHistoryEntry.TYPE_CREDIT)
        self.assertEqual(down.entry.transaction_type, WalletHistoryEntry.TYPE_DEBIT)
        self.assertEqual(
            ledger.get_advance_balance(customer_id=self.customer.id), Decimal("180.00")
        )

    def test_balance_always_equals_history_sum(self):
        steps = [
            ("credit", "500.00"),
            ("debit", "120.50"),
            ("credit", "19.99"),
            ("debit", "75"),
            ("debit", "1000"),  # rejected
            ("credit", "0.01"),
            ("debit", "324.50"),
        ]

        for kind, amount in steps:
            try:
                if kind == "credit":
                    ledger.credit(
                        customer_id=self.customer.id,
                        amount=amount,
                        reference_type=WalletHistoryEntry.REF_ADJUSTMENT,
                    )
                else:
                    ledger.debit(customer_id=self.customer.id, amount=amount)
            except InsufficientBalance:
                pass

            self.customer.refresh_from_db()
            self.assertGreaterEqual(self.customer.advance_amount, Decimal("0.00"))
            self.assertEqual(self.customer.advance_amount, _history_sum(self.customer))

        self.assertEqual(self.customer.advance_amount, Decimal("0.00"))
        self.assertEqual(WalletHistoryEntry.objects.filter(customer=self.customer).count(), 6)

    def test_wallet_history_is_newest_first(self):
        for amount in ("10", "20", "30"):
            ledger.credit(
                customer_id=self.customer.id,
                amount=amount,
                reference_type=WalletHistoryEntry.REF_ADJUSTMENT,
            )

        amounts = [e.amount for e in ledger.get_wallet_history(customer_id=self.customer.id)]
        self.assertEqual(len(amounts), 3)
        self.assertEqual(sorted(amounts), [Decimal("10.00"), Decimal("20.00"), Decimal("30.00")])

    def test_get_advance_balance_unknown_customer(self):
        with self.assertRaises(CustomerNotFound):
            ledger.get_advance_balance(customer_id=uuid.uuid4())


class WalletHistoryImmutabilityTests(TestCase):
    def setUp(self):
        self.store = Store.objects.create(name="Main Salon")
        self.customer = create_customer(store_id=self.store.id, phone_number="+919800000002")
        self.entry = ledger.credit(
            customer_id=self.customer.id,
            amount="40",
            reference_type=WalletHistoryEntry.REF_ADJUSTMENT,
        ).entry

    def test_entry_cannot_be_modified(self):
        self.entry.description = "changed"
        with self.assertRaises(ValidationError):
            self.entry.save()

    def test_entry_cannot_be_deleted(self):
        with self.assertRaises(ValidationError):
            self.entry.delete()

    def test_credit_entry_must_be_positive(self):
        with self.assertRaises(ValidationError):
            WalletHistoryEntry.objects.create(
                customer=self.customer,
                amount=Decimal("-1.00"),
                transaction_type=WalletHistoryEntry.TYPE_CREDIT,
                reference_type=WalletHistoryEntry.REF_ADJUSTMENT,
            )


class ProcessCustomerAndAdvanceTests(TestCase):
    def setUp(self):
        self.store = Store.objects.create(name="Main Salon")

    def test_creates_customer_and_credits_advance_with_reference(self):
        ref = uuid.uuid4()
        result = ledger.process_customer_and_advance(
            store_id=self.store.id,
            data={
                "country_code": "+91",
                "contact_no": "9811112222",
                "customer_name": "Ravi",
                "advance_amount": "300",
            },
            reference_type=WalletHistoryEntry.REF_BOOKING,
            reference_id=ref,
        )

        self.assertTrue(result.is_new_customer)
        self.assertEqual(result.customer.phone_number, "+919811112222")
        self.assertEqual(result.customer.name, "Ravi")
        self.assertEqual(result.customer.advance_amount, Decimal("300.00"))

        entry = result.advance_record.entry
        self.assertEqual(entry.reference_id, ref)
        self.assertEqual(entry.description, f"Advance payment for booking #{ref}")

    def test_existing_customer_is_reused(self):
        existing = create_customer(store_id=self.store.id, phone_number="+919811113333")

        result = ledger.process_customer_and_advance(
            store_id=self.store.id,
            data={"phone_number": "+919811113333"},
            reference_type=WalletHistoryEntry.REF_ENQUIRY,
        )

        self.assertFalse(result.is_new_customer)
        self.assertEqual(result.customer_id, existing.id)
        self.assertIsNone(result.advance_record)

    def test_customer_id_must_belong_to_store(self):
        other = Store.objects.create(name="Other")
        foreign = create_customer(store_id=other.id, phone_number="+919811114444")

        with self.assertRaises(CustomerNotFound):
            ledger.process_customer_and_advance(
                store_id=self.store.id,
                data={"customer_id": foreign.id, "advance_amount": "10"},
                reference_type=WalletHistoryEntry.REF_APPOINTMENT,
            )

    def test_no_customer_information_and_no_advance(self):
        result = ledger.process_customer_and_advance(
            store_id=self.store.id,
            data={},
            reference_type=WalletHistoryEntry.REF_ENQUIRY,
        )
        self.assertIsNone(result.customer)
        self.assertIsNone(result.customer_id)
        self.assertEqual(Customer.objects.count(), 0)

    def test_advance_without_customer_information_is_rejected(self):
        with self.assertRaises(MissingPhoneNumber):
            ledger.process_customer_and_advance(
                store_id=self.store.id,
                data={"advance_amount": "100"},
                reference_type=WalletHistoryEntry.REF_ENQUIRY,
            )


class LedgerLockingTests(TestCase):
    """
    The balance must be read from the row fetched under SELECT ... FOR UPDATE.

    SQLite drops FOR UPDATE from the SQL, so these assert on the queryset
    calls and on lock-time reads rather than on captured queries.
    """

    def setUp(self):
        self.store = Store.objects.create(name="Main Salon")
        self.customer = create_customer(store_id=self.store.id, phone_number="+919800000001")
        ledger.credit(
            customer_id=self.customer.id,
            amount="100.00",
            reference_type=WalletHistoryEntry.REF_ADJUSTMENT,
        )

    def _locked_models(self, fn):
        original = QuerySet.select_for_update
        with mock.patch.object(
            QuerySet, "select_for_update", autospec=True, side_effect=original
        ) as spy:
            fn()
        return [call.args[0].model for call in spy.call_args_list]

    def test_debit_locks_the_customer_row(self):
        models = self._locked_models(
            lambda: ledger.debit(customer_id=self.customer.id, amount="10.00")
        )
        self.assertIn(Customer, models)

    def test_credit_locks_the_customer_row(self):
        models = self._locked_models(
            lambda: ledger.credit(
                customer_id=self.customer.id,
                amount="10.00",
                reference_type=WalletHistoryEntry.REF_ADJUSTMENT,
            )
        )
        self.assertIn(Customer, models)

    def test_debit_checks_the_balance_seen_at_lock_time(self):
        original = ledger.lock_customer

        def lock_after_concurrent_spend(**kwargs):
            # another transaction commits a spend just before our lock is granted
            Customer.objects.filter(pk=self.customer.pk).update(advance_amount=Decimal("30.00"))
            return original(**kwargs)

        with mock.patch.object(ledger, "lock_customer", side_effect=lock_after_concurrent_spend):
            with self.assertRaises(InsufficientBalance) as ctx:
                ledger.debit(customer_id=self.customer.id, amount="60.00")

        self.assertEqual(ctx.exception.available, Decimal("30.00"))
        self.assertEqual(
            Customer.objects.get(pk=self.customer.pk).advance_amount, Decimal("30.00")
        )

    def test_bill_save_locks_the_customer_before_pricing(self):
        calls = []
        original = ledger.lock_customer

        def record(**kwargs):
            calls.append(kwargs["customer_id"])
            return original(**kwargs)

        with mock.patch.object(ledger, "lock_customer", side_effect=record), mock.patch.object(
            billing_transaction, "price_lines", side_effect=ValueError("stop")
        ):
            with self.assertRaises(ValueError):
                billing_transaction.save_bill(
                    store_id=self.store.id,
                    payload={"customer_id": self.customer.id, "items": []},
                )

        self.assertEqual(calls, [self.customer.id])
