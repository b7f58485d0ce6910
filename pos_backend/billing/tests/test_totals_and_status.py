import datetime
from decimal import Decimal

from django.test import SimpleTestCase, override_settings

from billing.services.bill_totals import aggregate_totals
from billing.services.invoice_number import generate_invoice_number
from billing.services.payment_status import resolve_payment_status
from billing.services.tax_calculator import (
    CatalogPricing,
    DirectPricing,
    Discount,
    price_line,
)

D = Decimal


def _lines():
    return [
        price_line(
            pricing=CatalogPricing(unit_price=D("1000"), cgst_rate=D("9"), sgst_rate=D("9")),
            qty=1,
            discount=Discount("percent", D("10")),
        ),
        price_line(
            pricing=DirectPricing(unit_price=D("200"), cgst=D("0.09"), sgst=D("0.09")),
            qty=2,
            discount=Discount(),
        ),
    ]


class BillTotalsTests(SimpleTestCase):
    def test_sums_lines_and_applies_bill_discount_last(self):
        totals = aggregate_totals(_lines(), D("34"))

        self.assertEqual(totals.sub_total, D("1534.00"))
        self.assertEqual(totals.cgst_amount, D("117.00"))
        self.assertEqual(totals.sgst_amount, D("117.00"))
        self.assertEqual(totals.tax_amount, D("234.00"))
        self.assertEqual(totals.discount, D("34.00"))
        self.assertEqual(totals.grand_total, D("1500.00"))

    def test_bill_discount_never_drives_total_negative(self):
        totals = aggregate_totals(_lines(), D("5000"))
        self.assertEqual(totals.discount, D("1534.00"))
        self.assertEqual(totals.grand_total, D("0.00"))

    def test_empty_bill(self):
        totals = aggregate_totals([], D("0"))
        self.assertEqual(totals.grand_total, D("0.00"))


class PaymentStatusTests(SimpleTestCase):
    def test_status_and_dues(self):
        cases = [
            ("1000", "0", "unpaid", "1000.00"),
            ("1000", "400", "partial", "600.00"),
            ("1000", "1000", "paid", "0.00"),
            ("500", "800", "paid", "0.00"),
            ("0", "0", "paid", "0.00"),
        ]
        for total, paid, expected_status, expected_dues in cases:
            with self.subTest(total=total, paid=paid):
                result = resolve_payment_status(D(total), D(paid))
                self.assertEqual(result.status, expected_status)
                self.assertEqual(result.dues, D(expected_dues))


class InvoiceNumberTests(SimpleTestCase):
    FIXED = datetime.datetime(2024, 3, 5, 14, 7, 9, 123456, tzinfo=datetime.timezone.utc)

    @override_settings(TIME_ZONE="UTC")
    def test_shape_from_clock(self):
        number = generate_invoice_number(clock=lambda: self.FIXED)
        self.assertEqual(number, "INV20240305140709123")

    @override_settings(TIME_ZONE="Asia/Kolkata")
    def test_uses_configured_time_zone(self):
        number = generate_invoice_number(clock=lambda: self.FIXED)
        self.assertEqual(number, "INV20240305193709123")

    def test_same_millisecond_gives_same_number(self):
        clock = lambda: self.FIXED  # noqa: E731
        self.assertEqual(generate_invoice_number(clock=clock), generate_invoice_number(clock=clock))
