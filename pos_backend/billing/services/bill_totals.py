# billing/services/bill_totals.py

"""
BILL TOTALS (PURE)

- sub_total   = sum(line_total)            (lines already discounted + taxed)
- cgst / sgst = sum of the per-line amounts
- discount    = min(bill_discount, sub_total)   post-tax rebate, applied last
- grand_total = max(0, sub_total - discount)
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from billing.services.tax_calculator import LineAmounts

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def _money(v) -> Decimal:
    if v is None or v == "":
        return ZERO
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class BillTotals:
    sub_total: Decimal
    discount: Decimal
    tax_amount: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    grand_total: Decimal


def aggregate_totals(lines: Iterable[LineAmounts], bill_discount=ZERO) -> BillTotals:
    lines = list(lines)

    sub_total = _money(sum((ln.line_total for ln in lines), ZERO))
    cgst = _money(sum((ln.cgst_amount for ln in lines), ZERO))
    sgst = _money(sum((ln.sgst_amount for ln in lines), ZERO))

    requested = max(_money(bill_discount), ZERO)
    discount = min(requested, sub_total)

    return BillTotals(
        sub_total=sub_total,
        discount=discount,
        tax_amount=cgst + sgst,
        cgst_amount=cgst,
        sgst_amount=sgst,
        grand_total=max(ZERO, sub_total - discount),
    )
