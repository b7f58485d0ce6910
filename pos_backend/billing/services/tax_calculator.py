# billing/services/tax_calculator.py

"""
LINE PRICING (PURE)

Two pricing modes, resolved ONCE per line into a tagged value:

CatalogPricing (legacy payloads, no `price` on the line)
- unit price comes from the catalog; cgst/sgst are percentage rates
- exclusive: base = price * qty
- inclusive: base = (price * qty) / (1 + (cgst% + sgst%) / 100)
  so base + tax recombines to the catalog gross before discount

DirectPricing (line carries `price`)
- base = price * qty
- each of cgst/sgst is read by magnitude (TaxInputKind):
    value < 1          FRACTION  (0.09 == 9%)      tax = taxable * value
    1 <= value <= 100  PERCENT   (9 == 9%)         tax = taxable * value / 100
    value > 100        AMOUNT    (pre-computed)    tax = value
  NOTE: the boundary is ambiguous (an absolute 1.00 tax reads as 1%). Kept as-is.

Both modes:
- discount applies to base first: percent = base * v / 100, flat = min(v, base);
  it never exceeds base, so taxable is never negative
- every money field is rounded half-up to 2dp on its own, and
  taxable = base - discount, line_total = taxable + cgst + sgst hold exactly
  on the rounded values
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")

TAX_EXCLUSIVE = "exclusive"
TAX_INCLUSIVE = "inclusive"

DISCOUNT_PERCENT = "percent"
DISCOUNT_FLAT = "flat"


def _money(v) -> Decimal:
    if v is None or v == "":
        return ZERO
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _dec(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0")
    return Decimal(str(v))


# =====================================================
# INPUT TYPES
# =====================================================


class TaxInputKind(str, Enum):
    FRACTION = "fraction"
    PERCENT = "percent"
    AMOUNT = "amount"


def classify_tax_input(value) -> TaxInputKind:
    v = _dec(value)
    if v < 1:
        return TaxInputKind.FRACTION
    if v <= HUNDRED:
        return TaxInputKind.PERCENT
    return TaxInputKind.AMOUNT


@dataclass(frozen=True)
class Discount:
    discount_type: str = DISCOUNT_PERCENT
    value: Decimal = ZERO


@dataclass(frozen=True)
class CatalogPricing:
    unit_price: Decimal
    cgst_rate: Decimal
    sgst_rate: Decimal
    tax_mode: str = TAX_EXCLUSIVE

    mode_name = "catalog"


@dataclass(frozen=True)
class DirectPricing:
    unit_price: Decimal
    cgst: Decimal
    sgst: Decimal

    mode_name = "direct"


@dataclass(frozen=True)
class LineAmounts:
    pricing_mode: str
    unit_price: Decimal
    base_amount: Decimal
    discount_amount: Decimal
    taxable_amount: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    tax_amount: Decimal
    line_total: Decimal
    # audit form of the tax inputs, always percentages
    cgst_rate: Decimal
    sgst_rate: Decimal


def pricing_for_line(*, line: dict, catalog_price, tax_mode: str) -> CatalogPricing | DirectPricing:
    """A line that carries `price` is direct-priced; otherwise the catalog price is used."""
    if line.get("price") is not None:
        return DirectPricing(
            unit_price=_dec(line["price"]),
            cgst=_dec(line.get("cgst")),
            sgst=_dec(line.get("sgst")),
        )

    return CatalogPricing(
        unit_price=_dec(catalog_price),
        cgst_rate=_dec(line.get("cgst")),
        sgst_rate=_dec(line.get("sgst")),
        tax_mode=tax_mode or TAX_EXCLUSIVE,
    )


# =====================================================
# BUILDING BLOCKS
# =====================================================


def discount_amount(*, base: Decimal, discount: Discount) -> Decimal:
    value = _dec(discount.value)
    if discount.discount_type == DISCOUNT_PERCENT:
        raw = base * value / HUNDRED
    elif discount.discount_type == DISCOUNT_FLAT:
        raw = value
    else:
        raise ValueError(f"Invalid discount_type: {discount.discount_type}")

    return min(_money(raw), base)


def tax_from_input(*, value, taxable: Decimal) -> Decimal:
    v = _dec(value)
    kind = classify_tax_input(v)

    if kind is TaxInputKind.FRACTION:
        return _money(taxable * v)
    if kind is TaxInputKind.PERCENT:
        return _money(taxable * v / HUNDRED)
    return _money(v)


def audit_rate(*, value, base_amount: Decimal) -> Decimal:
    """Express a direct-mode tax input as a percentage of the line base."""
    v = _dec(value)
    kind = classify_tax_input(v)

    if kind is TaxInputKind.FRACTION:
        return _money(v * HUNDRED)
    if kind is TaxInputKind.PERCENT:
        return _money(v)
    if base_amount <= ZERO:
        return ZERO
    return _money(v / base_amount * HUNDRED)


# =====================================================
# ENTRY POINT
# =====================================================


def price_line(*, pricing: CatalogPricing | DirectPricing, qty: int, discount: Discount) -> LineAmounts:
    if qty < 1:
        raise ValueError("qty must be at least 1")

    gross = _dec(pricing.unit_price) * qty

    if isinstance(pricing, CatalogPricing):
        cgst_rate = _dec(pricing.cgst_rate)
        sgst_rate = _dec(pricing.sgst_rate)

        if pricing.tax_mode == TAX_INCLUSIVE:
            base = _money(gross / (1 + (cgst_rate + sgst_rate) / HUNDRED))
        elif pricing.tax_mode == TAX_EXCLUSIVE:
            base = _money(gross)
        else:
            raise ValueError(f"Invalid tax mode: {pricing.tax_mode}")

        disc = discount_amount(base=base, discount=discount)
        taxable = base - disc
        cgst = _money(taxable * cgst_rate / HUNDRED)
        sgst = _money(taxable * sgst_rate / HUNDRED)
        audit_cgst = _money(cgst_rate)
        audit_sgst = _money(sgst_rate)

    elif isinstance(pricing, DirectPricing):
        base = _money(gross)
        disc = discount_amount(base=base, discount=discount)
        taxable = base - disc
        cgst = tax_from_input(value=pricing.cgst, taxable=taxable)
        sgst = tax_from_input(value=pricing.sgst, taxable=taxable)
        audit_cgst = audit_rate(value=pricing.cgst, base_amount=base)
        audit_sgst = audit_rate(value=pricing.sgst, base_amount=base)

    else:
        raise TypeError(f"Unsupported pricing: {type(pricing).__name__}")

    return LineAmounts(
        pricing_mode=pricing.mode_name,
        unit_price=_money(pricing.unit_price),
        base_amount=base,
        discount_amount=disc,
        taxable_amount=taxable,
        cgst_amount=cgst,
        sgst_amount=sgst,
        tax_amount=cgst + sgst,
        line_total=taxable + cgst + sgst,
        cgst_rate=audit_cgst,
        sgst_rate=audit_sgst,
    )
