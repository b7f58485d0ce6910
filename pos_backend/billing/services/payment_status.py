# billing/services/payment_status.py

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from billing.models import Bill

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def _money(v) -> Decimal:
    if v is None or v == "":
        return ZERO
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PaymentStatus:
    status: str
    dues: Decimal


def resolve_payment_status(grand_total, paid_amount) -> PaymentStatus:
    """
    dues = max(0, grand_total - paid)
    paid    <=> dues == 0
    partial <=> dues > 0 and paid > 0
    unpaid  otherwise
    """
    total = _money(grand_total)
    paid = _money(paid_amount)
    dues = max(ZERO, total - paid)

    if dues == ZERO:
        status = Bill.STATUS_PAID
    elif paid > ZERO:
        status = Bill.STATUS_PARTIAL
    else:
        status = Bill.STATUS_UNPAID

    return PaymentStatus(status=status, dues=dues)
