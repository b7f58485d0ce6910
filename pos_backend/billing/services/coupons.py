# billing/services/coupons.py

"""
COUPON DISCOUNT SEAM

Coupon resolution lives outside the billing engine. Until a coupon service is
wired in, every code resolves to no discount; the result is added to the
bill-level discount before totals are computed.
"""

from __future__ import annotations

import logging
from decimal import Decimal

logger = logging.getLogger(__name__)


def resolve_coupon_discount(*, store_id, customer_id, coupon_codes, order_amount) -> Decimal:
    if coupon_codes:
        logger.debug(
            "Coupon codes supplied; no coupon provider configured",
            extra={"store_id": str(store_id), "coupon_codes": list(coupon_codes)},
        )
    return Decimal("0.00")
