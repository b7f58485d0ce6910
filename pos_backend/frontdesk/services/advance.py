# frontdesk/services/advance.py

"""
ADVANCE EDITS ON EXISTING RECORDS

When an appointment or booking is edited, the advance it carries may change
amount and/or customer. The difference is moved through the ledger:

- same customer:      adjust by (new - old)   (debit can fail: advance already spent)
- customer changed:   debit old amount from the old customer, credit new amount to the new one
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction

from customers.services import ledger
from customers.services.exceptions import MissingPhoneNumber

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def _money(v) -> Decimal:
    if v is None or v == "":
        return ZERO
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def payable_amount(total, advance) -> Decimal:
    return max(ZERO, _money(total) - _money(advance))


@transaction.atomic
def move_advance(
    *,
    store_id,
    reference_type: str,
    reference_id,
    old_customer_id,
    old_amount,
    new_customer_id,
    new_amount,
    acting_user=None,
) -> list:
    old_amount = _money(old_amount)
    new_amount = _money(new_amount)
    movements = []

    if old_customer_id is not None and old_customer_id == new_customer_id:
        movement = ledger.adjust(
            customer_id=new_customer_id,
            delta=new_amount - old_amount,
            reference_type=reference_type,
            reference_id=reference_id,
            description=f"Advance adjusted for {reference_type} #{reference_id}",
            acting_user=acting_user,
            store_id=store_id,
        )
        if movement is not None:
            movements.append(movement)
        return movements

    if old_customer_id is not None and old_amount > ZERO:
        movements.append(
            ledger.debit(
                customer_id=old_customer_id,
                amount=old_amount,
                reference_type=reference_type,
                reference_id=reference_id,
                description=f"Advance moved off {reference_type} #{reference_id}",
                acting_user=acting_user,
                store_id=store_id,
            )
        )

    if new_amount > ZERO:
        if new_customer_id is None:
            raise MissingPhoneNumber("Phone number information is required")
        movements.append(
            ledger.credit(
                customer_id=new_customer_id,
                amount=new_amount,
                reference_type=reference_type,
                reference_id=reference_id,
                description=ledger.advance_description(reference_type, reference_id),
                acting_user=acting_user,
                store_id=store_id,
            )
        )

    if old_customer_id != new_customer_id:
        logger.info(
            "Advance moved between customers",
            extra={
                "reference_type": reference_type,
                "reference_id": str(reference_id),
                "old_customer_id": str(old_customer_id) if old_customer_id else None,
                "new_customer_id": str(new_customer_id) if new_customer_id else None,
            },
        )
    return movements
