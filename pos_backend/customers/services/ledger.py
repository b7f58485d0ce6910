# customers/services/ledger.py

"""
CUSTOMER ADVANCE LEDGER (CHOKE-POINT)

The ONLY code allowed to change Customer.advance_amount.

Callers:
- billing        (debit for advance-mode payments, credit for overpayment)
- appointments   (credit upfront advance, +/- on edits)
- bookings       (credit upfront advance, +/- on edits / customer change)
- enquiries      (credit upfront advance)

GUARANTEES:
- Every movement locks the customer row (SELECT ... FOR UPDATE) before reading
  the balance, so two concurrent debits cannot both pass the sufficiency check.
- Every movement writes exactly one WalletHistoryEntry with matching sign/magnitude.
- advance_amount never goes negative.
- Runs inside the caller's transaction (nested atomic = savepoint); any failure
  rolls back with the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction

from customers.models import Customer, WalletHistoryEntry
from customers.services.customer_resolver import resolve_record_customer
from customers.services.exceptions import (
    CustomerNotFound,
    InsufficientBalance,
    InvalidLedgerAmount,
    MissingPhoneNumber,
)

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def _money(v) -> Decimal:
    if v is None or v == "":
        return ZERO
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _positive_amount(amount) -> Decimal:
    value = _money(amount)
    if value <= ZERO:
        raise InvalidLedgerAmount(f"Ledger amount must be > 0 (got {value})")
    return value


def _actor(acting_user):
    return acting_user if getattr(acting_user, "pk", None) else None


def lock_customer(*, customer_id, store_id=None) -> Customer:
    """SELECT ... FOR UPDATE on the customer row. Must run inside a transaction."""
    qs = Customer.objects.select_for_update()
    if store_id is not None:
        qs = qs.filter(store_id=store_id)

    try:
        return qs.get(pk=customer_id)
    except Customer.DoesNotExist as exc:
        raise CustomerNotFound(f"Customer not found: {customer_id}") from exc


@dataclass(frozen=True)
class LedgerMovement:
    entry: WalletHistoryEntry
    balance: Decimal


# =====================================================
# PRIMITIVES
# =====================================================


@transaction.atomic
def credit(
    *,
    customer_id,
    amount,
    reference_type: str,
    reference_id=None,
    description: str = "",
    acting_user=None,
    store_id=None,
) -> LedgerMovement:
    value = _positive_amount(amount)
    customer = lock_customer(customer_id=customer_id, store_id=store_id)

    customer.advance_amount = _money(customer.advance_amount) + value
    customer.save(update_fields=["advance_amount", "updated_at"])

    entry = WalletHistoryEntry.objects.create(
        customer=customer,
        amount=value,
        transaction_type=WalletHistoryEntry.TYPE_CREDIT,
        reference_type=reference_type,
        reference_id=reference_id,
        description=description,
        created_by=_actor(acting_user),
    )

    logger.info(
        "Advance credited",
        extra={
            "customer_id": str(customer.id),
            "amount": str(value),
            "balance": str(customer.advance_amount),
            "reference_type": reference_type,
            "reference_id": str(reference_id) if reference_id else None,
        },
    )
    return LedgerMovement(entry=entry, balance=customer.advance_amount)


@transaction.atomic
def debit(
    *,
    customer_id,
    amount,
    reference_id=None,
    reference_type: str = WalletHistoryEntry.REF_BILL,
    description: str = "",
    acting_user=None,
    store_id=None,
) -> LedgerMovement:
    value = _positive_amount(amount)

    # Balance is read under the row lock, never trusted from an earlier read.
    customer = lock_customer(customer_id=customer_id, store_id=store_id)
    available = _money(customer.advance_amount)

    if value > available:
        logger.warning(
            "Advance debit rejected: insufficient balance",
            extra={
                "customer_id": str(customer.id),
                "available": str(available),
                "required": str(value),
            },
        )
        raise InsufficientBalance(available=available, required=value)

    customer.advance_amount = available - value
    customer.save(update_fields=["advance_amount", "updated_at"])

    entry = WalletHistoryEntry.objects.create(
        customer=customer,
        amount=-value,
        transaction_type=WalletHistoryEntry.TYPE_DEBIT,
        reference_type=reference_type,
        reference_id=reference_id,
        description=description,
        created_by=_actor(acting_user),
    )

    logger.info(
        "Advance debited",
        extra={
            "customer_id": str(customer.id),
            "amount": str(value),
            "balance": str(customer.advance_amount),
            "reference_type": reference_type,
            "reference_id": str(reference_id) if reference_id else None,
        },
    )
    return LedgerMovement(entry=entry, balance=customer.advance_amount)


def adjust(
    *,
    customer_id,
    delta,
    reference_type: str,
    reference_id=None,
    description: str = "",
    acting_user=None,
    store_id=None,
) -> LedgerMovement | None:
    """Signed convenience over credit/debit. Zero delta is a no-op."""
    value = _money(delta)
    if value == ZERO:
        return None

    if value > ZERO:
        return credit(
            customer_id=customer_id,
            amount=value,
            reference_type=reference_type,
            reference_id=reference_id,
            description=description,
            acting_user=acting_user,
            store_id=store_id,
        )

    return debit(
        customer_id=customer_id,
        amount=-value,
        reference_type=reference_type,
        reference_id=reference_id,
        description=description,
        acting_user=acting_user,
        store_id=store_id,
    )


# =====================================================
# READS
# =====================================================


def get_advance_balance(*, customer_id) -> Decimal:
    value = (
        Customer.objects.filter(pk=customer_id)
        .values_list("advance_amount", flat=True)
        .first()
    )
    if value is None:
        raise CustomerNotFound(f"Customer not found: {customer_id}")
    return _money(value)


def get_wallet_history(*, customer_id):
    return WalletHistoryEntry.objects.filter(customer_id=customer_id).order_by(
        "-created_at", "-id"
    )


# =====================================================
# SHARED ENTRY POINT (appointments / bookings / enquiries)
# =====================================================


@dataclass(frozen=True)
class AdvanceResult:
    customer_id: object
    customer: Customer | None
    is_new_customer: bool
    advance_record: LedgerMovement | None


def advance_description(reference_type: str, reference_id=None) -> str:
    if reference_id:
        return f"Advance payment for {reference_type} #{reference_id}"
    return f"Advance payment for {reference_type}"


@transaction.atomic
def process_customer_and_advance(
    *,
    store_id,
    data: dict,
    reference_type: str,
    reference_id=None,
    acting_user=None,
) -> AdvanceResult:
    """
    Resolve (or create) the customer for a front-desk record, then credit any
    upfront advance against it.

    data keys:
    - customer_id, or phone_number, or country_code + contact_no
    - name / customer_name, gender, email, address, birthday, anniversary
    - advance_amount (optional; credited only when > 0)

    reference_id should be the id the record WILL have; the history row is
    written with it and never patched afterwards.
    """
    resolved = resolve_record_customer(store_id=store_id, data=data, acting_user=acting_user)
    customer = resolved.customer if resolved is not None else None
    is_new_customer = resolved.is_new_customer if resolved is not None else False

    advance = _money(data.get("advance_amount"))
    advance_record = None

    if advance > ZERO:
        if customer is None:
            raise MissingPhoneNumber("Phone number information is required")

        advance_record = credit(
            customer_id=customer.id,
            amount=advance,
            reference_type=reference_type,
            reference_id=reference_id,
            description=advance_description(reference_type, reference_id),
            acting_user=acting_user,
            store_id=store_id,
        )
        customer.advance_amount = advance_record.balance

    return AdvanceResult(
        customer_id=customer.id if customer is not None else None,
        customer=customer,
        is_new_customer=is_new_customer,
        advance_record=advance_record,
    )
