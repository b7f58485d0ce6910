# billing/services/billing_transaction.py

"""
BILLING TRANSACTION (APPLICATION SERVICE)

Purpose:
- Turn a validated bill payload into a persisted Bill with items and payments.
- Fund advance-mode payment lines from the customer's advance balance.
- Route any overpayment back into the customer's advance balance.

Flow (strictly sequential, one DB transaction):
 1. resolve customer (customer_id must belong to the store; inline details find-or-create)
 2. resolve store tax mode (Store.tax_billing, else BILLING_DEFAULT_TAX_MODE)
 3. price each line against the store catalog
 4. aggregate totals (bill discount + coupon discount applied post-tax)
 5. issue invoice number, insert Bill with the declared payment_amount as provisional paid
 6. insert BillItems
 7. reconcile payments in order; advance lines debit the ledger under a row lock
 8. credit collected - grand_total (if positive) back to the customer's advance
 9. finalize paid_amount = collected, recompute dues/status
10. consume the held draft (if any), flag the appointment (if any) as billed

Hard rules:
- Any failure rolls back EVERYTHING: no bill, item, payment or ledger row survives.
- Insufficient advance on any line refuses the whole bill (AdvancePaymentFailed).
- Duplicate idempotency keys are caught by the unique constraint, not by a pre-read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from billing.models import Bill, BillItem, BillPayment, HeldBill
from billing.services.bill_totals import BillTotals, aggregate_totals
from billing.services.coupons import resolve_coupon_discount
from billing.services.exceptions import (
    AdvancePaymentFailed,
    CatalogItemNotFound,
    DuplicateIdempotencyKey,
    HeldBillNotFound,
    StoreNotFound,
)
from billing.services.invoice_number import generate_invoice_number
from billing.services.payment_status import resolve_payment_status
from billing.services.tax_calculator import (
    Discount,
    LineAmounts,
    TAX_EXCLUSIVE,
    price_line,
    pricing_for_line,
)
from catalog.services.lookup import find_catalog_item
from customers.models import Customer, WalletHistoryEntry
from customers.services import ledger
from customers.services.customer_resolver import (
    ResolvedCustomer,
    find_or_create_customer,
    get_store_customer,
)
from customers.services.exceptions import InsufficientBalance
from frontdesk.services.appointments import mark_appointment_billed
from store.models import Store

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")

ADVANCE_REFERENCE_DEFAULT = "Advance deduction"


def _money(v) -> Decimal:
    if v is None or v == "":
        return ZERO
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _actor(acting_user):
    return acting_user if getattr(acting_user, "pk", None) else None


@dataclass(frozen=True)
class PricedLine:
    line: dict
    name: str
    amounts: LineAmounts


@dataclass(frozen=True)
class SavedBill:
    bill: Bill
    customer: Customer
    is_new_customer: bool
    items: list
    payments: list
    totals: BillTotals
    excess_amount_added_to_advance: Decimal | None


# =====================================================
# STEPS 1-4 (shared with held-bill estimation)
# =====================================================


def get_store(*, store_id) -> Store:
    try:
        return Store.objects.get(id=store_id)
    except Store.DoesNotExist as exc:
        raise StoreNotFound("Store not found") from exc


def resolve_tax_mode(store: Store) -> str:
    mode = (store.tax_billing or "").strip().lower()
    if mode:
        return mode
    return getattr(settings, "BILLING_DEFAULT_TAX_MODE", TAX_EXCLUSIVE) or TAX_EXCLUSIVE


def inline_customer_details(payload: dict) -> dict | None:
    return payload.get("customer") or payload.get("customer_details") or None


def resolve_bill_customer(*, store_id, payload: dict, acting_user=None) -> ResolvedCustomer:
    customer_id = payload.get("customer_id")
    if customer_id:
        customer = get_store_customer(store_id=store_id, customer_id=customer_id)
        return ResolvedCustomer(customer=customer, is_new_customer=False)

    details = inline_customer_details(payload) or {}
    # Inline customers carry the full E.164 number in contact_no.
    data = {**details, "phone_number": details.get("contact_no")}
    return find_or_create_customer(store_id=store_id, data=data, acting_user=acting_user)


def price_lines(*, store_id, items, tax_mode: str) -> list[PricedLine]:
    priced = []
    for line in items:
        item_type = line["type"]
        catalog_item = find_catalog_item(
            store_id=store_id, item_type=item_type, catalog_id=line["id"]
        )
        if catalog_item is None:
            raise CatalogItemNotFound(f"{item_type} not found: {line['id']}")

        pricing = pricing_for_line(
            line=line, catalog_price=catalog_item.price, tax_mode=tax_mode
        )
        amounts = price_line(
            pricing=pricing,
            qty=int(line.get("qty") or 1),
            discount=Discount(
                discount_type=line.get("discount_type") or "percent",
                value=_money(line.get("discount_value")),
            ),
        )
        priced.append(PricedLine(line=line, name=catalog_item.name, amounts=amounts))

    return priced


def compute_totals(*, store_id, customer_id, payload: dict, lines: list[PricedLine]) -> BillTotals:
    coupon_codes = list(payload.get("coupon_codes") or [])
    if payload.get("coupon_code"):
        coupon_codes.append(payload["coupon_code"])

    provisional = aggregate_totals((pl.amounts for pl in lines), ZERO)
    coupon_discount = resolve_coupon_discount(
        store_id=store_id,
        customer_id=customer_id,
        coupon_codes=coupon_codes,
        order_amount=provisional.sub_total,
    )

    return aggregate_totals(
        (pl.amounts for pl in lines),
        _money(payload.get("discount")) + _money(coupon_discount),
    )


# =====================================================
# STEPS 5-9
# =====================================================


def _insert_bill(*, store, customer, payload, totals, invoice_number, idempotency_key, acting_user) -> Bill:
    declared = _money(payload.get("payment_amount"))
    provisional = resolve_payment_status(totals.grand_total, declared)

    try:
        with transaction.atomic():
            return Bill.objects.create(
                store=store,
                customer=customer,
                invoice_number=invoice_number,
                coupon_code=payload.get("coupon_code") or "",
                coupon_codes=list(payload.get("coupon_codes") or []),
                referral_code=payload.get("referral_code") or "",
                sub_total=totals.sub_total,
                discount=totals.discount,
                tax_amount=totals.tax_amount,
                cgst_amount=totals.cgst_amount,
                sgst_amount=totals.sgst_amount,
                grand_total=totals.grand_total,
                paid_amount=declared,
                dues=provisional.dues,
                status=provisional.status,
                payment_mode=payload["payment_mode"],
                payment_amount=declared,
                billing_timestamp=payload["billing_timestamp"],
                payment_timestamp=payload.get("payment_timestamp"),
                appointment_id=payload.get("appointment_id"),
                idempotency_key=idempotency_key or None,
                created_by=_actor(acting_user),
            )
    except IntegrityError as exc:
        if idempotency_key and Bill.objects.filter(idempotency_key=idempotency_key).exists():
            logger.warning(
                "Bill rejected: duplicate idempotency key",
                extra={"store_id": str(store.id), "idempotency_key": idempotency_key},
            )
            raise DuplicateIdempotencyKey(
                "Bill already exists with this idempotency key"
            ) from exc
        raise


def _insert_items(*, bill: Bill, lines: list[PricedLine]) -> list[BillItem]:
    items = []
    for pl in lines:
        a = pl.amounts
        items.append(
            BillItem.objects.create(
                bill=bill,
                line_no=pl.line["line_no"],
                item_type=pl.line["type"],
                catalog_id=pl.line["id"],
                name=pl.name,
                staff_id=pl.line.get("staff_id"),
                qty=int(pl.line.get("qty") or 1),
                discount_type=pl.line.get("discount_type") or "percent",
                discount_value=_money(pl.line.get("discount_value")),
                cgst_rate=a.cgst_rate,
                sgst_rate=a.sgst_rate,
                pricing_mode=a.pricing_mode,
                unit_price=a.unit_price,
                base_amount=a.base_amount,
                discount_amount=a.discount_amount,
                taxable_amount=a.taxable_amount,
                cgst_amount=a.cgst_amount,
                sgst_amount=a.sgst_amount,
                tax_amount=a.tax_amount,
                line_total=a.line_total,
            )
        )
    return items


def _payment_timestamp(payment: dict):
    return payment.get("payment_timestamp") or payment.get("timestamp")


def _reconcile_payments(*, bill: Bill, customer: Customer, payments, acting_user) -> tuple[list[BillPayment], Decimal]:
    rows = []
    collected = ZERO

    for payment in payments:
        amount = _money(payment["amount"])
        mode = payment["mode"]
        wallet_entry = None

        if mode == BillPayment.MODE_ADVANCE:
            try:
                movement = ledger.debit(
                    customer_id=customer.id,
                    amount=amount,
                    reference_type=WalletHistoryEntry.REF_BILL,
                    reference_id=bill.id,
                    description=f"Advance used for bill {bill.invoice_number}",
                    acting_user=acting_user,
                    store_id=bill.store_id,
                )
            except InsufficientBalance as exc:
                raise AdvancePaymentFailed(
                    available=exc.available, required=exc.required
                ) from exc
            wallet_entry = movement.entry
            reference = payment.get("reference") or ADVANCE_REFERENCE_DEFAULT
        else:
            reference = payment.get("reference") or ""

        rows.append(
            BillPayment.objects.create(
                bill=bill,
                mode=mode,
                amount=amount,
                reference=reference,
                timestamp=_payment_timestamp(payment),
                wallet_entry=wallet_entry,
            )
        )
        collected += amount

    return rows, collected


def _consume_held_bill(*, store_id, held_bill_id):
    deleted, _ = HeldBill.objects.filter(id=held_bill_id, store_id=store_id).delete()
    if not deleted:
        raise HeldBillNotFound("Held bill not found")


@transaction.atomic
def save_bill(
    *,
    store_id,
    payload: dict,
    acting_user=None,
    idempotency_key: str | None = None,
    clock=timezone.now,
) -> SavedBill:
    store = get_store(store_id=store_id)

    # 1. customer
    resolved = resolve_bill_customer(store_id=store.id, payload=payload, acting_user=acting_user)
    customer = resolved.customer

    # Lock before the bill insert (its FK takes KEY SHARE on the customer row).
    ledger.lock_customer(customer_id=customer.id, store_id=store.id)

    # 2-4. pricing + totals
    tax_mode = resolve_tax_mode(store)
    lines = price_lines(store_id=store.id, items=payload["items"], tax_mode=tax_mode)
    totals = compute_totals(
        store_id=store.id, customer_id=customer.id, payload=payload, lines=lines
    )

    # 5-6. bill + items
    bill = _insert_bill(
        store=store,
        customer=customer,
        payload=payload,
        totals=totals,
        invoice_number=generate_invoice_number(clock=clock),
        idempotency_key=idempotency_key,
        acting_user=acting_user,
    )
    items = _insert_items(bill=bill, lines=lines)

    # 7. payments
    payments, collected = _reconcile_payments(
        bill=bill,
        customer=customer,
        payments=payload.get("payments") or [],
        acting_user=acting_user,
    )

    # 8. overpayment -> advance
    excess = collected - totals.grand_total
    excess_added = None
    if excess > ZERO:
        ledger.credit(
            customer_id=customer.id,
            amount=excess,
            reference_type=WalletHistoryEntry.REF_BILL,
            reference_id=bill.id,
            description=f"Excess payment from bill {bill.invoice_number} added to advance",
            acting_user=acting_user,
            store_id=store.id,
        )
        excess_added = excess

    # 9. authoritative status
    final = resolve_payment_status(totals.grand_total, collected)
    bill.paid_amount = collected
    bill.dues = final.dues
    bill.status = final.status
    bill.save(update_fields=["paid_amount", "dues", "status", "updated_at"])

    if payload.get("held_bill_id"):
        _consume_held_bill(store_id=store.id, held_bill_id=payload["held_bill_id"])

    if payload.get("appointment_id"):
        mark_appointment_billed(store_id=store.id, appointment_id=payload["appointment_id"])

    customer.refresh_from_db(fields=["advance_amount"])

    logger.info(
        "Bill saved",
        extra={
            "store_id": str(store.id),
            "bill_id": str(bill.id),
            "invoice_number": bill.invoice_number,
            "grand_total": str(bill.grand_total),
            "paid_amount": str(bill.paid_amount),
            "bill_status": bill.status,
            "excess_to_advance": str(excess_added) if excess_added else None,
        },
    )

    return SavedBill(
        bill=bill,
        customer=customer,
        is_new_customer=resolved.is_new_customer,
        items=items,
        payments=payments,
        totals=totals,
        excess_amount_added_to_advance=excess_added,
    )
