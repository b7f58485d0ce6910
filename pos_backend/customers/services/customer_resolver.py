# customers/services/customer_resolver.py

"""
CUSTOMER RESOLUTION

One phone number resolves to one customer per store, whichever flow sees it first
(billing, appointment, booking, enquiry).

Rules:
- Full phone is phone_number, else country_code + contact_no.
- New customers start with zeroed balances, status=active and a fresh
  8-char referral code (0-9A-Z), unique across all stores.
"""

from __future__ import annotations

import logging
import secrets
import string
from dataclasses import dataclass

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from customers.models import Customer
from customers.services.exceptions import CustomerNotFound, MissingPhoneNumber

logger = logging.getLogger(__name__)

REFERRAL_CODE_ALPHABET = string.digits + string.ascii_uppercase
REFERRAL_CODE_LENGTH = 8

PROFILE_FIELDS = ("name", "gender", "email", "address", "birthday", "anniversary")


@dataclass(frozen=True)
class ResolvedCustomer:
    customer: Customer
    is_new_customer: bool


def generate_referral_code() -> str:
    while True:
        code = "".join(
            secrets.choice(REFERRAL_CODE_ALPHABET) for _ in range(REFERRAL_CODE_LENGTH)
        )
        if not Customer.objects.filter(referral_code=code).exists():
            return code


def full_phone_number(data: dict) -> str:
    phone_number = (data.get("phone_number") or "").strip()
    if phone_number:
        return phone_number

    country_code = (data.get("country_code") or "").strip()
    contact_no = (data.get("contact_no") or "").strip()
    if country_code and contact_no:
        return f"{country_code}{contact_no}"

    raise MissingPhoneNumber("Phone number information is required")


def has_phone_information(data: dict) -> bool:
    return bool(
        (data.get("phone_number") or "").strip()
        or ((data.get("country_code") or "").strip() and (data.get("contact_no") or "").strip())
    )


def create_customer(*, store_id, phone_number: str, profile: dict | None = None, acting_user=None) -> Customer:
    profile = profile or {}
    fields = {k: (profile.get(k) or "") for k in PROFILE_FIELDS}

    return Customer.objects.create(
        store_id=store_id,
        phone_number=phone_number,
        referral_code=generate_referral_code(),
        status=Customer.STATUS_ACTIVE,
        last_visit=timezone.now(),
        created_by=acting_user if getattr(acting_user, "pk", None) else None,
        **fields,
    )


@transaction.atomic
def find_or_create_customer(*, store_id, data: dict, acting_user=None) -> ResolvedCustomer:
    """
    Look up (store, full phone); create the customer when absent.

    A concurrent insert of the same phone loses on the unique constraint; the
    savepoint lets us re-read the winner instead of failing the caller.
    """
    phone = full_phone_number(data)

    existing = Customer.objects.filter(store_id=store_id, phone_number=phone).first()
    if existing is not None:
        return ResolvedCustomer(customer=existing, is_new_customer=False)

    try:
        with transaction.atomic():
            customer = create_customer(
                store_id=store_id,
                phone_number=phone,
                profile=data,
                acting_user=acting_user,
            )
    except IntegrityError:
        customer = Customer.objects.filter(store_id=store_id, phone_number=phone).first()
        if customer is None:
            raise
        return ResolvedCustomer(customer=customer, is_new_customer=False)

    logger.info(
        "Customer created",
        extra={"store_id": str(store_id), "customer_id": str(customer.id)},
    )
    return ResolvedCustomer(customer=customer, is_new_customer=True)


def get_store_customer(*, store_id, customer_id) -> Customer:
    try:
        return Customer.objects.get(id=customer_id, store_id=store_id)
    except (Customer.DoesNotExist, ValidationError) as exc:
        raise CustomerNotFound(f"Customer not found: {customer_id}") from exc


def resolve_record_customer(*, store_id, data: dict, acting_user=None) -> ResolvedCustomer | None:
    """
    Customer for a front-desk record: customer_id if given, else the phone
    (find-or-create), else None.
    """
    customer_id = data.get("customer_id")
    if customer_id:
        customer = get_store_customer(store_id=store_id, customer_id=customer_id)
        return ResolvedCustomer(customer=customer, is_new_customer=False)

    if not has_phone_information(data):
        return None

    profile = {**data, "name": data.get("name") or data.get("customer_name") or ""}
    return find_or_create_customer(store_id=store_id, data=profile, acting_user=acting_user)
