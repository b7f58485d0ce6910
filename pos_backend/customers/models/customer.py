# customers/models/customer.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Q

User = settings.AUTH_USER_MODEL


class Customer(models.Model):
    """
    A store's customer, identified by phone number within the store.

    GUARANTEES:
    - (store, phone_number) is unique: one phone resolves to one customer per store
    - referral_code is unique across all stores
    - advance_amount never goes negative (DB check constraint)
    - advance_amount is mutated ONLY by customers.services.ledger
    """

    STATUS_ACTIVE = "active"
    STATUS_INACTIVE = "inactive"
    STATUS_BLOCKED = "blocked"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_INACTIVE, "Inactive"),
        (STATUS_BLOCKED, "Blocked"),
    ]

    GENDER_CHOICES = [
        ("male", "Male"),
        ("female", "Female"),
        ("other", "Other"),
        ("prefer_not_to_say", "Prefer not to say"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        "store.Store",
        on_delete=models.PROTECT,
        related_name="customers",
    )

    phone_number = models.CharField(max_length=32)
    name = models.CharField(max_length=255, blank=True, default="")
    gender = models.CharField(max_length=32, choices=GENDER_CHOICES, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    address = models.TextField(blank=True, default="")

    # Free-form dates as captured at the front desk (e.g. "1990-05-14", "05-14")
    birthday = models.CharField(max_length=10, blank=True, default="")
    anniversary = models.CharField(max_length=10, blank=True, default="")

    referral_code = models.CharField(max_length=8, unique=True)

    advance_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    dues = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    wallet_balance = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    loyalty_points = models.IntegerField(default=0)

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    last_visit = models.DateTimeField(null=True, blank=True)

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "phone_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["store", "phone_number"],
                name="uniq_customer_phone_per_store",
            ),
            models.CheckConstraint(
                condition=Q(advance_amount__gte=0),
                name="customer_advance_amount_non_negative",
            ),
        ]
        indexes = [
            models.Index(fields=["store", "name"], name="customer_store_name_idx"),
        ]

    def __str__(self):
        if self.name:
            return f"{self.name} ({self.phone_number})"
        return self.phone_number
