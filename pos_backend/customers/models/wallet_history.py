# customers/models/wallet_history.py

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

User = settings.AUTH_USER_MODEL


class WalletHistoryEntry(models.Model):
    """
    Append-only movement on a customer's advance balance.

    Rules:
    - amount is signed: credit rows are positive, debit rows are negative
    - one row per ledger operation
    - rows are never updated or deleted
    - sum(amount) over a customer == Customer.advance_amount
    """

    TYPE_CREDIT = "credit"
    TYPE_DEBIT = "debit"

    TYPE_CHOICES = [
        (TYPE_CREDIT, "Credit"),
        (TYPE_DEBIT, "Debit"),
    ]

    REF_APPOINTMENT = "appointment"
    REF_BOOKING = "booking"
    REF_ENQUIRY = "enquiry"
    REF_BILL = "bill"
    REF_ADJUSTMENT = "adjustment"

    REFERENCE_TYPE_CHOICES = [
        (REF_APPOINTMENT, "Appointment"),
        (REF_BOOKING, "Booking"),
        (REF_ENQUIRY, "Enquiry"),
        (REF_BILL, "Bill"),
        (REF_ADJUSTMENT, "Adjustment"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="wallet_history",
    )

    amount = models.DecimalField(max_digits=12, decimal_places=2)
    transaction_type = models.CharField(max_length=16, choices=TYPE_CHOICES)

    reference_type = models.CharField(max_length=32, choices=REFERENCE_TYPE_CHOICES)
    reference_id = models.UUIDField(null=True, blank=True, db_index=True)

    description = models.CharField(max_length=255, blank=True, default="")

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["customer", "created_at"], name="wallet_customer_created_idx"),
        ]

    def clean(self):
        if self.transaction_type not in (self.TYPE_CREDIT, self.TYPE_DEBIT):
            raise ValidationError("Invalid transaction_type")

        if self.amount is None or self.amount == 0:
            raise ValidationError("Wallet movement amount must be non-zero")

        if self.transaction_type == self.TYPE_CREDIT and self.amount < 0:
            raise ValidationError("Credit movements must carry a positive amount")

        if self.transaction_type == self.TYPE_DEBIT and self.amount > 0:
            raise ValidationError("Debit movements must carry a negative amount")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Wallet history entries are immutable and cannot be modified")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Wallet history entries are immutable and cannot be deleted")

    def __str__(self):
        return f"{self.customer_id} | {self.transaction_type} | {self.amount}"
