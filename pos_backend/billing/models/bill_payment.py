# billing/models/bill_payment.py

import uuid

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class BillPayment(models.Model):
    """
    Immutable payment instrument applied to a Bill.

    RULES:
    - amount > 0
    - mode=advance rows are backed by exactly one ledger debit (wallet_entry)
    - sum(amount) over a bill == Bill.paid_amount
    """

    MODE_CASH = "cash"
    MODE_CARD = "card"
    MODE_UPI = "upi"
    MODE_WALLET = "wallet"
    MODE_ADVANCE = "advance"

    MODE_CHOICES = [
        (MODE_CASH, "Cash"),
        (MODE_CARD, "Card"),
        (MODE_UPI, "UPI"),
        (MODE_WALLET, "Wallet"),
        (MODE_ADVANCE, "Advance"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    bill = models.ForeignKey(
        "billing.Bill",
        on_delete=models.PROTECT,
        related_name="payments",
    )

    mode = models.CharField(max_length=16, choices=MODE_CHOICES)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    reference = models.CharField(max_length=255, blank=True, default="")
    timestamp = models.DateTimeField()

    wallet_entry = models.OneToOneField(
        "customers.WalletHistoryEntry",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bill_payment",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(condition=Q(amount__gt=0), name="bill_payment_amount_positive"),
        ]
        indexes = [
            models.Index(fields=["bill", "mode"], name="bill_payment_bill_mode_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Bill payments are immutable and cannot be modified")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Bill payments are immutable and cannot be deleted")

    def __str__(self):
        return f"{self.bill_id} | {self.mode} | {self.amount}"
