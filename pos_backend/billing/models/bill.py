# billing/models/bill.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class Bill(models.Model):
    """
    A finalized customer invoice.

    GUARANTEES:
    - Created once by billing.services.billing_transaction.save_bill
    - Monetary fields are immutable after insert; only payment reconciliation
      (paid_amount, dues, status) and soft-delete fields may change
    - dues = max(0, grand_total - paid_amount); status follows (grand_total, paid_amount)
    - invoice_number is display-only and deliberately NOT unique
    - idempotency_key, when present, is unique across all stores
    """

    STATUS_PAID = "paid"
    STATUS_PARTIAL = "partial"
    STATUS_UNPAID = "unpaid"
    STATUS_DELETED = "deleted"

    STATUS_CHOICES = [
        (STATUS_PAID, "Paid"),
        (STATUS_PARTIAL, "Partial"),
        (STATUS_UNPAID, "Unpaid"),
        (STATUS_DELETED, "Deleted"),
    ]

    PAYMENT_MODE_CHOICES = [
        ("cash", "Cash"),
        ("card", "Card"),
        ("upi", "UPI"),
        ("wallet", "Wallet"),
        ("advance", "Advance"),
        ("split", "Split"),
        ("none", "None"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        "store.Store",
        on_delete=models.PROTECT,
        related_name="bills",
    )
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="bills",
    )

    invoice_number = models.CharField(
        max_length=32,
        db_index=True,
        help_text="Time-derived display number (INVYYYYMMDDHHMMSSmmm). Not unique.",
    )

    coupon_code = models.CharField(max_length=100, blank=True, default="")
    coupon_codes = models.JSONField(default=list, blank=True)
    referral_code = models.CharField(max_length=100, blank=True, default="")

    sub_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    cgst_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    sgst_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    grand_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    paid_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    dues = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_UNPAID)

    payment_mode = models.CharField(max_length=16, choices=PAYMENT_MODE_CHOICES)
    payment_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Amount the caller declared at checkout.",
    )

    billing_timestamp = models.DateTimeField()
    payment_timestamp = models.DateTimeField(null=True, blank=True)

    appointment_id = models.UUIDField(null=True, blank=True)

    idempotency_key = models.CharField(max_length=255, null=True, blank=True, unique=True)

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bills_created",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    deleted_at = models.DateTimeField(null=True, blank=True)
    deleted_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bills_deleted",
    )

    class Meta:
        ordering = ["-billing_timestamp"]
        indexes = [
            models.Index(fields=["store", "billing_timestamp"], name="bill_store_billed_at_idx"),
            models.Index(fields=["store", "status"], name="bill_store_status_idx"),
            models.Index(fields=["customer", "billing_timestamp"], name="bill_customer_billed_at_idx"),
        ]

    _IMMUTABLE_FIELDS = (
        "store_id",
        "customer_id",
        "invoice_number",
        "coupon_code",
        "coupon_codes",
        "referral_code",
        "sub_total",
        "discount",
        "tax_amount",
        "cgst_amount",
        "sgst_amount",
        "grand_total",
        "payment_mode",
        "payment_amount",
        "billing_timestamp",
        "idempotency_key",
        "created_by_id",
    )

    def _validate_immutable(self, previous: "Bill"):
        if previous.status == self.STATUS_DELETED:
            raise ValueError("Bill is deleted and can no longer be changed.")

        for field in self._IMMUTABLE_FIELDS:
            if getattr(self, field) != getattr(previous, field):
                raise ValueError(f"Bill field '{field}' cannot be changed after creation.")

    def save(self, *args, **kwargs):
        if self.pk and not self._state.adding:
            previous = Bill.objects.filter(pk=self.pk).first()
            if previous is not None:
                self._validate_immutable(previous)

        super().save(*args, **kwargs)

    @property
    def is_overdue(self) -> bool:
        return self.dues > 0 and self.payment_timestamp is None

    def __str__(self):
        return f"{self.invoice_number} | {self.grand_total} | {self.status}"
