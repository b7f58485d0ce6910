# billing/models/held_bill.py

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

User = settings.AUTH_USER_MODEL


class HeldBill(models.Model):
    """
    A parked draft bill.

    - payload is the request body exactly as the client sent it
    - amount_estimate is best-effort; NULL when it could not be computed
    - never mutated: resumed into a Bill (and removed) or discarded
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        "store.Store",
        on_delete=models.PROTECT,
        related_name="held_bills",
    )

    payload = models.JSONField(encoder=DjangoJSONEncoder)
    customer_summary = models.CharField(max_length=300, default="Unknown Customer")
    amount_estimate = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )

    idempotency_key = models.CharField(max_length=255, null=True, blank=True, unique=True)

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
            models.Index(fields=["store", "created_at"], name="held_bill_store_created_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Held bills are immutable and cannot be modified")
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.customer_summary} | {self.amount_estimate}"
