# billing/models/bill_item.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class BillItem(models.Model):
    """
    One priced line of a Bill. Write-once.

    cgst_rate / sgst_rate are always stored as percentages for audit display,
    even when the caller supplied a fractional rate or an absolute tax amount.
    """

    TYPE_SERVICE = "service"
    TYPE_PRODUCT = "product"
    TYPE_MEMBERSHIP = "membership"

    TYPE_CHOICES = [
        (TYPE_SERVICE, "Service"),
        (TYPE_PRODUCT, "Product"),
        (TYPE_MEMBERSHIP, "Membership"),
    ]

    DISCOUNT_CHOICES = [
        ("percent", "Percent"),
        ("flat", "Flat"),
    ]

    PRICING_CHOICES = [
        ("catalog", "Catalog price"),
        ("direct", "Direct price"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    bill = models.ForeignKey(
        "billing.Bill",
        on_delete=models.PROTECT,
        related_name="items",
    )

    line_no = models.PositiveIntegerField()
    item_type = models.CharField(max_length=16, choices=TYPE_CHOICES)
    catalog_id = models.UUIDField()
    name = models.CharField(max_length=255)
    staff_id = models.UUIDField(null=True, blank=True)

    qty = models.PositiveIntegerField(default=1)

    discount_type = models.CharField(max_length=16, choices=DISCOUNT_CHOICES)
    discount_value = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    cgst_rate = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    sgst_rate = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    pricing_mode = models.CharField(max_length=16, choices=PRICING_CHOICES)

    unit_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    base_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    taxable_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    cgst_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    sgst_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    line_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["line_no"]
        constraints = [
            models.UniqueConstraint(fields=["bill", "line_no"], name="uniq_bill_item_line_no"),
            models.CheckConstraint(condition=Q(qty__gte=1), name="bill_item_qty_positive"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Bill items are immutable and cannot be modified")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Bill items are immutable and cannot be deleted")

    def __str__(self):
        return f"{self.bill_id} #{self.line_no} | {self.name} | {self.line_total}"
