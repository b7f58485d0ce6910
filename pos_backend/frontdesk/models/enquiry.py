# frontdesk/models/enquiry.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class Enquiry(models.Model):
    """A captured lead. An upfront advance, if any, is credited to the customer."""

    GENDER_CHOICES = [
        ("male", "Male"),
        ("female", "Female"),
        ("other", "Other"),
    ]

    SOURCE_CHOICES = [
        ("walk-in", "Walk-in"),
        ("instagram", "Instagram"),
        ("facebook", "Facebook"),
        ("cold-calling", "Cold calling"),
        ("website", "Website"),
        ("client-reference", "Client reference"),
    ]

    TYPE_CHOICES = [
        ("hot", "Hot"),
        ("warm", "Warm"),
        ("cold", "Cold"),
    ]

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("converted", "Converted"),
        ("closed", "Closed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        "store.Store",
        on_delete=models.PROTECT,
        related_name="enquiries",
    )
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="enquiries",
    )

    country_code = models.CharField(max_length=10)
    contact_no = models.CharField(max_length=20)
    name = models.CharField(max_length=150)
    email = models.EmailField(blank=True, default="")
    gender = models.CharField(max_length=16, choices=GENDER_CHOICES)

    source = models.CharField(max_length=32, choices=SOURCE_CHOICES)
    enquiry_type = models.CharField(max_length=16, choices=TYPE_CHOICES)
    enquiry_status = models.CharField(max_length=16, choices=STATUS_CHOICES)
    notes = models.TextField(blank=True, default="")
    follow_up_at = models.DateTimeField(null=True, blank=True)

    advance_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    created_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "enquiries"
        indexes = [
            models.Index(fields=["store", "created_at"], name="enquiry_store_created_idx"),
            models.Index(fields=["store", "enquiry_status"], name="enquiry_store_status_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.country_code}{self.contact_no}) | {self.enquiry_type}"


class EnquiryDetail(models.Model):
    CATEGORY_CHOICES = [
        ("service", "Service"),
        ("product", "Product"),
        ("membership-package", "Membership package"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    enquiry = models.ForeignKey(
        Enquiry,
        on_delete=models.CASCADE,
        related_name="details",
    )
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES)
    name = models.CharField(max_length=255)
    reference_id = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.category}: {self.name}"
