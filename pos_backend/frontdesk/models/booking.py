# frontdesk/models/booking.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Q

User = settings.AUTH_USER_MODEL


class Booking(models.Model):
    """
    An event booking (indoor/outdoor) with priced service lines.

    - total_amount = sum(unit_price * quantity) over items
    - payable_amount = max(0, total_amount - advance_amount)
    - changing the customer moves the advance from the old customer to the new one
    """

    STATUS_SCHEDULED = "scheduled"
    STATUS_IN_PROGRESS = "in-progress"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_SCHEDULED, "Scheduled"),
        (STATUS_IN_PROGRESS, "In progress"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    GENDER_CHOICES = [
        ("male", "Male"),
        ("female", "Female"),
        ("other", "Other"),
    ]

    VENUE_CHOICES = [
        ("indoor", "Indoor"),
        ("outdoor", "Outdoor"),
    ]

    PAYMENT_MODE_CHOICES = [
        ("cash", "Cash"),
        ("card", "Card"),
        ("online", "Online"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        "store.Store",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )

    country_code = models.CharField(max_length=10)
    contact_no = models.CharField(max_length=20)
    phone_number = models.CharField(max_length=32)
    customer_name = models.CharField(max_length=150)
    gender = models.CharField(max_length=16, choices=GENDER_CHOICES)
    email = models.EmailField(blank=True, default="")
    address = models.TextField(blank=True, default="")

    booking_datetime = models.DateTimeField()
    venue_type = models.CharField(max_length=16, choices=VENUE_CHOICES)
    remarks = models.TextField(blank=True, default="")

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_SCHEDULED)

    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    advance_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    payable_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    payment_mode = models.CharField(max_length=16, choices=PAYMENT_MODE_CHOICES)

    created_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    updated_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-booking_datetime"]
        indexes = [
            models.Index(fields=["store", "booking_datetime"], name="booking_store_datetime_idx"),
            models.Index(fields=["phone_number"], name="booking_phone_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(advance_amount__gte=0), name="booking_advance_non_negative"
            ),
        ]

    def __str__(self):
        return f"{self.customer_name} | {self.booking_datetime} | {self.status}"


class BookingItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    booking = models.ForeignKey(
        Booking,
        on_delete=models.CASCADE,
        related_name="items",
    )
    service = models.ForeignKey(
        "catalog.Service",
        on_delete=models.PROTECT,
        related_name="+",
    )
    service_name = models.CharField(max_length=255)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    staff_id = models.UUIDField(null=True, blank=True)
    staff_name = models.CharField(max_length=255, blank=True, default="")
    quantity = models.PositiveIntegerField(default=1)
    scheduled_at = models.DateTimeField(null=True, blank=True)
    venue = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(condition=Q(quantity__gte=1), name="booking_item_qty_positive"),
        ]

    @property
    def line_total(self):
        return self.unit_price * self.quantity

    def __str__(self):
        return f"{self.service_name} x{self.quantity}"
