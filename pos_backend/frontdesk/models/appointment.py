# frontdesk/models/appointment.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Q

User = settings.AUTH_USER_MODEL


class Appointment(models.Model):
    """
    A scheduled visit.

    - advance_amount mirrors what was credited to the customer's advance
      balance for this appointment (edits move the difference through the ledger)
    - payable_amount = max(0, total_amount - advance_amount)
    - status becomes "billed" once a bill references the appointment
    """

    STATUS_SCHEDULED = "scheduled"
    STATUS_IN_PROGRESS = "in-progress"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"
    STATUS_BILLED = "billed"

    STATUS_CHOICES = [
        (STATUS_SCHEDULED, "Scheduled"),
        (STATUS_IN_PROGRESS, "In progress"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
        (STATUS_BILLED, "Billed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        "store.Store",
        on_delete=models.PROTECT,
        related_name="appointments",
    )
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="appointments",
    )

    phone_number = models.CharField(max_length=32)
    customer_name = models.CharField(max_length=150, blank=True, default="")
    gender = models.CharField(max_length=16, blank=True, default="")
    source = models.CharField(max_length=50, blank=True, default="")

    appointment_date = models.DateField()
    appointment_time = models.TimeField()

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_SCHEDULED)

    total_duration_minutes = models.PositiveIntegerField(default=0)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    advance_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    payable_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    payment_mode = models.CharField(max_length=30, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    created_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    updated_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-appointment_date", "-appointment_time"]
        indexes = [
            models.Index(fields=["store", "appointment_date"], name="appt_store_date_idx"),
            models.Index(fields=["store", "status"], name="appt_store_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(advance_amount__gte=0), name="appt_advance_non_negative"
            ),
        ]

    def __str__(self):
        return f"{self.customer_name or self.phone_number} | {self.appointment_date} {self.appointment_time}"


class AppointmentService(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    appointment = models.ForeignKey(
        Appointment,
        on_delete=models.CASCADE,
        related_name="services",
    )
    service = models.ForeignKey(
        "catalog.Service",
        on_delete=models.PROTECT,
        related_name="+",
    )
    staff_id = models.UUIDField(null=True, blank=True)
    position = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["position"]

    def __str__(self):
        return f"{self.appointment_id} #{self.position} | {self.service_id}"
