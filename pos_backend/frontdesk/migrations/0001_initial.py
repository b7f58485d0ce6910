"""
======================================================
PATH: frontdesk/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Appointment + AppointmentService + Booking + BookingItem
           + Enquiry + EnquiryDetail

- advance amounts are non-negative on appointments and bookings
- booking item quantity >= 1
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def _money(**kwargs):
    return models.DecimalField(
        decimal_places=2, default=Decimal("0.00"), max_digits=12, **kwargs
    )


def _uuid_pk():
    return models.UUIDField(
        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
    )


def _user_fk():
    return models.ForeignKey(
        blank=True,
        null=True,
        on_delete=django.db.models.deletion.SET_NULL,
        related_name="+",
        to=settings.AUTH_USER_MODEL,
    )


GENDER_CHOICES = [("male", "Male"), ("female", "Female"), ("other", "Other")]

RECORD_STATUS_CHOICES = [
    ("scheduled", "Scheduled"),
    ("in-progress", "In progress"),
    ("completed", "Completed"),
    ("cancelled", "Cancelled"),
]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("store", "0001_initial"),
        ("customers", "0001_initial"),
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Appointment",
            fields=[
                ("id", _uuid_pk()),
                ("phone_number", models.CharField(max_length=32)),
                ("customer_name", models.CharField(blank=True, default="", max_length=150)),
                ("gender", models.CharField(blank=True, default="", max_length=16)),
                ("source", models.CharField(blank=True, default="", max_length=50)),
                ("appointment_date", models.DateField()),
                ("appointment_time", models.TimeField()),
                (
                    "status",
                    models.CharField(
                        choices=RECORD_STATUS_CHOICES + [("billed", "Billed")],
                        default="scheduled",
                        max_length=16,
                    ),
                ),
                ("total_duration_minutes", models.PositiveIntegerField(default=0)),
                ("total_amount", _money()),
                ("advance_amount", _money()),
                ("payable_amount", _money()),
                ("payment_mode", models.CharField(blank=True, default="", max_length=30)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", _user_fk()),
                ("updated_by", _user_fk()),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="appointments",
                        to="customers.customer",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="appointments",
                        to="store.store",
                    ),
                ),
            ],
            options={
                "ordering": ["-appointment_date", "-appointment_time"],
                "indexes": [
                    models.Index(fields=["store", "appointment_date"], name="appt_store_date_idx"),
                    models.Index(fields=["store", "status"], name="appt_store_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("advance_amount__gte", 0)),
                        name="appt_advance_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="AppointmentService",
            fields=[
                ("id", _uuid_pk()),
                ("staff_id", models.UUIDField(blank=True, null=True)),
                ("position", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "appointment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="services",
                        to="frontdesk.appointment",
                    ),
                ),
                (
                    "service",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="catalog.service",
                    ),
                ),
            ],
            options={"ordering": ["position"]},
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", _uuid_pk()),
                ("country_code", models.CharField(max_length=10)),
                ("contact_no", models.CharField(max_length=20)),
                ("phone_number", models.CharField(max_length=32)),
                ("customer_name", models.CharField(max_length=150)),
                ("gender", models.CharField(choices=GENDER_CHOICES, max_length=16)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("address", models.TextField(blank=True, default="")),
                ("booking_datetime", models.DateTimeField()),
                (
                    "venue_type",
                    models.CharField(
                        choices=[("indoor", "Indoor"), ("outdoor", "Outdoor")],
                        max_length=16,
                    ),
                ),
                ("remarks", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=RECORD_STATUS_CHOICES, default="scheduled", max_length=16
                    ),
                ),
                ("total_amount", _money()),
                ("advance_amount", _money()),
                ("payable_amount", _money()),
                (
                    "payment_mode",
                    models.CharField(
                        choices=[("cash", "Cash"), ("card", "Card"), ("online", "Online")],
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("created_by", _user_fk()),
                ("updated_by", _user_fk()),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="bookings",
                        to="customers.customer",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bookings",
                        to="store.store",
                    ),
                ),
            ],
            options={
                "ordering": ["-booking_datetime"],
                "indexes": [
                    models.Index(
                        fields=["store", "booking_datetime"], name="booking_store_datetime_idx"
                    ),
                    models.Index(fields=["phone_number"], name="booking_phone_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("advance_amount__gte", 0)),
                        name="booking_advance_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="BookingItem",
            fields=[
                ("id", _uuid_pk()),
                ("service_name", models.CharField(max_length=255)),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("staff_id", models.UUIDField(blank=True, null=True)),
                ("staff_name", models.CharField(blank=True, default="", max_length=255)),
                ("quantity", models.PositiveIntegerField(default=1)),
                ("scheduled_at", models.DateTimeField(blank=True, null=True)),
                ("venue", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "booking",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="frontdesk.booking",
                    ),
                ),
                (
                    "service",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="catalog.service",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gte", 1)),
                        name="booking_item_qty_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Enquiry",
            fields=[
                ("id", _uuid_pk()),
                ("country_code", models.CharField(max_length=10)),
                ("contact_no", models.CharField(max_length=20)),
                ("name", models.CharField(max_length=150)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("gender", models.CharField(choices=GENDER_CHOICES, max_length=16)),
                (
                    "source",
                    models.CharField(
                        choices=[
                            ("walk-in", "Walk-in"),
                            ("instagram", "Instagram"),
                            ("facebook", "Facebook"),
                            ("cold-calling", "Cold calling"),
                            ("website", "Website"),
                            ("client-reference", "Client reference"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "enquiry_type",
                    models.CharField(
                        choices=[("hot", "Hot"), ("warm", "Warm"), ("cold", "Cold")],
                        max_length=16,
                    ),
                ),
                (
                    "enquiry_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("converted", "Converted"),
                            ("closed", "Closed"),
                        ],
                        max_length=16,
                    ),
                ),
                ("notes", models.TextField(blank=True, default="")),
                ("follow_up_at", models.DateTimeField(blank=True, null=True)),
                ("advance_amount", _money()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("created_by", _user_fk()),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="enquiries",
                        to="customers.customer",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="enquiries",
                        to="store.store",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "verbose_name_plural": "enquiries",
                "indexes": [
                    models.Index(fields=["store", "created_at"], name="enquiry_store_created_idx"),
                    models.Index(
                        fields=["store", "enquiry_status"], name="enquiry_store_status_idx"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="EnquiryDetail",
            fields=[
                ("id", _uuid_pk()),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("service", "Service"),
                            ("product", "Product"),
                            ("membership-package", "Membership package"),
                        ],
                        max_length=32,
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("reference_id", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "enquiry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="details",
                        to="frontdesk.enquiry",
                    ),
                ),
            ],
            options={"ordering": ["created_at"]},
        ),
    ]
