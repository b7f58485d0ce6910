"""
======================================================
PATH: catalog/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Service, Product, Membership
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


def _catalog_fields(extra):
    return [
        (
            "id",
            models.UUIDField(
                default=uuid.uuid4,
                editable=False,
                primary_key=True,
                serialize=False,
            ),
        ),
        ("name", models.CharField(max_length=255)),
        (
            "price",
            models.DecimalField(
                decimal_places=2,
                default=Decimal("0.00"),
                max_digits=12,
                validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
            ),
        ),
        ("is_active", models.BooleanField(default=True)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
        *extra,
        (
            "store",
            models.ForeignKey(
                on_delete=django.db.models.deletion.PROTECT,
                related_name="+",
                to="store.store",
            ),
        ),
    ]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("store", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Service",
            fields=_catalog_fields(
                [("duration_minutes", models.PositiveIntegerField(default=0))]
            ),
            options={
                "ordering": ["name"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["store", "name"], name="catalog_service_store_name")
                ],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=_catalog_fields(
                [("sku", models.CharField(blank=True, default="", max_length=64))]
            ),
            options={
                "ordering": ["name"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["store", "name"], name="catalog_product_store_name")
                ],
            },
        ),
        migrations.CreateModel(
            name="Membership",
            fields=_catalog_fields(
                [("validity_days", models.PositiveIntegerField(default=0))]
            ),
            options={
                "ordering": ["name"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["store", "name"], name="catalog_member_store_name")
                ],
            },
        ),
    ]
