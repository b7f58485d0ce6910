"""
======================================================
PATH: billing/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Bill + BillItem + BillPayment + HeldBill

- invoice_number indexed, NOT unique
- idempotency keys unique (bills and held bills)
- bill payments must be positive; bill item line numbers unique per bill
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import django.core.serializers.json
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


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("store", "0001_initial"),
        ("customers", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Bill",
            fields=[
                ("id", _uuid_pk()),
                (
                    "invoice_number",
                    models.CharField(
                        db_index=True,
                        help_text="Time-derived display number (INVYYYYMMDDHHMMSSmmm). Not unique.",
                        max_length=32,
                    ),
                ),
                ("coupon_code", models.CharField(blank=True, default="", max_length=100)),
                ("coupon_codes", models.JSONField(blank=True, default=list)),
                ("referral_code", models.CharField(blank=True, default="", max_length=100)),
                ("sub_total", _money()),
                ("discount", _money()),
                ("tax_amount", _money()),
                ("cgst_amount", _money()),
                ("sgst_amount", _money()),
                ("grand_total", _money()),
                ("paid_amount", _money()),
                ("dues", _money()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("paid", "Paid"),
                            ("partial", "Partial"),
                            ("unpaid", "Unpaid"),
                            ("deleted", "Deleted"),
                        ],
                        default="unpaid",
                        max_length=16,
                    ),
                ),
                (
                    "payment_mode",
                    models.CharField(
                        choices=[
                            ("cash", "Cash"),
                            ("card", "Card"),
                            ("upi", "UPI"),
                            ("wallet", "Wallet"),
                            ("advance", "Advance"),
                            ("split", "Split"),
                            ("none", "None"),
                        ],
                        max_length=16,
                    ),
                ),
                (
                    "payment_amount",
                    _money(help_text="Amount the caller declared at checkout."),
                ),
                ("billing_timestamp", models.DateTimeField()),
                ("payment_timestamp", models.DateTimeField(blank=True, null=True)),
                ("appointment_id", models.UUIDField(blank=True, null=True)),
                (
                    "idempotency_key",
                    models.CharField(blank=True, max_length=255, null=True, unique=True),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="bills_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bills",
                        to="customers.customer",
                    ),
                ),
                (
                    "deleted_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="bills_deleted",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bills",
                        to="store.store",
                    ),
                ),
            ],
            options={
                "ordering": ["-billing_timestamp"],
                "indexes": [
                    models.Index(
                        fields=["store", "billing_timestamp"], name="bill_store_billed_at_idx"
                    ),
                    models.Index(fields=["store", "status"], name="bill_store_status_idx"),
                    models.Index(
                        fields=["customer", "billing_timestamp"],
                        name="bill_customer_billed_at_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="BillItem",
            fields=[
                ("id", _uuid_pk()),
                ("line_no", models.PositiveIntegerField()),
                (
                    "item_type",
                    models.CharField(
                        choices=[
                            ("service", "Service"),
                            ("product", "Product"),
                            ("membership", "Membership"),
                        ],
                        max_length=16,
                    ),
                ),
                ("catalog_id", models.UUIDField()),
                ("name", models.CharField(max_length=255)),
                ("staff_id", models.UUIDField(blank=True, null=True)),
                ("qty", models.PositiveIntegerField(default=1)),
                (
                    "discount_type",
                    models.CharField(
                        choices=[("percent", "Percent"), ("flat", "Flat")], max_length=16
                    ),
                ),
                ("discount_value", _money()),
                ("cgst_rate", _money()),
                ("sgst_rate", _money()),
                (
                    "pricing_mode",
                    models.CharField(
                        choices=[("catalog", "Catalog price"), ("direct", "Direct price")],
                        max_length=16,
                    ),
                ),
                ("unit_price", _money()),
                ("base_amount", _money()),
                ("discount_amount", _money()),
                ("taxable_amount", _money()),
                ("cgst_amount", _money()),
                ("sgst_amount", _money()),
                ("tax_amount", _money()),
                ("line_total", _money()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "bill",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="items",
                        to="billing.bill",
                    ),
                ),
            ],
            options={
                "ordering": ["line_no"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("bill", "line_no"), name="uniq_bill_item_line_no"
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("qty__gte", 1)), name="bill_item_qty_positive"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="BillPayment",
            fields=[
                ("id", _uuid_pk()),
                (
                    "mode",
                    models.CharField(
                        choices=[
                            ("cash", "Cash"),
                            ("card", "Card"),
                            ("upi", "UPI"),
                            ("wallet", "Wallet"),
                            ("advance", "Advance"),
                        ],
                        max_length=16,
                    ),
                ),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("reference", models.CharField(blank=True, default="", max_length=255)),
                ("timestamp", models.DateTimeField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "bill",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="billing.bill",
                    ),
                ),
                (
                    "wallet_entry",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bill_payment",
                        to="customers.wallethistoryentry",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["bill", "mode"], name="bill_payment_bill_mode_idx")
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("amount__gt", 0)),
                        name="bill_payment_amount_positive",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="HeldBill",
            fields=[
                ("id", _uuid_pk()),
                (
                    "payload",
                    models.JSONField(
                        encoder=django.core.serializers.json.DjangoJSONEncoder
                    ),
                ),
                (
                    "customer_summary",
                    models.CharField(default="Unknown Customer", max_length=300),
                ),
                (
                    "amount_estimate",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True),
                ),
                (
                    "idempotency_key",
                    models.CharField(blank=True, max_length=255, null=True, unique=True),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="held_bills",
                        to="store.store",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["store", "created_at"], name="held_bill_store_created_idx"
                    )
                ],
            },
        ),
    ]
