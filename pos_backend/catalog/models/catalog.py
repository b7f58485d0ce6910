# catalog/models/catalog.py

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class CatalogEntry(models.Model):
    """
    Shared shape of a sellable catalog row.

    Rules:
    - Every entry belongs to exactly one store
    - price is the store's list price (tax treatment comes from Store.tax_billing)
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        "store.Store",
        on_delete=models.PROTECT,
        related_name="+",
    )

    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} | {self.price}"


class Service(CatalogEntry):
    duration_minutes = models.PositiveIntegerField(default=0)

    class Meta(CatalogEntry.Meta):
        indexes = [models.Index(fields=["store", "name"], name="catalog_service_store_name")]


class Product(CatalogEntry):
    sku = models.CharField(max_length=64, blank=True, default="")

    class Meta(CatalogEntry.Meta):
        indexes = [models.Index(fields=["store", "name"], name="catalog_product_store_name")]


class Membership(CatalogEntry):
    validity_days = models.PositiveIntegerField(default=0)

    class Meta(CatalogEntry.Meta):
        indexes = [models.Index(fields=["store", "name"], name="catalog_member_store_name")]
