# catalog/services/lookup.py

"""
CATALOG LOOKUP (READ-ONLY)

Resolves a bill line's (store, type, id) to the name + list price billing needs.
Returns None when the row does not exist in that store; callers decide what that means.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from catalog.models import Membership, Product, Service

CATALOG_TYPES = {
    "service": Service,
    "product": Product,
    "membership": Membership,
}


@dataclass(frozen=True)
class CatalogItem:
    id: object
    item_type: str
    name: str
    price: Decimal


def find_catalog_item(*, store_id, item_type: str, catalog_id) -> CatalogItem | None:
    model = CATALOG_TYPES.get(item_type)
    if model is None:
        raise ValueError(f"Invalid catalog type: {item_type}")

    row = (
        model.objects.filter(id=catalog_id, store_id=store_id)
        .values("id", "name", "price")
        .first()
    )
    if row is None:
        return None

    return CatalogItem(
        id=row["id"],
        item_type=item_type,
        name=row["name"],
        price=row["price"],
    )
