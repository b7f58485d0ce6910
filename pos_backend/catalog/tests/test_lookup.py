from decimal import Decimal

from django.test import TestCase

from catalog.models import Membership, Product, Service
from catalog.services.lookup import find_catalog_item
from store.models import Store


class CatalogLookupTests(TestCase):
    def setUp(self):
        self.store = Store.objects.create(name="Main Salon")
        self.other_store = Store.objects.create(name="Branch")

        self.service = Service.objects.create(
            store=self.store, name="Haircut", price="500.00"
        )
        self.product = Product.objects.create(
            store=self.store, name="Shampoo", price="250.00", sku="SH-1"
        )
        self.membership = Membership.objects.create(
            store=self.store, name="Gold", price="3000.00"
        )

    def test_resolves_each_catalog_type(self):
        for item_type, row in (
            ("service", self.service),
            ("product", self.product),
            ("membership", self.membership),
        ):
            item = find_catalog_item(
                store_id=self.store.id, item_type=item_type, catalog_id=row.id
            )
            self.assertIsNotNone(item)
            self.assertEqual(item.name, row.name)
            self.assertEqual(item.price, Decimal(str(row.price)))
            self.assertEqual(item.item_type, item_type)

    def test_item_from_another_store_is_not_found(self):
        item = find_catalog_item(
            store_id=self.other_store.id,
            item_type="service",
            catalog_id=self.service.id,
        )
        self.assertIsNone(item)

    def test_type_mismatch_is_not_found(self):
        item = find_catalog_item(
            store_id=self.store.id,
            item_type="product",
            catalog_id=self.service.id,
        )
        self.assertIsNone(item)

    def test_unknown_type_is_rejected(self):
        with self.assertRaises(ValueError):
            find_catalog_item(
                store_id=self.store.id, item_type="voucher", catalog_id=self.service.id
            )
