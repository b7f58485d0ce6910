import uuid
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from customers.models import WalletHistoryEntry
from customers.services import ledger
from customers.services.customer_resolver import create_customer
from store.models import Store, StoreUser

User = get_user_model()


class CustomerAdvanceApiTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="reception", password="pass")
        self.store = Store.objects.create(name="Main Salon")
        StoreUser.objects.create(store=self.store, user=self.user, role=StoreUser.ROLE_RECEPTION)

        self.customer = create_customer(store_id=self.store.id, phone_number="+919800000050")
        ledger.credit(
            customer_id=self.customer.id,
            amount="500",
            reference_type=WalletHistoryEntry.REF_APPOINTMENT,
        )
        ledger.debit(customer_id=self.customer.id, amount="120")

        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def _url(self, store_id=None, customer_id=None):
        return reverse(
            "customer-advance",
            kwargs={
                "store_id": store_id or self.store.id,
                "customer_id": customer_id or self.customer.id,
            },
        )

    def test_returns_balance_and_history(self):
        res = self.client.get(self._url())

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(res.data["advance_amount"]), Decimal("380.00"))
        self.assertEqual(res.data["count"], 2)
        self.assertEqual(
            sorted(r["transaction_type"] for r in res.data["results"]), ["credit", "debit"]
        )

    def test_unknown_customer_is_404(self):
        res = self.client.get(self._url(customer_id=uuid.uuid4()))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_requires_store_membership(self):
        outsider = User.objects.create_user(username="outsider", password="pass")
        client = APIClient()
        client.force_authenticate(user=outsider)

        res = client.get(self._url())
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_requires_authentication(self):
        res = APIClient().get(self._url())
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
