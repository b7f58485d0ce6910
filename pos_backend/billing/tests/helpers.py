# billing/tests/helpers.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.utils import timezone

from catalog.models import Product, Service
from customers.models import Customer, WalletHistoryEntry
from customers.services import ledger
from customers.services.customer_resolver import create_customer
from store.models import Store

User = get_user_model()
D = Decimal


def bill_line(item, *, line_no=1, item_type="service", qty=1, price=None, cgst="0", sgst="0",
          discount_type="percent", discount_value="0"):
    return {
        "line_no": line_no,
        "type": item_type,
        "id": item.id,
        "qty": qty,
        "price": D(price) if price is not None else None,
        "discount_type": discount_type,
        "discount_value": D(discount_value),
        "cgst": D(cgst),
        "sgst": D(sgst),
    }


def payment_line(mode, amount):
    return {"mode": mode, "amount": D(amount), "timestamp": timezone.now()}


class BillingFixtureMixin:
    def setUp(self):
        self.user = User.objects.create_user(username="cashier", password="pass")
        self.store = Store.objects.create(name="Main Salon")
        self.other_store = Store.objects.create(name="Branch")

        self.haircut = Service.objects.create(store=self.store, name="Haircut", price="500.00")
        self.facial = Service.objects.create(store=self.store, name="Facial", price="1000.00")
        self.shampoo = Product.objects.create(store=self.store, name="Shampoo", price="250.00")

        self.customer = create_customer(store_id=self.store.id, phone_number="+919800000001")

    def _payload(self, *, items=None, payments=None, payment_mode="cash", **extra):
        payments = payments if payments is not None else [payment_line("cash", "500")]
        payload = {
            "customer_id": self.customer.id,
            "items": items or [bill_line(self.haircut)],
            "discount": D("0"),
            "payment_mode": payment_mode,
            "payment_amount": sum((p["amount"] for p in payments), D("0")),
            "payments": payments,
            "billing_timestamp": timezone.now(),
        }
        payload.update(extra)
        return payload

    def _fund(self, amount):
        ledger.credit(
            customer_id=self.customer.id,
            amount=amount,
            reference_type=WalletHistoryEntry.REF_ADJUSTMENT,
        )

    def _balance(self):
        return Customer.objects.get(pk=self.customer.pk).advance_amount


