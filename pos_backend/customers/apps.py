# customers/apps.py

"""
CUSTOMERS APP CONFIG

Owns the customer record and its pre-paid advance balance:
- Customer.advance_amount (single source of truth)
- WalletHistoryEntry (append-only movements)
- CustomerLedger service (the only writer of advance_amount)
"""

from django.apps import AppConfig


class CustomersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "customers"
    verbose_name = "Customers & Advance Ledger"
