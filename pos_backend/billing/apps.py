# billing/apps.py

"""
BILLING APP CONFIG

POS billing engine:
- line pricing (tax inclusive / exclusive catalog price, or direct price)
- bill totals, payment status, invoice numbering
- atomic bill save with advance-balance debits and overpayment credits
- held (draft) bills
"""

from django.apps import AppConfig


class BillingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "billing"
    verbose_name = "Billing"
