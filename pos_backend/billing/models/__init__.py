# billing/models/__init__.py

"""
BILLING MODELS PACKAGE EXPORTS
"""

from .bill import Bill
from .bill_item import BillItem
from .bill_payment import BillPayment
from .held_bill import HeldBill

__all__ = ["Bill", "BillItem", "BillPayment", "HeldBill"]
