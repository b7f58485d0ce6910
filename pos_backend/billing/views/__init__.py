# billing/views/__init__.py

from .bills import BillDeleteView, BillDetailView, BillListCreateView, CustomerBillsView
from .held_bills import HeldBillDetailView, HeldBillListView, HoldBillView

__all__ = [
    "BillDeleteView",
    "BillDetailView",
    "BillListCreateView",
    "CustomerBillsView",
    "HeldBillDetailView",
    "HeldBillListView",
    "HoldBillView",
]
