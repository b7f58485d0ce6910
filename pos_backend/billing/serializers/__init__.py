# billing/serializers/__init__.py

from .bill_input import (
    BillItemInputSerializer,
    DeleteBillsInputSerializer,
    HoldBillInputSerializer,
    InlineCustomerSerializer,
    PaymentInputSerializer,
    SaveBillInputSerializer,
)
from .bill_read import (
    BillDetailSerializer,
    BillItemSerializer,
    BillListItemSerializer,
    BillPaymentSerializer,
    CustomerBillSerializer,
)
from .held_bill import HeldBillDetailSerializer, HeldBillListSerializer

__all__ = [
    "BillItemInputSerializer",
    "DeleteBillsInputSerializer",
    "HoldBillInputSerializer",
    "InlineCustomerSerializer",
    "PaymentInputSerializer",
    "SaveBillInputSerializer",
    "BillDetailSerializer",
    "BillItemSerializer",
    "BillListItemSerializer",
    "BillPaymentSerializer",
    "CustomerBillSerializer",
    "HeldBillDetailSerializer",
    "HeldBillListSerializer",
]
