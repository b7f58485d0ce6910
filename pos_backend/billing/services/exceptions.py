# billing/services/exceptions.py

"""
Billing exceptions.

Every one of these aborts the surrounding transaction (no partial bill).
Views translate them to HTTP responses.
"""

from customers.services.exceptions import InsufficientBalance


class BillingError(Exception):
    """Base exception for billing failures."""


class StoreNotFound(BillingError):
    pass


class CatalogItemNotFound(BillingError):
    pass


class DuplicateIdempotencyKey(BillingError):
    pass


class HeldBillNotFound(BillingError):
    pass


class BillNotFound(BillingError):
    pass


class AdvancePaymentFailed(BillingError, InsufficientBalance):
    """An advance-mode payment line could not be covered; the whole bill is refused."""

    def __init__(self, *, available, required):
        InsufficientBalance.__init__(self, available=available, required=required)
        self.args = (f"Advance payment failed: {self.args[0]}",)
