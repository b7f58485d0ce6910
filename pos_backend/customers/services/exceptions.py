# customers/services/exceptions.py

"""
Customer / advance-ledger exceptions.

All of these abort the surrounding transaction; views map them to HTTP responses.
"""


class LedgerError(Exception):
    """Base exception for customer resolution and advance-balance movements."""


class CustomerNotFound(LedgerError):
    """Referenced customer id does not exist in the requesting store."""


class MissingPhoneNumber(LedgerError):
    """Neither phone_number nor country_code + contact_no was supplied."""


class InvalidLedgerAmount(LedgerError):
    """Credit/debit amounts must be strictly positive."""


class InsufficientBalance(LedgerError):
    """A debit asked for more than the customer's current advance balance."""

    def __init__(self, *, available, required):
        self.available = available
        self.required = required
        super().__init__(
            f"Insufficient advance balance. Available: {available}, Required: {required}"
        )
