# billing/views/errors.py

"""
DOMAIN ERROR -> HTTP

Views catch service exceptions and answer {"detail": "<message>"}.
Order matters: the first matching class wins.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response

from billing.services.exceptions import (
    BillNotFound,
    CatalogItemNotFound,
    DuplicateIdempotencyKey,
    HeldBillNotFound,
    StoreNotFound,
)
from customers.services.exceptions import (
    CustomerNotFound,
    InsufficientBalance,
    InvalidLedgerAmount,
    MissingPhoneNumber,
)

ERROR_STATUS = (
    (StoreNotFound, status.HTTP_404_NOT_FOUND),
    (CustomerNotFound, status.HTTP_404_NOT_FOUND),
    (BillNotFound, status.HTTP_404_NOT_FOUND),
    (HeldBillNotFound, status.HTTP_404_NOT_FOUND),
    (CatalogItemNotFound, status.HTTP_400_BAD_REQUEST),
    (MissingPhoneNumber, status.HTTP_400_BAD_REQUEST),
    (InvalidLedgerAmount, status.HTTP_400_BAD_REQUEST),
    # AdvancePaymentFailed is an InsufficientBalance
    (InsufficientBalance, status.HTTP_409_CONFLICT),
    (DuplicateIdempotencyKey, status.HTTP_409_CONFLICT),
)

HANDLED_ERRORS = tuple(cls for cls, _ in ERROR_STATUS)


def domain_error_response(exc: Exception) -> Response:
    for cls, http_status in ERROR_STATUS:
        if isinstance(exc, cls):
            return Response({"detail": str(exc)}, status=http_status)
    raise exc


def idempotency_key_from(request, validated: dict) -> str | None:
    """Header wins over the body field."""
    key = (request.headers.get("Idempotency-Key") or "").strip()
    if not key:
        key = (validated.get("idempotency_key") or "").strip()
    return key or None
