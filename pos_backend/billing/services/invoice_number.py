# billing/services/invoice_number.py

"""
INVOICE NUMBER

Shape: INV{YYYY}{MM}{DD}{HH}{MM}{SS}{mmm}, read from the clock in TIME_ZONE.

- no database read, so no read-then-increment race between concurrent bills
- NOT unique: two bills in the same millisecond share a number (schema allows it)
- clock is injectable for tests
"""

from __future__ import annotations

from django.utils import timezone

INVOICE_PREFIX = "INV"


def generate_invoice_number(*, clock=timezone.now) -> str:
    now = clock()
    if timezone.is_aware(now):
        now = timezone.localtime(now)

    return f"{INVOICE_PREFIX}{now:%Y%m%d%H%M%S}{now.microsecond // 1000:03d}"
