"""Miscellaneous helper functions for parsing receipt field values."""

from __future__ import annotations

import datetime as dt
import decimal
from decimal import Decimal, InvalidOperation
from typing import Optional

# Integer and fractional digits allowed in an amount. Together they bound
# the precision needed for exact arithmetic on any accepted amount.
MAX_AMOUNT_DIGITS = 15
MAX_FRACTION_DIGITS = 64
AMOUNT_PRECISION = MAX_AMOUNT_DIGITS + MAX_FRACTION_DIGITS + 2


def parse_amount(value: str | None) -> Optional[Decimal]:
    """Parse a monetary amount such as ``"35.35"`` into a :class:`Decimal`.

    Amounts are kept as exact base-10 numbers so that comparisons like
    "is a multiple of 0.25" behave the way a person reading the receipt
    expects. Returns ``None`` if the value is missing, cannot be parsed,
    is not finite (``NaN``, ``Infinity``), or is too large or too finely
    divided to be a receipt amount.
    """
    if not value:
        return None
    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    if amount and amount.adjusted() >= MAX_AMOUNT_DIGITS:
        return None
    if amount.as_tuple().exponent < -MAX_FRACTION_DIGITS:
        return None
    return amount


def amount_context() -> decimal.Context:
    """Return a decimal context in which arithmetic on parsed amounts is exact.

    Use it with :func:`decimal.localcontext`.
    """
    ctx = decimal.getcontext().copy()
    ctx.prec = AMOUNT_PRECISION
    return ctx


def parse_purchase_date(value: str | None) -> Optional[dt.date]:
    """Parse a ``YYYY-MM-DD`` date, returning ``None`` when invalid."""
    if not value:
        return None
    try:
        return dt.datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_purchase_time(value: str | None) -> Optional[dt.time]:
    """Parse a 24-hour ``HH:MM`` time, returning ``None`` when invalid."""
    if not value:
        return None
    try:
        return dt.datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        return None
