"""Display helpers for GBP amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CURRENCY_SYMBOL = "£"


def format_currency(amount: float) -> str:
    """Format ``amount`` as pounds sterling with two decimal places.

    >>> format_currency(3243.6)
    '£3,243.60'
    >>> format_currency(-477)
    '-£477.00'
    """
    quantised = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if quantised == 0:
        quantised = abs(quantised)
    sign = "-" if quantised < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(quantised):,.2f}"


def format_number(value: float) -> str:
    """Render a rate or hour count without a trailing ``.0``."""
    return str(int(value)) if float(value).is_integer() else str(value)
