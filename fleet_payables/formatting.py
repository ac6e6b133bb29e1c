"""Formatting utilities for payable amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union


def round_currency(amount: Union[float, int]) -> float:
    """Round an amount to cents, half away from zero.

    The engine keeps values unrounded; this is applied only when a payable
    is presented or stored on a payment.  Ties are judged on the exact binary
    value of the float, so 1.005 (stored as 1.00499...) rounds down.

    Example:
        >>> round_currency(0.125)
        0.13
        >>> round_currency(1.005)
        1.0
        >>> round_currency(-0.001)
        0.0
    """
    rounded = float(Decimal(amount).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))
    return rounded + 0.0  # normalise -0.0


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with proper formatting.

    Args:
        amount: The amount to format
        include_sign: Whether to include the dollar sign

    Returns:
        Formatted currency string (e.g., "$1,234.56" or "1,234.56")

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    formatted = f"{round_currency(amount):,.2f}"
    return f"${formatted}" if include_sign else formatted
