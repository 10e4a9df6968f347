"""Formatting utilities for currency and percentage display."""

from __future__ import annotations

from typing import Union

CURRENCY_SYMBOLS = {
    'USD': '$',
    'CAD': 'CA$',
    'AUD': 'A$',
    'EUR': '€',
    'GBP': '£',
    'JPY': '¥',
    'INR': '₹',
    'CNY': 'CN¥',
}


def currency_symbol(currency: str) -> str:
    """Return the display symbol for an ISO currency code.

    Unknown codes are returned with a trailing space so they can prefix
    an amount, e.g. ``'CHF '``.
    """
    code = (currency or 'USD').upper()
    return CURRENCY_SYMBOLS.get(code, f"{code} ")


def format_currency(amount: Union[float, int], currency: str = 'USD') -> str:
    """Format an amount in whole currency units.

    Example:
        >>> format_currency(1234.56)
        '$1,235'
        >>> format_currency(-250, 'EUR')
        '-€250'
    """
    sign = '-' if round(amount) < 0 else ''
    return f"{sign}{currency_symbol(currency)}{abs(amount):,.0f}"


def format_percentage(value: float) -> str:
    """Format a percentage with one decimal, e.g. ``'12.5%'``."""
    return f"{value:.1f}%"


def format_months(value: float) -> str:
    return f"{value:.1f} months"
