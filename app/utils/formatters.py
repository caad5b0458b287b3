"""
Formatters utility.

Utility functions for formatting data in the app layer.
"""

from decimal import Decimal

from app.config.business_constants import CURRENCY_SYMBOL


def format_amount(amount: Decimal | int) -> str:
    """
    Format amount with thousands separator and currency symbol.

    Whole amounts drop the fraction, micro amounts keep it.

    Args:
        amount: Amount to format

    Returns:
        Formatted string like "₹1,000"
    """
    value = Decimal(amount)
    if value == value.to_integral_value():
        return f"{CURRENCY_SYMBOL}{int(value):,}"
    return f"{CURRENCY_SYMBOL}{value.normalize():,f}"


def escape_md(text: str | None) -> str:
    """
    Escape special characters for Markdown V1.

    Escapes: _ * ` [

    Args:
        text: Input text

    Returns:
        Escaped text safe for Markdown
    """
    if not text:
        return ""
    return str(text).replace("_", "\\_").replace("*", "\\*").replace("`", "\\`").replace("[", "\\[")
