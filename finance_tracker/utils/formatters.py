"""
Formatting utility functions
"""

from datetime import date, datetime
from typing import Any, Optional

from finance_tracker.models.fields import EXPENSE


def format_date(date_value: Any, format_str: str = "%d %b %Y") -> str:
    """
    Format a date value as a string

    Args:
        date_value: Date value to format (string, date, datetime, or other)
        format_str: Format string for strftime

    Returns:
        Formatted date string or empty string if invalid
    """
    if not date_value:
        return ""

    if isinstance(date_value, str):
        try:
            dt = datetime.fromisoformat(date_value.replace("Z", "+00:00"))
            return dt.strftime(format_str)
        except ValueError:
            # Return original if parsing fails
            return date_value

    if isinstance(date_value, (datetime, date)):
        return date_value.strftime(format_str)

    return str(date_value)


def format_amount(value: Optional[float], currency: str = "₹") -> str:
    """
    Format a money amount, e.g. 1234.5 -> '₹1,234.50'

    Args:
        value: Amount to format
        currency: Currency symbol prefix

    Returns:
        Formatted amount or '-' when missing
    """
    if value is None:
        return "-"
    sign = "-" if value < 0 else ""
    return f"{sign}{currency}{abs(value):,.2f}"


def format_signed_amount(value: float, txn_type: str, currency: str = "₹") -> str:
    """Expenses are shown negative, income positive."""
    return format_amount(-value if txn_type == EXPENSE else value, currency)


def truncate_text(text: Optional[str], max_length: int = 50, ellipsis: str = "...") -> str:
    """
    Truncate text to a maximum length

    Args:
        text: Text to truncate
        max_length: Maximum length
        ellipsis: Ellipsis string to append

    Returns:
        Truncated text
    """
    if not text:
        return ""

    if len(text) <= max_length:
        return text

    return text[:max_length - len(ellipsis)] + ellipsis


def title_case(value: Optional[str]) -> str:
    """'inactive' -> 'Inactive'; empty for None."""
    return value.capitalize() if value else ""
