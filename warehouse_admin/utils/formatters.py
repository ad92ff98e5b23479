"""
Formatting utility functions
"""

from datetime import date, datetime
from typing import Any


def format_date(date_value: Any, format_str: str = "%Y-%m-%d") -> str:
    """
    Format a date value as a string

    Args:
        date_value: Date value to format (string, date, datetime, or other)
        format_str: Format string for strftime

    Returns:
        Formatted date string or empty string if missing
    """
    if not date_value:
        return ""

    if isinstance(date_value, str):
        try:
            dt = datetime.fromisoformat(date_value.replace('Z', '+00:00'))
            return dt.strftime(format_str)
        except ValueError:
            # Return original if parsing fails
            return date_value

    if isinstance(date_value, (datetime, date)):
        return date_value.strftime(format_str)

    return str(date_value)


def truncate_text(text: str, max_length: int = 50, ellipsis: str = "...") -> str:
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

    return text[:max_length-len(ellipsis)] + ellipsis


def describe_range(start: int, end: int, total: int, noun: str = "records") -> str:
    """'Showing 11-20 of 42 clients' style summary; 0-based half-open input."""
    if total == 0 or end <= start:
        return f"No {noun}"
    return f"Showing {start + 1}-{end} of {total} {noun}"
