"""Conversions shared by the API-facing models."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional


def parse_date(value: Any) -> Optional[datetime]:
    """Convert various inputs → datetime | None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        # Accept both ISO strings and plain YYYY-MM-DD
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return to_int(value)


def name_of(value: Any) -> str:
    """Nested objects (`{"id": 1, "name": "Main"}`) flatten to their name."""
    if isinstance(value, dict):
        return str(value.get("name") or value.get("email") or value.get("id") or "")
    return "" if value is None else str(value)
