"""Display formatting for registration timestamps."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional

__all__ = [
    "format_detail_timestamp",
    "format_export_date",
    "format_table_date",
    "to_local",
]


def to_local(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Convert an aware timestamp to *tz* (the machine's zone by default).

    Naive values are treated as already local.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(tz)


def format_table_date(value: datetime, tz: Optional[tzinfo] = None) -> str:
    """``Jan 05, 2025`` style, used by the dashboard table rows."""
    return to_local(value, tz).strftime("%b %d, %Y")


def format_detail_timestamp(value: datetime, tz: Optional[tzinfo] = None) -> str:
    """``January 05, 2025 at 03:45 PM`` style, used by the detail dialog."""
    return to_local(value, tz).strftime("%B %d, %Y at %I:%M %p")


def format_export_date(value: datetime, tz: Optional[tzinfo] = None) -> str:
    """``01/05/2025`` style, the "Registered Date" export column."""
    return to_local(value, tz).strftime("%m/%d/%Y")
