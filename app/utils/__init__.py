"""Shared utility functions for the Registration Desk application.

This package provides convenience re-exports so that consumers can import
directly from ``app.utils`` (e.g. ``from app.utils import format_table_date``)
while full absolute imports (e.g. ``from app.utils.formatting import
format_table_date``) remain supported.
"""

from app.utils.formatting import (
    format_detail_timestamp,
    format_export_date,
    format_table_date,
    to_local,
)

__all__ = [
    "format_detail_timestamp",
    "format_export_date",
    "format_table_date",
    "to_local",
]
