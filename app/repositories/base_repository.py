"""
Base Repository.

Provides shared infrastructure for all repositories:
- DatabaseManager reference (Supabase client)
- Logger reference
- Convenience accessors for the table query builder

Repositories do not swallow client errors.  A failed request raises
(``postgrest.APIError``, ``storage3`` exceptions, network errors) and the
calling service decides how the failure is reported to the user.
"""

from __future__ import annotations

from typing import Optional

from supabase import Client as SupabaseClient

from app.database import DatabaseManager
from app.logger import StructuredLogger

Row = dict[str, object]


class BaseRepository:
    """Base class for all repositories. Receives dependencies via __init__."""

    TABLE: str = ""

    def __init__(
        self,
        db: DatabaseManager,
        logger: StructuredLogger,
        table: Optional[str] = None,
    ) -> None:
        self._db = db
        self._logger = logger
        if table:
            self.TABLE = table

    @property
    def supabase(self) -> SupabaseClient:
        """Returns the Supabase client for store operations."""
        return self._db.supabase

    def _table(self):
        """Query builder for this repository's table."""
        return self.supabase.table(self.TABLE)

    @staticmethod
    def _rows(response: object) -> list[Row]:
        """Extract the row list from a PostgREST response."""
        data = getattr(response, "data", None)
        if not data:
            return []
        if isinstance(data, dict):
            return [data]
        return list(data)
