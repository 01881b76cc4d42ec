"""
Registration Repository.

Handles all ``registrations`` table access via Supabase.  Filtering and
pagination happen client-side after a full fetch, so the only read is
"everything, newest first".
"""

from __future__ import annotations

from typing import Optional

from app.database import DatabaseManager
from app.logger import StructuredLogger
from app.models.registration import Registration, RegistrationInput
from app.repositories.base_repository import BaseRepository


class RegistrationRepository(BaseRepository):
    """Data access layer for Registration rows.

    Inserts are allowed for anonymous sessions by the table's policies;
    reads, updates and deletes only succeed for an admin session.  A
    non-admin read returns no rows rather than an error.
    """

    TABLE = "registrations"

    def __init__(
        self,
        db: DatabaseManager,
        logger: StructuredLogger,
        table: Optional[str] = None,
    ) -> None:
        super().__init__(db, logger, table)

    def list_all(self) -> list[Registration]:
        """Fetch every registration ordered by ``created_at`` descending."""
        response = (
            self._table()
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [Registration(**row) for row in self._rows(response)]

    def insert(self, payload: RegistrationInput, photo_url: str) -> Registration:
        """Insert a new registration and return the stored row."""
        data = payload.to_row()
        data["photo_url"] = photo_url
        response = self._table().insert(data).execute()
        rows = self._rows(response)
        if not rows:
            raise RuntimeError("Insert returned no row.")
        created = Registration(**rows[0])
        self._logger.info("Registration created: %s", created.id)
        return created

    def update(self, record_id: str, payload: RegistrationInput) -> Optional[Registration]:
        """Patch the editable columns of one row.

        Returns the updated row, or ``None`` when no row matched *record_id*.
        ``updated_at`` is stamped by a table trigger.
        """
        response = (
            self._table()
            .update(payload.to_row())
            .eq("id", record_id)
            .execute()
        )
        rows = self._rows(response)
        if not rows:
            self._logger.warning("Update matched no registration: %s", record_id)
            return None
        return Registration(**rows[0])

    def delete(self, record_id: str) -> bool:
        """Delete one row.  Returns ``False`` when no row matched."""
        response = self._table().delete().eq("id", record_id).execute()
        deleted = bool(self._rows(response))
        if not deleted:
            self._logger.warning("Delete matched no registration: %s", record_id)
        return deleted
