"""
Role Grant Repository.

Access to the ``user_roles`` relation: one row per (identity, role).
"""

from __future__ import annotations

from typing import Optional

from app.database import DatabaseManager
from app.logger import StructuredLogger
from app.models.enums import AppRole
from app.repositories.base_repository import BaseRepository


class RoleRepository(BaseRepository):
    """Data access layer for role grants.

    Policies only let an identity read its own grants, which is all the
    admin gate needs.
    """

    TABLE = "user_roles"

    def __init__(
        self,
        db: DatabaseManager,
        logger: StructuredLogger,
        table: Optional[str] = None,
    ) -> None:
        super().__init__(db, logger, table)

    def has_role(self, user_id: str, role: AppRole) -> bool:
        """``True`` when *user_id* holds *role*."""
        response = (
            self._table()
            .select("role")
            .eq("user_id", user_id)
            .eq("role", str(role))
            .limit(1)
            .execute()
        )
        return bool(self._rows(response))

    def grant(self, user_id: str, role: AppRole) -> None:
        """Insert a role grant for *user_id*."""
        self._table().insert({"user_id": user_id, "role": str(role)}).execute()
        self._logger.info("Role granted: %s -> %s", user_id, role)
