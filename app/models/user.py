"""
Admin User Model.

The identity issued by Supabase Auth.  Whether the identity may use the
dashboard is decided by a role grant in ``user_roles``, held separately
by ``SessionManager.is_admin``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class AdminUser(BaseModel):
    """An authenticated identity."""

    id: str  # Supabase auth UUID
    email: str
    display_name: Optional[str] = None

    model_config = {"from_attributes": True}

    @property
    def label(self) -> str:
        """Name shown in the dashboard header."""
        return self.display_name or self.email
