"""
Authentication & Session State.

Provides an injectable ``SessionManager`` that holds the signed-in admin
identity for the lifetime of a single desktop session, together with the
result of the admin role lookup.

Usage::

    from app.auth import SessionManager
    from app.models.user import AdminUser

    session = SessionManager()
    session.begin_resolution()
    session.complete_resolution(
        AdminUser(id="abc-123", email="admin@example.com"),
        is_admin=True,
    )
    session.gate_state   # GateState.ALLOW
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Optional

from app.models.enums import GateState
from app.models.user import AdminUser


class SessionManager:
    """Injectable holder for the current identity and its admin flag.

    ``begin_resolution``, ``complete_resolution`` and ``clear`` are the
    only writers of the identity state.  While a resolution is running
    the gate reports ``PENDING`` so the dashboard can show a loading
    indicator instead of redirecting early.
    """

    def __init__(self) -> None:
        self._lock: threading.RLock = threading.RLock()
        self._current_user: Optional[AdminUser] = None
        self._is_admin: bool = False
        self._resolving: bool = False
        self._access_token: Optional[str] = None
        self._refresh_token: Optional[str] = None
        self._token_expiry: Optional[datetime] = None

    # ------------------------------------------------------------------
    # Writers
    # ------------------------------------------------------------------

    def begin_resolution(self) -> None:
        """Mark the identity / role lookup as in progress."""
        with self._lock:
            self._resolving = True

    def complete_resolution(self, user: Optional[AdminUser], is_admin: bool) -> None:
        """Record the outcome of an identity / role lookup.

        A ``None`` user always clears the admin flag.
        """
        with self._lock:
            self._current_user = user
            self._is_admin = bool(is_admin and user is not None)
            self._resolving = False

    def set_tokens(
        self,
        access_token: str,
        refresh_token: str,
        expires_at: Optional[int],
    ) -> None:
        """Store the Supabase auth tokens of the current session.

        Parameters
        ----------
        access_token:
            The short-lived JWT access token.
        refresh_token:
            The long-lived refresh token.
        expires_at:
            Unix timestamp (seconds) when the access token expires.
        """
        with self._lock:
            self._access_token = access_token
            self._refresh_token = refresh_token
            self._token_expiry = (
                datetime.fromtimestamp(expires_at, tz=timezone.utc)
                if expires_at is not None
                else None
            )

    def clear(self) -> None:
        """Remove the identity, admin flag and tokens, ending the session."""
        with self._lock:
            self._current_user = None
            self._is_admin = False
            self._resolving = False
            self._access_token = None
            self._refresh_token = None
            self._token_expiry = None

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------

    def get_current_user(self) -> AdminUser:
        """Return the signed-in identity.

        Raises:
            RuntimeError: If no identity is currently signed in.
        """
        with self._lock:
            if self._current_user is None:
                raise RuntimeError(
                    "No user is currently authenticated. Login required."
                )
            return self._current_user

    @property
    def current_user(self) -> Optional[AdminUser]:
        with self._lock:
            return self._current_user

    @property
    def is_authenticated(self) -> bool:
        """``True`` when an identity is currently signed in."""
        with self._lock:
            return self._current_user is not None

    @property
    def is_admin(self) -> bool:
        """``True`` when the signed-in identity holds the admin role."""
        with self._lock:
            return self._current_user is not None and self._is_admin

    @property
    def resolving(self) -> bool:
        with self._lock:
            return self._resolving

    @property
    def access_token(self) -> Optional[str]:
        """Return the current access token, or ``None`` if not set."""
        with self._lock:
            return self._access_token

    @property
    def refresh_token(self) -> Optional[str]:
        with self._lock:
            return self._refresh_token

    @property
    def gate_state(self) -> GateState:
        """Admin dashboard access decision for the current session."""
        with self._lock:
            if self._resolving:
                return GateState.PENDING
            if self._current_user is not None and self._is_admin:
                return GateState.ALLOW
            return GateState.REDIRECT
