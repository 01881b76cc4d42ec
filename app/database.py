"""
Supabase Connection Layer.

Holds the single ``supabase.Client`` used by every repository and by the
authentication service.  The client carries the signed-in user's access
token, so row-level policies on the hosted database and storage bucket
see the same identity the session manager holds.

This module only manages the *connection*; it contains no query logic.

Usage (dependency injection at app startup)::

    from app.database import DatabaseManager
    from app.logger import StructuredLogger

    db = DatabaseManager(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_ANON_KEY.get_secret_value(),
        logger=StructuredLogger(name="database"),
    )
"""

from __future__ import annotations

from typing import Optional

from supabase import create_client, Client as SupabaseClient

from app.logger import StructuredLogger


class DatabaseManager:
    """Owns the Supabase client for the lifetime of the application.

    When ``supabase_url`` or ``supabase_key`` is empty the client is
    **not** created.  Every service wraps store calls in ``try/except``,
    so the ``RuntimeError`` raised by :pyattr:`supabase` surfaces as an
    ordinary, retryable failure in the UI.

    Parameters
    ----------
    supabase_url:
        The Supabase project URL (e.g. ``https://xyz.supabase.co``).
    supabase_key:
        The project's anonymous (publishable) key.  Admin privileges come
        from the signed-in session, never from a service-role key.
    logger:
        A ``StructuredLogger`` instance for structured JSON log output.
    client:
        Pre-built client, used instead of ``create_client`` when given.
    """

    def __init__(
        self,
        supabase_url: str,
        supabase_key: str,
        logger: StructuredLogger,
        client: Optional[SupabaseClient] = None,
    ) -> None:
        self._logger: StructuredLogger = logger
        self._supabase: Optional[SupabaseClient] = client

        if self._supabase is not None:
            return

        if supabase_url and supabase_key:
            try:
                self._supabase = create_client(supabase_url, supabase_key)
                self._logger.info("Supabase client initialized.")
            except (ValueError, TypeError) as exc:
                self._logger.warning(
                    "Supabase credential format error: %s. "
                    "Store operations are disabled.",
                    exc,
                )
            except Exception as exc:
                self._logger.error(
                    "Unexpected Supabase initialization failure: %s.",
                    exc,
                    exc_info=True,
                )
        else:
            self._logger.warning(
                "Supabase credentials not configured. Store operations are disabled."
            )

    @property
    def supabase(self) -> SupabaseClient:
        """Return the initialised Supabase client.

        Raises
        ------
        RuntimeError
            If the client was not initialised (missing or bad credentials).
        """
        if self._supabase is None:
            raise RuntimeError(
                "Supabase client is not initialised. "
                "Check SUPABASE_URL and SUPABASE_ANON_KEY."
            )
        return self._supabase

    @property
    def is_online(self) -> bool:
        """``True`` when the Supabase client is available."""
        return self._supabase is not None
