"""
Application Configuration.

Pydantic Settings model for the Registration Desk application.
All configuration is loaded from environment variables and .env files.
Inject an AppConfig instance via dependency injection where needed.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import ClassVar, Optional

from pydantic_settings import BaseSettings
from pydantic import SecretStr, model_validator


class AppConfig(BaseSettings):
    """Central configuration loaded from environment variables and defaults."""

    # --- Supabase ---
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: SecretStr = SecretStr("")

    # --- Tables ---
    REGISTRATIONS_TABLE: str = "registrations"
    USER_ROLES_TABLE: str = "user_roles"

    # --- Photo storage ---
    PHOTO_BUCKET: str = "registration-photos"
    PHOTO_PATH_PREFIX: str = "registrations"
    MAX_PHOTO_BYTES: int = 2 * 1024 * 1024  # 2 MiB, inclusive
    PREVIEW_MAX_PX: int = 240
    PHOTO_FETCH_TIMEOUT_S: float = 10.0

    # Declared media types accepted by the upload control.  ClassVar so
    # pydantic-settings does not try to load it from the environment.
    ACCEPTED_PHOTO_TYPES: ClassVar[frozenset[str]] = frozenset(
        {"image/jpeg", "image/jpg", "image/png"}
    )

    # --- Registration form ---
    SUCCESS_RESET_DELAY_S: float = 3.0

    # --- Admin dashboard ---
    PAGE_SIZE: int = 10
    EXPORT_SHEET_NAME: str = "Registrations"

    # --- Logging ---
    LOG_FILE: str = "registration_desk.log"
    LOG_MAX_BYTES: int = 5_242_880  # 5 MB
    LOG_BACKUP_COUNT: int = 3

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @model_validator(mode="after")
    def _warn_missing_env(self) -> "AppConfig":
        """Emit a startup warning when critical configuration is empty.

        Pydantic silently falls back to defaults when ``.env`` is missing,
        so operators would otherwise only find out on the first failed
        request.
        """
        _log = logging.getLogger("app.config")

        if not Path(".env").exists():
            _log.warning(
                "No .env file found; all configuration loaded from "
                "environment variables or defaults."
            )

        if not self.SUPABASE_URL or not self.SUPABASE_ANON_KEY.get_secret_value():
            _log.warning(
                "SUPABASE_URL / SUPABASE_ANON_KEY are empty, so submissions "
                "and the admin dashboard will be unavailable."
            )

        return self


# ---------------------------------------------------------------------------
# Module-level singleton factory
# ---------------------------------------------------------------------------

_config_instance: Optional[AppConfig] = None
_config_lock: threading.Lock = threading.Lock()


def get_config() -> AppConfig:
    """Return a cached ``AppConfig`` singleton.

    On first call, creates an ``AppConfig`` instance (reading from ``.env``).
    Subsequent calls return the same instance.  Uses a check-lock-check
    pattern so the fast path never takes the lock.
    """
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = AppConfig()
    return _config_instance
