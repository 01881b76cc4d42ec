"""
Base Service Class.

Shared parent of the registration services (photo handling, the public
form workflow, admin record management and export).  Holds the injected
structured logger; subclasses take their repositories and the session
through their own ``__init__``.
"""

from __future__ import annotations

from app.logger import StructuredLogger


class BaseService:
    """Logger-holding base for registration services."""

    def __init__(self, logger: StructuredLogger) -> None:
        self._logger: StructuredLogger = logger
