"""
Structured JSON Logging Module.

One JSON object per line, on stdout and in a rotating log file.

Services tag every state change (submission, update, deletion, login)
with an ``event`` extra.  The formatter lifts it to a top-level key so
the stream can be filtered by workflow, and masks credential-bearing
extras so a careless ``extra={"password": ...}`` never reaches disk.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO, Union

REDACTED = "***"

# Extra keys whose values are never written out.
SENSITIVE_KEYS: frozenset[str] = frozenset(
    {"password", "access_token", "refresh_token", "token", "anon_key"}
)


class JSONFormatter(logging.Formatter):
    """Formats log records as structured JSON objects.

    Each log entry contains:
        - timestamp  (ISO-8601, UTC)
        - level
        - logger_name
        - event      (when the caller passed ``extra={"event": ...}``)
        - message
        - extra      (remaining caller-supplied fields, sensitive ones masked)
        - exception  (formatted traceback, when present)
    """

    _STANDARD_ATTRS: frozenset[str] = frozenset(
        logging.LogRecord(
            name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None
        ).__dict__.keys()
    ) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Union[str, dict[str, str]]] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger_name": record.name,
        }

        event = getattr(record, "event", None)
        if event:
            entry["event"] = str(event)
        entry["message"] = record.getMessage()

        extra_fields = {
            key: REDACTED if key.lower() in SENSITIVE_KEYS else str(value)
            for key, value in record.__dict__.items()
            if key not in self._STANDARD_ATTRS and key != "event"
        }
        if extra_fields:
            entry["extra"] = extra_fields

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            entry["exception"] = record.exc_text

        return json.dumps(entry, ensure_ascii=False)


class StructuredLogger:
    """Injectable logger wrapper.

    Loggers are keyed by *name*; handlers are attached only the first
    time a name is seen, so constructing several ``StructuredLogger``
    objects for the same component does not duplicate output.

    Usage::

        log = StructuredLogger(name="registration_form")
        log.info("Registration submitted", extra={"event": "REGISTRATION_SUBMITTED"})
    """

    def __init__(
        self,
        name: str = "registration_desk",
        level: int = logging.INFO,
        stream: Union[TextIO, None] = None,
        log_file: Optional[str] = None,
        max_bytes: Optional[int] = None,
        backup_count: Optional[int] = None,
    ) -> None:
        self._logger: logging.Logger = logging.getLogger(name)
        self._logger.setLevel(level)
        if not self._logger.handlers:
            self._attach_handlers(level, stream, log_file, max_bytes, backup_count)

    def _attach_handlers(
        self,
        level: int,
        stream: Union[TextIO, None],
        log_file: Optional[str],
        max_bytes: Optional[int],
        backup_count: Optional[int],
    ) -> None:
        # Lazy import: app.config logs through the stdlib at import time.
        from app.config import get_config

        cfg = get_config()
        formatter = JSONFormatter()

        stream_handler = logging.StreamHandler(stream or sys.stdout)
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        self._logger.addHandler(stream_handler)

        log_path = Path(log_file or cfg.LOG_FILE)
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=str(log_path),
                maxBytes=max_bytes if max_bytes is not None else cfg.LOG_MAX_BYTES,
                backupCount=backup_count if backup_count is not None else cfg.LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError as exc:
            self._logger.warning(
                "Could not open log file '%s': %s. Logging to console only.",
                log_path,
                exc,
            )
            return
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        self._logger.addHandler(file_handler)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args: object, **kwargs: object) -> None:
        self._logger.critical(msg, *args, **kwargs)


def get_logger(name: str = "registration_desk") -> StructuredLogger:
    return StructuredLogger(name=name)
