"""
Registration Desk Desktop Application Entry Point.

Bootstraps the dependency graph via constructor injection and launches
the CustomTkinter GUI.  Every subsystem is wired here, with no module-level
globals.

Usage::

    python main.py
"""

from __future__ import annotations

import sys
import traceback

from app.auth import SessionManager
from app.config import get_config
from app.database import DatabaseManager
from app.logger import StructuredLogger, get_logger
from app.services import create_services
from app.ui.app_shell import AppShell


def main() -> None:
    """Wire dependencies and launch the GUI."""
    logger: StructuredLogger = get_logger("main")
    logger.info("Starting Registration Desk...")

    # ------------------------------------------------------------------
    # 1. Configuration (from .env / environment variables)
    # ------------------------------------------------------------------
    config = get_config()

    # ------------------------------------------------------------------
    # 2. Database Manager (Supabase client for tables, storage and auth)
    # ------------------------------------------------------------------
    db = DatabaseManager(
        supabase_url=config.SUPABASE_URL,
        supabase_key=config.SUPABASE_ANON_KEY.get_secret_value(),
        logger=StructuredLogger(name="database"),
    )

    # ------------------------------------------------------------------
    # 3. Session Manager
    # ------------------------------------------------------------------
    session = SessionManager()

    # ------------------------------------------------------------------
    # 4. Service Container (repositories + services, single composition root)
    # ------------------------------------------------------------------
    services = create_services(db=db, config=config, session=session)

    # ------------------------------------------------------------------
    # 5. Launch the GUI (blocks until window closes)
    # ------------------------------------------------------------------
    logger.info("Launching GUI...")
    app = AppShell(
        config=config,
        session=session,
        services=services,
        logger=get_logger("ui"),
    )
    app.mainloop()
    logger.info("Registration Desk shut down.")


def _show_fatal_error(exc: BaseException) -> None:
    """Display a fatal-error dialog so double-click users get feedback.

    Uses ``tkinter.messagebox`` (stdlib) rather than CustomTkinter so
    the dialog works even when CTk initialisation itself is the thing
    that failed.
    """
    detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    try:
        import tkinter
        from tkinter import messagebox

        root = tkinter.Tk()
        root.withdraw()
        messagebox.showerror(
            title="Registration Desk - Fatal Error",
            message=(
                "The application encountered an unexpected error and "
                "cannot continue.\n\n"
                f"{type(exc).__name__}: {exc}"
            ),
            detail=detail,
        )
        root.destroy()
    except Exception:
        # Headless or missing Tcl/Tk: fall back to stderr.
        sys.stderr.write(
            f"FATAL: {type(exc).__name__}: {exc}\n{detail}"
        )


def run() -> None:
    """Console-script wrapper around ``main`` with fatal-error reporting."""
    try:
        main()
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        _show_fatal_error(exc)
        sys.exit(1)


if __name__ == "__main__":
    run()
