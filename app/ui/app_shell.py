"""Application Host Shell.

The top-level ``CTk`` window that orchestrates the application
lifecycle: public registration form → admin login → admin dashboard →
sign-out.

All dependencies are injected via the constructor.  The shell contains
no business logic — it delegates authentication to the ``LoginView``,
the admin gate to ``DashboardView`` and submission to
``RegistrationView``.
"""

from __future__ import annotations

from typing import Optional

import customtkinter as ctk

from app import __version__ as _APP_VERSION
from app.auth import SessionManager
from app.config import AppConfig
from app.logger import StructuredLogger
from app.services import ServiceContainer
from app.ui.login_view import LoginView
from app.ui.theme import (
    LOGIN_WINDOW_HEIGHT,
    LOGIN_WINDOW_WIDTH,
    MAIN_WINDOW_HEIGHT,
    MAIN_WINDOW_WIDTH,
)
from app.ui.views.dashboard_view import DashboardView
from app.ui.views.registration_view import RegistrationView


class AppShell(ctk.CTk):
    """Host Shell — the main application window.

    Lifecycle
    ---------
    1. On boot: displays the public ``RegistrationView``.
    2. "Admin Login": swaps in the ``LoginView``.
    3. On admin sign-in: swaps in the ``DashboardView``, which resolves
       the admin gate itself and redirects back on failure.
    4. Sign-out: clears the session and returns to the login view.

    Exactly one view is mounted at a time.

    Parameters
    ----------
    config:
        Application configuration.
    session:
        Injectable session holder for the signed-in identity.
    services:
        Fully-wired service container.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        config: AppConfig,
        session: SessionManager,
        services: ServiceContainer,
        logger: StructuredLogger,
    ) -> None:
        super().__init__()

        self._config = config
        self._session = session
        self._services = services
        self._logger = logger
        self._current_view: Optional[ctk.CTkFrame] = None

        # Window defaults
        self.title(f"Registration Desk {_APP_VERSION}")
        ctk.set_appearance_mode("light")
        ctk.set_default_color_theme("blue")
        self.geometry(f"{MAIN_WINDOW_WIDTH}x{MAIN_WINDOW_HEIGHT}")
        self.resizable(True, True)
        self.minsize(LOGIN_WINDOW_WIDTH, LOGIN_WINDOW_HEIGHT)

        self.protocol("WM_DELETE_WINDOW", self._on_close)

        self._show_registration()

    # ==================================================================
    # View transitions
    # ==================================================================

    def _mount(self, view: ctk.CTkFrame) -> None:
        if self._current_view is not None:
            self._current_view.destroy()
        self._current_view = view
        view.pack(fill="both", expand=True)

    def _show_registration(self) -> None:
        """Display the public registration form."""
        self._mount(RegistrationView(
            parent=self,
            workflow=self._services["registration_form"],
            photo_service=self._services["photo_service"],
            on_admin_requested=self._show_login,
            logger=self._logger,
        ))

    def _show_login(self, message: str = "") -> None:
        """Display the login view, optionally with a message."""
        view = LoginView(
            parent=self,
            auth_service=self._services["auth_service"],
            on_login_success=self._show_dashboard,
            on_back=self._show_registration,
            logger=self._logger,
        )
        self._mount(view)
        if message:
            view.show_message(message)

    def _show_dashboard(self) -> None:
        """Display the admin dashboard (it runs its own access gate)."""
        user = self._session.current_user
        self._logger.info("Opening dashboard for %s", user.email if user else "unknown")
        self._mount(DashboardView(
            parent=self,
            session=self._session,
            auth_service=self._services["auth_service"],
            admin_service=self._services["registration_admin"],
            export_service=self._services["export_service"],
            photo_service=self._services["photo_service"],
            on_redirect=self._handle_redirect,
            logger=self._logger,
        ))

    def _handle_redirect(self) -> None:
        if self._session.is_authenticated and not self._session.is_admin:
            self._show_login("This account does not have admin access.")
        else:
            self._show_login()

    # ==================================================================
    # Window close
    # ==================================================================

    def _on_close(self) -> None:
        if self._current_view is not None:
            self._current_view.destroy()
            self._current_view = None
        self.destroy()
