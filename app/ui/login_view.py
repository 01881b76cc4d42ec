"""Login View — Admin Authentication Screen.

Presents a login card with Sign In / Create Admin tabs and
authenticates against Supabase via ``AuthService``.

**Thin UI Rule**: This module contains ZERO business logic.  It
gathers inputs, delegates to ``AuthService``, and displays results.
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

import customtkinter as ctk

from app.logger import StructuredLogger
from app.models.auth_models import AuthErrorCode, AuthResult
from app.services.auth_service import SIGNUP_SUCCESS, AuthService
from app.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    BUTTON_HEIGHT,
    CONTENT_BG,
    CONTENT_CARD_BG,
    CORNER_RADIUS,
    ERROR_TEXT,
    FONT_BODY,
    FONT_BRAND,
    FONT_BUTTON,
    FONT_ICON_LG,
    FONT_LABEL,
    FONT_SMALL,
    FONT_SUBTITLE,
    FONT_TAB,
    FONT_TAB_ACTIVE,
    INPUT_BG,
    INPUT_BORDER,
    INPUT_HEIGHT,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    SUCCESS_TEXT,
    TAB_HOVER,
    TEXT_LIGHT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
_CARD_WIDTH: int = 420
_TAB_HEIGHT: int = 42
_BRAND_ICON_SIZE: int = 56


class _CredentialsForm(ctk.CTkFrame):
    """Email + password inputs with per-field error labels and a button."""

    def __init__(
        self,
        parent: ctk.CTkFrame,
        button_text: str,
        command: Callable[[], None],
    ) -> None:
        super().__init__(parent, fg_color="transparent")
        self._button_text = button_text

        self.email_entry = self._entry("EMAIL ADDRESS", "admin@example.com")
        self.email_error = self._error()
        self.password_entry = self._entry(
            "PASSWORD", "••••••••", show="*",
        )
        self.password_error = self._error()

        self.button = ctk.CTkButton(
            self,
            text=button_text,
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_LIGHT,
            height=BUTTON_HEIGHT,
            corner_radius=CORNER_RADIUS,
            command=command,
        )
        self.button.pack(fill="x", pady=(PADDING_MD, PADDING_SM))

        self.message_label = ctk.CTkLabel(
            self,
            text="",
            font=FONT_SMALL,
            text_color=ERROR_TEXT,
            wraplength=_CARD_WIDTH - 100,
        )
        self.message_label.pack(fill="x")

        self.email_entry.bind("<Return>", lambda _e: command())
        self.password_entry.bind("<Return>", lambda _e: command())

    def _entry(self, label: str, placeholder: str, show: str = "") -> ctk.CTkEntry:
        ctk.CTkLabel(
            self,
            text=label,
            font=FONT_LABEL,
            text_color=TEXT_PRIMARY,
            anchor="w",
        ).pack(fill="x", pady=(PADDING_SM, 4))
        entry = ctk.CTkEntry(
            self,
            placeholder_text=placeholder,
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            show=show,
            height=INPUT_HEIGHT,
            corner_radius=CORNER_RADIUS,
        )
        entry.pack(fill="x")
        return entry

    def _error(self) -> ctk.CTkLabel:
        label = ctk.CTkLabel(
            self,
            text="",
            font=FONT_SMALL,
            text_color=ERROR_TEXT,
            anchor="w",
            height=16,
        )
        label.pack(fill="x")
        return label

    def credentials(self) -> tuple[str, str]:
        return self.email_entry.get(), self.password_entry.get()

    def show_result(self, result: AuthResult, success_text: str = "") -> None:
        self.email_error.configure(text=result.field_errors.get("email", ""))
        self.password_error.configure(text=result.field_errors.get("password", ""))
        if result.field_errors:
            self.message_label.configure(text="")
        elif result.success and success_text:
            self.message_label.configure(text=success_text, text_color=SUCCESS_TEXT)
        else:
            self.message_label.configure(
                text=result.error_message or "", text_color=ERROR_TEXT,
            )

    def show_message(self, message: str, error: bool = True) -> None:
        self.message_label.configure(
            text=message, text_color=ERROR_TEXT if error else SUCCESS_TEXT,
        )

    def set_loading(self, loading: bool, loading_text: str) -> None:
        if loading:
            self.button.configure(text=loading_text, state="disabled")
        else:
            self.button.configure(text=self._button_text, state="normal")

    def clear(self) -> None:
        self.email_entry.delete(0, "end")
        self.password_entry.delete(0, "end")
        self.email_error.configure(text="")
        self.password_error.configure(text="")
        self.message_label.configure(text="")


class LoginView(ctk.CTkFrame):
    """Full-screen login frame with Sign In / Create Admin tabs.

    Delegates all authentication logic to the injected ``AuthService``:

    - Login (Supabase password sign-in + admin role lookup)
    - Admin sign-up (Supabase sign_up + admin role grant)

    Parameters
    ----------
    parent:
        The root ``CTk`` window this frame belongs to.
    auth_service:
        Centralised authentication service encapsulating all auth logic.
    on_login_success:
        Callback invoked (on the main thread) after an admin signs in.
    on_back:
        Callback for the "Back to registration" link.
    logger:
        Structured JSON logger.
    """

    def __init__(
        self,
        parent: ctk.CTk,
        auth_service: AuthService,
        on_login_success: Callable[[], None],
        on_back: Callable[[], None],
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color=CONTENT_BG)

        self._auth_service: AuthService = auth_service
        self._on_login_success: Callable[[], None] = on_login_success
        self._on_back: Callable[[], None] = on_back
        self._logger: StructuredLogger = logger

        self._active_tab: str = "sign_in"
        self._switch_job: Optional[str] = None

        self._build_ui()

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        """Create the centred login card."""
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)
        self.grid_rowconfigure(2, weight=0)
        self.grid_rowconfigure(3, weight=1)
        self.grid_columnconfigure(0, weight=1)

        card = ctk.CTkFrame(
            self,
            width=_CARD_WIDTH,
            fg_color=CONTENT_CARD_BG,
            corner_radius=16,
            border_width=1,
            border_color="#e0e0e0",
        )
        card.grid(row=1, column=0, pady=(0, PADDING_SM))

        inner = ctk.CTkFrame(card, fg_color="transparent")
        inner.pack(fill="both", expand=True, padx=36, pady=28)

        icon_frame = ctk.CTkFrame(
            inner,
            width=_BRAND_ICON_SIZE,
            height=_BRAND_ICON_SIZE,
            corner_radius=14,
            fg_color=ACCENT_PRIMARY,
        )
        icon_frame.pack(pady=(0, 12))
        icon_frame.pack_propagate(False)
        ctk.CTkLabel(
            icon_frame,
            text="✓",
            font=FONT_ICON_LG,
            text_color=TEXT_LIGHT,
        ).place(relx=0.5, rely=0.5, anchor="center")

        ctk.CTkLabel(
            inner,
            text="Admin Portal",
            font=FONT_BRAND,
            text_color=TEXT_PRIMARY,
        ).pack(pady=(0, 2))
        ctk.CTkLabel(
            inner,
            text="Manage registrations",
            font=FONT_SUBTITLE,
            text_color=TEXT_SECONDARY,
        ).pack(pady=(0, PADDING_LG))

        # -- Tab bar --
        tab_bar = ctk.CTkFrame(inner, fg_color="transparent", height=_TAB_HEIGHT)
        tab_bar.pack(fill="x", pady=(0, PADDING_SM))
        tab_bar.pack_propagate(False)
        tab_bar.grid_columnconfigure(0, weight=1)
        tab_bar.grid_columnconfigure(1, weight=1)

        self._sign_in_tab = self._tab_button(tab_bar, "Sign In", "sign_in")
        self._sign_in_tab.grid(row=0, column=0, sticky="nsew")
        self._signup_tab = self._tab_button(tab_bar, "Create Admin", "sign_up")
        self._signup_tab.grid(row=0, column=1, sticky="nsew")

        self._sign_in_form = _CredentialsForm(inner, "Sign In  →", self._handle_login)
        self._signup_form = _CredentialsForm(
            inner, "Create Admin Account  →", self._handle_signup,
        )
        self._sign_in_form.pack(fill="both", expand=True)
        self._style_tabs()

        ctk.CTkButton(
            self,
            text="← Back to registration",
            font=FONT_SMALL,
            fg_color="transparent",
            hover_color=TAB_HOVER,
            text_color=ACCENT_PRIMARY,
            command=self._on_back,
        ).grid(row=2, column=0, pady=(PADDING_SM, 0))

    def _tab_button(self, parent: ctk.CTkFrame, text: str, tab: str) -> ctk.CTkButton:
        return ctk.CTkButton(
            parent,
            text=text,
            font=FONT_TAB,
            fg_color="transparent",
            hover_color=TAB_HOVER,
            text_color=TEXT_SECONDARY,
            height=_TAB_HEIGHT,
            corner_radius=0,
            border_width=1,
            border_color=INPUT_BORDER,
            command=lambda: self._switch_tab(tab),
        )

    # ------------------------------------------------------------------
    # Tab switching
    # ------------------------------------------------------------------

    def _switch_tab(self, tab: str) -> None:
        """Switch between Sign In and Create Admin tabs."""
        if tab == self._active_tab:
            return
        self._active_tab = tab
        if tab == "sign_in":
            self._signup_form.pack_forget()
            self._sign_in_form.pack(fill="both", expand=True)
        else:
            self._sign_in_form.pack_forget()
            self._signup_form.pack(fill="both", expand=True)
        self._style_tabs()

    def _style_tabs(self) -> None:
        for tab, button in (("sign_in", self._sign_in_tab), ("sign_up", self._signup_tab)):
            active = tab == self._active_tab
            button.configure(
                text_color=ACCENT_PRIMARY if active else TEXT_SECONDARY,
                border_color=ACCENT_PRIMARY if active else INPUT_BORDER,
                border_width=2 if active else 1,
                font=FONT_TAB_ACTIVE if active else FONT_TAB,
            )

    # ------------------------------------------------------------------
    # Event Handlers: Sign In
    # ------------------------------------------------------------------

    def _handle_login(self) -> None:
        """Gather inputs and start background auth."""
        email, password = self._sign_in_form.credentials()
        self._sign_in_form.set_loading(True, "Signing in...")

        threading.Thread(
            target=self._authenticate,
            args=(email, password),
            daemon=True,
        ).start()

    def _authenticate(self, email: str, password: str) -> None:
        """Background thread: delegate to AuthService.login().

        All UI mutations are dispatched back via ``self.after(0, ...)``.
        """
        try:
            result = self._auth_service.login(email, password)
            if result.error_code == AuthErrorCode.NOT_AN_ADMIN:
                self._auth_service.logout()
        except Exception as exc:
            self._logger.error("Login crashed: %s", exc)
            error_msg = str(exc)
            self.after(
                0,
                lambda msg=error_msg: self._sign_in_form.show_message(f"Login failed: {msg}"),
            )
        else:
            self.after(0, self._show_login_result, result)
        finally:
            self.after(0, lambda: self._sign_in_form.set_loading(False, ""))

    def _show_login_result(self, result: AuthResult) -> None:
        if result.success and result.is_admin:
            self._on_login_success()
            return
        self._sign_in_form.show_result(result)

    # ------------------------------------------------------------------
    # Event Handlers: Create Admin
    # ------------------------------------------------------------------

    def _handle_signup(self) -> None:
        email, password = self._signup_form.credentials()
        self._signup_form.set_loading(True, "Creating account...")

        def _worker() -> None:
            try:
                result = self._auth_service.signup_admin(email, password)
            except Exception as exc:
                self._logger.error("Sign-up crashed: %s", exc)
                error_msg = str(exc)
                self.after(
                    0,
                    lambda msg=error_msg: self._signup_form.show_message(
                        f"Registration failed: {msg}"
                    ),
                )
            else:
                self.after(0, self._show_signup_result, result)
            finally:
                self.after(0, lambda: self._signup_form.set_loading(False, ""))

        threading.Thread(target=_worker, daemon=True).start()

    def _show_signup_result(self, result: AuthResult) -> None:
        if not result.success:
            self._signup_form.show_result(result)
            return

        if result.requires_confirmation:
            self._signup_form.clear()
            self._signup_form.show_message(
                "Account created. Confirm your email, then sign in.", error=False,
            )
            self._switch_job = self.after(3000, lambda: self._switch_tab("sign_in"))
            return

        self._signup_form.show_message(SIGNUP_SUCCESS, error=False)
        self._on_login_success()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def show_message(self, message: str) -> None:
        """Show *message* under the Sign In form (e.g. after a redirect)."""
        self._switch_tab("sign_in")
        self._sign_in_form.show_message(message)

    def destroy(self) -> None:
        if self._switch_job is not None:
            self.after_cancel(self._switch_job)
            self._switch_job = None
        super().destroy()
