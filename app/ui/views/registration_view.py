"""Registration View — public registration form.

The screen the application opens on.  Collects the six profile fields
and a photo, submits through ``RegistrationFormWorkflow`` on a worker
thread, and shows a success panel that resets itself after a short
delay.

**Thin UI Rule**: This module contains ZERO business logic.  It gathers
inputs, delegates to the workflow, and displays results.
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

import customtkinter as ctk

from app.logger import StructuredLogger
from app.models.enums import FormState
from app.models.photo_models import PhotoFile
from app.models.service_models import SubmissionResult
from app.services.photo_service import PhotoService
from app.services.registration_form import (
    SUBMIT_FAILED,
    SUBMIT_SUCCESS,
    RegistrationFormWorkflow,
)
from app.ui.components.photo_picker import PhotoPicker
from app.ui.components.registration_fields import RegistrationFields
from app.ui.components.toast import Toast
from app.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    BUTTON_HEIGHT,
    CONTENT_BG,
    CONTENT_CARD_BG,
    CORNER_RADIUS,
    FONT_BRAND,
    FONT_BUTTON,
    FONT_HEADING,
    FONT_ICON_LG,
    FONT_SUBTITLE,
    FORM_CARD_WIDTH,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    SUCCESS_TEXT,
    TEXT_LIGHT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)


class RegistrationView(ctk.CTkFrame):
    """Public registration form with photo upload.

    Parameters
    ----------
    parent:
        The root ``CTk`` window this frame belongs to.
    workflow:
        Form state machine and submit pipeline.
    photo_service:
        Photo loading and preview decoding for the picker.
    on_admin_requested:
        Callback for the "Admin Login" link.
    logger:
        Structured JSON logger.
    """

    def __init__(
        self,
        parent: ctk.CTk,
        workflow: RegistrationFormWorkflow,
        photo_service: PhotoService,
        on_admin_requested: Callable[[], None],
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color=CONTENT_BG)
        self._workflow = workflow
        self._photos = photo_service
        self._on_admin_requested = on_admin_requested
        self._logger = logger
        self._reset_job: Optional[str] = None

        self._build_ui()
        self._toast = Toast(self)

    # ------------------------------------------------------------------
    # UI Construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        top = ctk.CTkFrame(self, fg_color="transparent")
        top.pack(fill="x", padx=PADDING_LG, pady=(PADDING_MD, 0))
        ctk.CTkButton(
            top,
            text="Admin Login",
            font=FONT_SUBTITLE,
            fg_color="transparent",
            hover_color=CONTENT_CARD_BG,
            text_color=ACCENT_PRIMARY,
            width=100,
            command=self._on_admin_requested,
        ).pack(side="right")

        scroller = ctk.CTkScrollableFrame(self, fg_color="transparent")
        scroller.pack(fill="both", expand=True)

        self._card = ctk.CTkFrame(
            scroller,
            width=FORM_CARD_WIDTH,
            fg_color=CONTENT_CARD_BG,
            corner_radius=16,
            border_width=1,
            border_color="#e0e0e0",
        )
        self._card.pack(pady=PADDING_LG)

        inner = ctk.CTkFrame(self._card, fg_color="transparent", width=FORM_CARD_WIDTH)
        inner.pack(fill="both", expand=True, padx=36, pady=28)

        ctk.CTkLabel(
            inner,
            text="Registration Form",
            font=FONT_BRAND,
            text_color=TEXT_PRIMARY,
        ).pack(pady=(0, 2))
        ctk.CTkLabel(
            inner,
            text="Fill in your details to register",
            font=FONT_SUBTITLE,
            text_color=TEXT_SECONDARY,
        ).pack(pady=(0, PADDING_MD))

        # -- Form content --
        self._form_frame = ctk.CTkFrame(inner, fg_color="transparent")
        self._form_frame.pack(fill="both", expand=True)

        self._fields = RegistrationFields(self._form_frame)
        self._fields.pack(fill="x")

        self._picker = PhotoPicker(
            self._form_frame,
            photo_service=self._photos,
            on_selected=self._handle_photo_selected,
            on_removed=self._workflow.clear_photo,
            logger=self._logger,
        )
        self._picker.pack(fill="x")

        self._submit_button = ctk.CTkButton(
            self._form_frame,
            text="Submit Registration",
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_LIGHT,
            height=BUTTON_HEIGHT,
            corner_radius=CORNER_RADIUS,
            command=self._handle_submit,
        )
        self._submit_button.pack(fill="x", pady=(PADDING_MD, 0))

        # -- Success panel (hidden until a submission succeeds) --
        self._success_frame = ctk.CTkFrame(inner, fg_color="transparent")
        ctk.CTkLabel(
            self._success_frame,
            text="✓",
            font=FONT_ICON_LG,
            text_color=SUCCESS_TEXT,
        ).pack(pady=(PADDING_LG, PADDING_SM))
        ctk.CTkLabel(
            self._success_frame,
            text="Registration Successful!",
            font=FONT_HEADING,
            text_color=TEXT_PRIMARY,
        ).pack()
        ctk.CTkLabel(
            self._success_frame,
            text="Thank you for registering. Your information has been submitted.",
            font=FONT_SUBTITLE,
            text_color=TEXT_SECONDARY,
            wraplength=FORM_CARD_WIDTH - 80,
        ).pack(pady=(PADDING_SM, PADDING_LG))

    # ------------------------------------------------------------------
    # Event Handlers
    # ------------------------------------------------------------------

    def _handle_photo_selected(self, photo: PhotoFile) -> Optional[str]:
        return self._workflow.select_photo(photo)

    def _handle_submit(self) -> None:
        values = self._fields.values()
        self._set_loading(True)

        def _worker() -> None:
            try:
                result = self._workflow.submit(values)
            except Exception as exc:
                self._logger.error("Submission crashed: %s", exc)
                self._workflow.reset()
                result = SubmissionResult(
                    success=False,
                    state=FormState.EDITING,
                    error=SUBMIT_FAILED,
                    values=values,
                )
            self.after(0, self._handle_result, result)

        threading.Thread(target=_worker, name="submit-registration", daemon=True).start()

    def _handle_result(self, result: SubmissionResult) -> None:
        if not self.winfo_exists():
            return
        self._set_loading(False)

        field_errors = {k: v for k, v in result.errors.items() if k != "photo"}
        self._fields.show_errors(field_errors)
        self._picker.show_error(result.errors.get("photo", ""))

        if result.success:
            self._toast.success(SUBMIT_SUCCESS)
            self._show_success()
            return

        if result.error:
            self._toast.error(result.error)

    def _show_success(self) -> None:
        self._form_frame.pack_forget()
        self._success_frame.pack(fill="both", expand=True)
        delay_ms = int(self._workflow.reset_delay * 1000)
        self._reset_job = self.after(delay_ms, self._reset_form)

    def _reset_form(self) -> None:
        self._reset_job = None
        self._workflow.reset()
        self._fields.clear()
        self._picker.reset()
        self._picker.show_error("")
        self._success_frame.pack_forget()
        self._form_frame.pack(fill="both", expand=True)

    # ------------------------------------------------------------------
    # UI Helper Methods
    # ------------------------------------------------------------------

    def _set_loading(self, loading: bool) -> None:
        if loading:
            self._submit_button.configure(text="Submitting...", state="disabled")
        else:
            self._submit_button.configure(text="Submit Registration", state="normal")
        self._fields.set_enabled(not loading)
        self._picker.set_enabled(not loading)

    def destroy(self) -> None:
        """Cancel the pending reset timer before destroying the widget."""
        if self._reset_job is not None:
            self.after_cancel(self._reset_job)
            self._reset_job = None
        super().destroy()
