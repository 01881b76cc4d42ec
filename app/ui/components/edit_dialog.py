"""Registration Edit Dialog.

Modal form pre-populated from a registration.  Saving runs
``RegistrationAdminService.save_edit`` on a worker thread; field errors
render inline and the dialog stays open, success closes it.
"""

from __future__ import annotations

import threading
from typing import Callable

import customtkinter as ctk

from app.logger import StructuredLogger
from app.models.registration import Registration
from app.models.service_models import ServiceResult
from app.services.registration_admin import RegistrationAdminService, UPDATE_FAILED
from app.ui.components.registration_fields import RegistrationFields
from app.ui.theme import (
    ACCENT_HOVER,
    ACCENT_PRIMARY,
    ERROR_TEXT,
    FONT_BUTTON,
    FONT_HEADING,
    FONT_SMALL,
    NEUTRAL_BUTTON,
    NEUTRAL_HOVER,
    PADDING_MD,
    PADDING_SM,
    TEXT_LIGHT,
    TEXT_PRIMARY,
)


class EditDialog(ctk.CTkToplevel):
    """Modal edit form for one registration.

    Parameters
    ----------
    parent:
        Owning widget.
    record_id:
        Id of the registration being edited.
    initial_values:
        Form values from ``RegistrationAdminService.edit_form``.
    admin_service:
        Performs validation and the update.
    on_saved:
        Called on the main thread with the updated record.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        parent: ctk.CTkBaseClass,
        record_id: str,
        initial_values: dict[str, str],
        admin_service: RegistrationAdminService,
        on_saved: Callable[[Registration], None],
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent)
        self._record_id = record_id
        self._admin = admin_service
        self._on_saved = on_saved
        self._logger = logger

        self.title("Edit Registration")
        self.geometry("560x680")
        self.transient(parent.winfo_toplevel())

        ctk.CTkLabel(
            self,
            text="Edit Registration",
            font=FONT_HEADING,
            text_color=TEXT_PRIMARY,
            anchor="w",
        ).pack(fill="x", padx=PADDING_MD, pady=(PADDING_MD, 0))

        scroller = ctk.CTkScrollableFrame(self, fg_color="transparent")
        scroller.pack(fill="both", expand=True, padx=PADDING_SM, pady=PADDING_SM)

        self._fields = RegistrationFields(scroller)
        self._fields.pack(fill="x", padx=PADDING_SM)
        self._fields.set_values(initial_values)

        self._error_label = ctk.CTkLabel(
            self,
            text="",
            font=FONT_SMALL,
            text_color=ERROR_TEXT,
        )
        self._error_label.pack(fill="x", padx=PADDING_MD)

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.pack(fill="x", padx=PADDING_MD, pady=(0, PADDING_MD))

        self._save_button = ctk.CTkButton(
            buttons,
            text="Save Changes",
            font=FONT_BUTTON,
            fg_color=ACCENT_PRIMARY,
            hover_color=ACCENT_HOVER,
            text_color=TEXT_LIGHT,
            command=self._save,
        )
        self._save_button.pack(side="right")

        ctk.CTkButton(
            buttons,
            text="Cancel",
            font=FONT_BUTTON,
            fg_color=NEUTRAL_BUTTON,
            hover_color=NEUTRAL_HOVER,
            text_color=TEXT_PRIMARY,
            command=self.destroy,
        ).pack(side="right", padx=(0, PADDING_SM))

        self.after(50, self.grab_set)

    def _save(self) -> None:
        values = self._fields.values()
        self._save_button.configure(text="Saving...", state="disabled")
        self._error_label.configure(text="")

        def _worker() -> None:
            try:
                result = self._admin.save_edit(self._record_id, values)
            except Exception as exc:
                self._logger.error("Edit save failed: %s", exc)
                result = ServiceResult(success=False, error=UPDATE_FAILED)
            self.after(0, self._handle_result, result)

        threading.Thread(target=_worker, name="save-edit", daemon=True).start()

    def _handle_result(self, result: ServiceResult[Registration]) -> None:
        if not self.winfo_exists():
            return
        self._save_button.configure(text="Save Changes", state="normal")
        self._fields.show_errors(result.errors)

        if result.success and result.data is not None:
            self.grab_release()
            self.destroy()
            self._on_saved(result.data)
            return

        if result.error:
            self._error_label.configure(text=result.error)
