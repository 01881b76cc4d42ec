"""Photo Picker Component.

Lets the user choose a local image, shows a preview, and offers a
remove control.  Selection rules and preview decoding live in the
services; this widget only opens the file dialog and renders results.

**Thin UI Rule**: the picked file is handed to ``on_selected``; the
owner decides (via ``RegistrationFormWorkflow.select_photo``) whether
it is kept, and reports back with ``show_preview`` or ``show_error``.
"""

from __future__ import annotations

import threading
from pathlib import Path
from tkinter import filedialog
from typing import Callable, Optional

import customtkinter as ctk
from PIL import Image

from app.logger import StructuredLogger
from app.models.photo_models import PhotoFile
from app.services.photo_service import PhotoService
from app.ui.theme import (
    ACCENT_PRIMARY,
    CORNER_RADIUS,
    DANGER_PRIMARY,
    ERROR_TEXT,
    FONT_BODY,
    FONT_LABEL,
    FONT_SMALL,
    INPUT_BORDER,
    NEUTRAL_BUTTON,
    NEUTRAL_HOVER,
    PADDING_SM,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)

_PREVIEW_SIZE: int = 120
_FILE_TYPES: list[tuple[str, str]] = [
    ("Images", "*.jpg *.jpeg *.png"),
    ("All files", "*.*"),
]


class PhotoPicker(ctk.CTkFrame):
    """Upload control with preview and remove button.

    Parameters
    ----------
    parent:
        Containing widget.
    photo_service:
        Used to read the file and to decode the preview off-thread.
    on_selected:
        Called with the loaded ``PhotoFile``; returns an error message
        or ``None`` when the photo was accepted.
    on_removed:
        Called when the user clears the selection.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        parent: ctk.CTkBaseClass,
        photo_service: PhotoService,
        on_selected: Callable[[PhotoFile], Optional[str]],
        on_removed: Callable[[], None],
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent, fg_color="transparent")
        self._photos = photo_service
        self._on_selected = on_selected
        self._on_removed = on_removed
        self._logger = logger
        self._image: Optional[ctk.CTkImage] = None

        ctk.CTkLabel(
            self,
            text="PHOTO",
            font=FONT_LABEL,
            text_color=TEXT_PRIMARY,
            anchor="w",
        ).pack(fill="x", pady=(PADDING_SM, 2))

        row = ctk.CTkFrame(self, fg_color="transparent")
        row.pack(fill="x")

        self._preview = ctk.CTkLabel(
            row,
            text="No photo",
            width=_PREVIEW_SIZE,
            height=_PREVIEW_SIZE,
            font=FONT_SMALL,
            text_color=TEXT_SECONDARY,
            fg_color=NEUTRAL_BUTTON,
            corner_radius=CORNER_RADIUS,
        )
        self._preview.pack(side="left")

        buttons = ctk.CTkFrame(row, fg_color="transparent")
        buttons.pack(side="left", padx=(PADDING_SM * 2, 0))

        self._choose_button = ctk.CTkButton(
            buttons,
            text="Choose Photo",
            font=FONT_BODY,
            fg_color=ACCENT_PRIMARY,
            command=self._choose,
        )
        self._choose_button.pack(anchor="w", pady=(0, PADDING_SM))

        self._remove_button = ctk.CTkButton(
            buttons,
            text="Remove",
            font=FONT_BODY,
            fg_color=NEUTRAL_BUTTON,
            hover_color=NEUTRAL_HOVER,
            text_color=DANGER_PRIMARY,
            border_color=INPUT_BORDER,
            border_width=1,
            command=self._remove,
        )

        ctk.CTkLabel(
            buttons,
            text="JPG or PNG, up to 2MB",
            font=FONT_SMALL,
            text_color=TEXT_SECONDARY,
        ).pack(anchor="w")

        self._error_label = ctk.CTkLabel(
            self,
            text="",
            font=FONT_SMALL,
            text_color=ERROR_TEXT,
            anchor="w",
            height=16,
        )
        self._error_label.pack(fill="x")

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _choose(self) -> None:
        filename = filedialog.askopenfilename(
            title="Choose a photo",
            filetypes=_FILE_TYPES,
        )
        if not filename:
            return

        try:
            photo = self._photos.load(Path(filename))
        except OSError as exc:
            self._logger.warning("Could not read photo %s: %s", filename, exc)
            self.show_error("Could not read the selected file")
            return

        error = self._on_selected(photo)
        if error:
            self.reset()
            self.show_error(error)
            return

        self.show_error("")
        self._preview.configure(text="Loading...", image=None)

        def _decode() -> None:
            try:
                image = self._photos.build_preview(photo)
            except Exception as exc:
                self._logger.warning("Preview decode failed: %s", exc)
                self.after(0, lambda: self._preview.configure(text=photo.filename))
                return
            self.after(0, self.show_preview, image)

        threading.Thread(target=_decode, name="photo-preview", daemon=True).start()

    def _remove(self) -> None:
        self.reset()
        self._on_removed()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def show_preview(self, image: Image.Image) -> None:
        if not self.winfo_exists():
            return
        width, height = image.size
        scale = _PREVIEW_SIZE / max(width, height)
        self._image = ctk.CTkImage(
            light_image=image,
            size=(max(1, int(width * scale)), max(1, int(height * scale))),
        )
        self._preview.configure(image=self._image, text="")
        self._remove_button.pack(anchor="w", pady=(0, PADDING_SM))

    def show_error(self, message: str) -> None:
        self._error_label.configure(text=message)

    def reset(self) -> None:
        """Back to the empty state (no preview, no remove button)."""
        self._image = None
        self._preview.configure(image=None, text="No photo")
        self._remove_button.pack_forget()

    def set_enabled(self, enabled: bool) -> None:
        state = "normal" if enabled else "disabled"
        self._choose_button.configure(state=state)
        self._remove_button.configure(state=state)
