"""Registration Detail Dialog.

Read-only modal showing one registration with its photo and the
"Registered on" timestamp.  The photo is downloaded on a worker thread
and rendered when it arrives.

**Thin UI Rule**: Zero business logic — only reads and displays.
"""

from __future__ import annotations

import threading
from typing import Optional

import customtkinter as ctk
from PIL import Image

from app.logger import StructuredLogger
from app.models.service_models import RegistrationDetail
from app.services.photo_service import PhotoService
from app.ui.theme import (
    CONTENT_CARD_BG,
    CORNER_RADIUS,
    FONT_BODY,
    FONT_HEADING,
    FONT_LABEL,
    FONT_SMALL,
    NEUTRAL_BUTTON,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)

_PHOTO_SIZE: int = 160


class DetailDialog(ctk.CTkToplevel):
    """Modal view of one registration.

    Parameters
    ----------
    parent:
        Owning widget.
    detail:
        The record and its formatted timestamp.
    photo_service:
        Used to download and thumbnail the stored photo.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        parent: ctk.CTkBaseClass,
        detail: RegistrationDetail,
        photo_service: PhotoService,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(parent)
        self._photos = photo_service
        self._logger = logger
        self._image: Optional[ctk.CTkImage] = None

        record = detail.registration
        self.title("Registration Details")
        self.geometry("520x560")
        self.resizable(False, False)
        self.transient(parent.winfo_toplevel())

        card = ctk.CTkFrame(self, fg_color=CONTENT_CARD_BG, corner_radius=CORNER_RADIUS)
        card.pack(fill="both", expand=True, padx=PADDING_MD, pady=PADDING_MD)

        header = ctk.CTkFrame(card, fg_color="transparent")
        header.pack(fill="x", padx=PADDING_MD, pady=(PADDING_MD, PADDING_SM))

        self._photo_label = ctk.CTkLabel(
            header,
            text="Loading photo...",
            width=_PHOTO_SIZE,
            height=_PHOTO_SIZE,
            font=FONT_SMALL,
            text_color=TEXT_SECONDARY,
            fg_color=NEUTRAL_BUTTON,
            corner_radius=CORNER_RADIUS,
        )
        self._photo_label.pack(side="left")

        title_box = ctk.CTkFrame(header, fg_color="transparent")
        title_box.pack(side="left", fill="both", expand=True, padx=(PADDING_MD, 0))
        ctk.CTkLabel(
            title_box,
            text=record.full_name,
            font=FONT_HEADING,
            text_color=TEXT_PRIMARY,
            anchor="w",
            wraplength=280,
        ).pack(fill="x")
        ctk.CTkLabel(
            title_box,
            text=record.department,
            font=FONT_BODY,
            text_color=TEXT_SECONDARY,
            anchor="w",
        ).pack(fill="x")

        for label, value in (
            ("EMAIL", record.email),
            ("MOBILE", record.mobile_number),
            ("GENDER", str(record.gender).capitalize()),
            ("ADDRESS", record.address),
            ("REGISTERED ON", detail.registered_on),
        ):
            ctk.CTkLabel(
                card,
                text=label,
                font=FONT_LABEL,
                text_color=TEXT_SECONDARY,
                anchor="w",
            ).pack(fill="x", padx=PADDING_MD, pady=(PADDING_SM, 0))
            ctk.CTkLabel(
                card,
                text=value,
                font=FONT_BODY,
                text_color=TEXT_PRIMARY,
                anchor="w",
                justify="left",
                wraplength=440,
            ).pack(fill="x", padx=PADDING_MD)

        ctk.CTkButton(
            card,
            text="Close",
            command=self.destroy,
        ).pack(pady=(PADDING_LG, PADDING_MD))

        self.after(50, self.grab_set)
        self._load_photo(record.photo_url)

    def _load_photo(self, url: str) -> None:
        def _worker() -> None:
            try:
                image = self._photos.fetch_remote_preview(url)
            except Exception as exc:
                self._logger.warning("Photo download failed for %s: %s", url, exc)
                self.after(0, self._show_photo_error)
                return
            self.after(0, self._show_photo, image)

        threading.Thread(target=_worker, name="photo-download", daemon=True).start()

    def _show_photo(self, image: Image.Image) -> None:
        if not self.winfo_exists():
            return
        width, height = image.size
        scale = _PHOTO_SIZE / max(width, height)
        self._image = ctk.CTkImage(
            light_image=image,
            size=(max(1, int(width * scale)), max(1, int(height * scale))),
        )
        self._photo_label.configure(image=self._image, text="")

    def _show_photo_error(self) -> None:
        if self.winfo_exists():
            self._photo_label.configure(text="Photo unavailable")
