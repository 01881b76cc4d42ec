"""Toast Component.

Transient notification overlaid at the bottom of a window.  Auto-hides
after a few seconds; a new toast replaces the current one.
"""

from __future__ import annotations

from typing import Optional

import customtkinter as ctk

from app.ui.theme import (
    CORNER_RADIUS,
    FONT_BODY,
    PADDING_MD,
    PADDING_SM,
    TEXT_LIGHT,
    TOAST_ERROR_BG,
    TOAST_SUCCESS_BG,
)

_TOAST_DURATION_MS: int = 3_000


class Toast(ctk.CTkFrame):
    """Single-slot toast bound to a parent window."""

    def __init__(self, parent: ctk.CTkBaseClass) -> None:
        super().__init__(parent, corner_radius=CORNER_RADIUS, fg_color=TOAST_SUCCESS_BG)
        self._hide_job: Optional[str] = None
        self._label = ctk.CTkLabel(
            self,
            text="",
            font=FONT_BODY,
            text_color=TEXT_LIGHT,
        )
        self._label.pack(padx=PADDING_MD, pady=PADDING_SM)

    def show(self, message: str, error: bool = False) -> None:
        if self._hide_job is not None:
            self.after_cancel(self._hide_job)
        self.configure(fg_color=TOAST_ERROR_BG if error else TOAST_SUCCESS_BG)
        self._label.configure(text=message)
        self.place(relx=0.5, rely=0.96, anchor="s")
        self.lift()
        self._hide_job = self.after(_TOAST_DURATION_MS, self._hide)

    def success(self, message: str) -> None:
        self.show(message)

    def error(self, message: str) -> None:
        self.show(message, error=True)

    def _hide(self) -> None:
        self._hide_job = None
        if self.winfo_exists():
            self.place_forget()

    def destroy(self) -> None:
        if self._hide_job is not None:
            self.after_cancel(self._hide_job)
            self._hide_job = None
        super().destroy()
