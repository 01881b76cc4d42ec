"""Confirm Dialog Component.

Modal yes/no prompt used for the two-step registration delete.
"""

from __future__ import annotations

from typing import Callable

import customtkinter as ctk

from app.ui.theme import (
    DANGER_HOVER,
    DANGER_PRIMARY,
    FONT_BODY,
    FONT_BUTTON,
    FONT_HEADING,
    NEUTRAL_BUTTON,
    NEUTRAL_HOVER,
    PADDING_LG,
    PADDING_MD,
    PADDING_SM,
    TEXT_LIGHT,
    TEXT_PRIMARY,
    TEXT_SECONDARY,
)


class ConfirmDialog(ctk.CTkToplevel):
    """Modal confirmation.  Exactly one of the callbacks runs.

    Closing the window counts as cancelling.
    """

    def __init__(
        self,
        parent: ctk.CTkBaseClass,
        title: str,
        message: str,
        confirm_label: str,
        on_confirm: Callable[[], None],
        on_cancel: Callable[[], None],
    ) -> None:
        super().__init__(parent)
        self._on_confirm = on_confirm
        self._on_cancel = on_cancel

        self.title(title)
        self.geometry("440x200")
        self.resizable(False, False)
        self.transient(parent.winfo_toplevel())
        self.protocol("WM_DELETE_WINDOW", self._cancel)

        ctk.CTkLabel(
            self,
            text=title,
            font=FONT_HEADING,
            text_color=TEXT_PRIMARY,
        ).pack(padx=PADDING_MD, pady=(PADDING_LG, PADDING_SM))

        ctk.CTkLabel(
            self,
            text=message,
            font=FONT_BODY,
            text_color=TEXT_SECONDARY,
            wraplength=400,
        ).pack(padx=PADDING_MD, pady=(0, PADDING_MD))

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.pack(pady=(0, PADDING_MD))

        ctk.CTkButton(
            buttons,
            text="Cancel",
            font=FONT_BUTTON,
            fg_color=NEUTRAL_BUTTON,
            hover_color=NEUTRAL_HOVER,
            text_color=TEXT_PRIMARY,
            command=self._cancel,
        ).pack(side="left", padx=PADDING_SM)

        ctk.CTkButton(
            buttons,
            text=confirm_label,
            font=FONT_BUTTON,
            fg_color=DANGER_PRIMARY,
            hover_color=DANGER_HOVER,
            text_color=TEXT_LIGHT,
            command=self._confirm,
        ).pack(side="left", padx=PADDING_SM)

        self.after(50, self.grab_set)

    def _confirm(self) -> None:
        self.grab_release()
        self.destroy()
        self._on_confirm()

    def _cancel(self) -> None:
        self.grab_release()
        self.destroy()
        self._on_cancel()
