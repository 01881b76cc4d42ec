"""Registration Fields Component.

The six editable registration inputs with inline error labels.  Shared
by the public registration view and the admin edit dialog.

**Thin UI Rule**: No validation here.  The owning view passes the raw
strings from ``values()`` to a service and renders the returned
``errors`` dict with ``show_errors()``.
"""

from __future__ import annotations

import customtkinter as ctk

from app.models.enums import DEPARTMENTS, Gender
from app.ui.theme import (
    CORNER_RADIUS,
    ERROR_TEXT,
    FONT_BODY,
    FONT_LABEL,
    FONT_SMALL,
    INPUT_BG,
    INPUT_BORDER,
    INPUT_HEIGHT,
    PADDING_SM,
    TEXT_PRIMARY,
)

_DEPARTMENT_PLACEHOLDER: str = "Select department"

_GENDER_LABELS: dict[str, str] = {
    Gender.MALE: "Male",
    Gender.FEMALE: "Female",
    Gender.OTHER: "Other",
}


class RegistrationFields(ctk.CTkFrame):
    """Labelled inputs for name, mobile, email, gender, department, address."""

    def __init__(self, parent: ctk.CTkBaseClass) -> None:
        super().__init__(parent, fg_color="transparent")

        self._error_labels: dict[str, ctk.CTkLabel] = {}
        self._gender_var = ctk.StringVar(value="")
        self._department_var = ctk.StringVar(value=_DEPARTMENT_PLACEHOLDER)

        self._full_name = self._add_entry("full_name", "FULL NAME", "John Doe")
        self._mobile = self._add_entry("mobile_number", "MOBILE NUMBER", "10-digit number")
        self._email = self._add_entry("email", "EMAIL ADDRESS", "name@example.com")

        self._add_label("GENDER")
        gender_row = ctk.CTkFrame(self, fg_color="transparent")
        gender_row.pack(fill="x")
        for value, label in _GENDER_LABELS.items():
            ctk.CTkRadioButton(
                gender_row,
                text=label,
                value=str(value),
                variable=self._gender_var,
                font=FONT_BODY,
                text_color=TEXT_PRIMARY,
            ).pack(side="left", padx=(0, 16))
        self._add_error("gender")

        self._add_label("DEPARTMENT")
        self._department_menu = ctk.CTkOptionMenu(
            self,
            values=list(DEPARTMENTS),
            variable=self._department_var,
            font=FONT_BODY,
            height=INPUT_HEIGHT,
            corner_radius=CORNER_RADIUS,
        )
        self._department_menu.pack(fill="x")
        self._add_error("department")

        self._add_label("ADDRESS")
        self._address = ctk.CTkTextbox(
            self,
            height=80,
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            border_width=1,
            text_color=TEXT_PRIMARY,
            corner_radius=CORNER_RADIUS,
        )
        self._address.pack(fill="x")
        self._add_error("address")

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def _add_label(self, text: str) -> None:
        ctk.CTkLabel(
            self,
            text=text,
            font=FONT_LABEL,
            text_color=TEXT_PRIMARY,
            anchor="w",
        ).pack(fill="x", pady=(PADDING_SM, 2))

    def _add_error(self, field: str) -> None:
        label = ctk.CTkLabel(
            self,
            text="",
            font=FONT_SMALL,
            text_color=ERROR_TEXT,
            anchor="w",
            height=16,
        )
        label.pack(fill="x")
        self._error_labels[field] = label

    def _add_entry(self, field: str, label: str, placeholder: str) -> ctk.CTkEntry:
        self._add_label(label)
        entry = ctk.CTkEntry(
            self,
            placeholder_text=placeholder,
            font=FONT_BODY,
            fg_color=INPUT_BG,
            border_color=INPUT_BORDER,
            text_color=TEXT_PRIMARY,
            height=INPUT_HEIGHT,
            corner_radius=CORNER_RADIUS,
        )
        entry.pack(fill="x")
        self._add_error(field)
        return entry

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def values(self) -> dict[str, str]:
        """Raw field strings keyed by column name."""
        department = self._department_var.get()
        return {
            "full_name": self._full_name.get(),
            "mobile_number": self._mobile.get(),
            "email": self._email.get(),
            "gender": self._gender_var.get(),
            "department": "" if department == _DEPARTMENT_PLACEHOLDER else department,
            "address": self._address.get("1.0", "end-1c"),
        }

    def set_values(self, values: dict[str, str]) -> None:
        for entry, key in (
            (self._full_name, "full_name"),
            (self._mobile, "mobile_number"),
            (self._email, "email"),
        ):
            entry.delete(0, "end")
            if values.get(key):
                entry.insert(0, values[key])
        self._gender_var.set(values.get("gender", ""))
        self._department_var.set(values.get("department") or _DEPARTMENT_PLACEHOLDER)
        self._address.delete("1.0", "end")
        self._address.insert("1.0", values.get("address", ""))

    def clear(self) -> None:
        self.set_values({})
        self.show_errors({})

    def show_errors(self, errors: dict[str, str]) -> None:
        """Render field-scoped messages; fields not in *errors* are cleared."""
        for field, label in self._error_labels.items():
            label.configure(text=errors.get(field, ""))

    def set_enabled(self, enabled: bool) -> None:
        state = "normal" if enabled else "disabled"
        for widget in (self._full_name, self._mobile, self._email, self._department_menu):
            widget.configure(state=state)
        self._address.configure(state=state)
