"""Stat Tiles Component.

Three tiles above the registrations table: total registrations, today's
registrations (with a "+N" badge) and distinct departments.
"""

from __future__ import annotations

import customtkinter as ctk

from app.models.service_models import DashboardStats
from app.ui.theme import (
    CONTENT_CARD_BG,
    CORNER_RADIUS,
    FONT_SMALL,
    FONT_STAT,
    PADDING_MD,
    PADDING_SM,
    STAT_DEPARTMENTS,
    STAT_TODAY,
    STAT_TOTAL,
    TEXT_SECONDARY,
)


class StatsCards(ctk.CTkFrame):
    """Row of stat tiles; call ``update_stats`` after each fetch or patch."""

    def __init__(self, parent: ctk.CTkBaseClass) -> None:
        super().__init__(parent, fg_color="transparent")
        for column in range(3):
            self.grid_columnconfigure(column, weight=1, uniform="stat")

        self._total = self._tile(0, "Total Registrations", STAT_TOTAL)
        self._today = self._tile(1, "Today", STAT_TODAY)
        self._departments = self._tile(2, "Departments", STAT_DEPARTMENTS)

    def _tile(self, column: int, title: str, colour: str) -> ctk.CTkLabel:
        card = ctk.CTkFrame(self, fg_color=CONTENT_CARD_BG, corner_radius=CORNER_RADIUS)
        card.grid(
            row=0,
            column=column,
            sticky="nsew",
            padx=(0 if column == 0 else PADDING_SM, 0),
        )
        ctk.CTkLabel(
            card,
            text=title,
            font=FONT_SMALL,
            text_color=TEXT_SECONDARY,
            anchor="w",
        ).pack(fill="x", padx=PADDING_MD, pady=(PADDING_MD, 0))
        value = ctk.CTkLabel(
            card,
            text="0",
            font=FONT_STAT,
            text_color=colour,
            anchor="w",
        )
        value.pack(fill="x", padx=PADDING_MD, pady=(0, PADDING_MD))
        return value

    def update_stats(self, stats: DashboardStats) -> None:
        self._total.configure(text=str(stats.total))
        self._today.configure(text=f"+{stats.today}")
        self._departments.configure(text=str(stats.departments))
