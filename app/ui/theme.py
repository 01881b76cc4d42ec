"""UI Theme Constants for Registration Desk.

Centralises all colour, font, and sizing constants for the
CustomTkinter interface.  Light content area with a dark header bar.

This file contains **zero logic** — only ``Final`` constants.
"""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------

HEADER_BG: Final[str] = "#1a1a2e"
HEADER_TEXT: Final[str] = "#e0e0e0"

CONTENT_BG: Final[str] = "#f0f0f0"
CONTENT_CARD_BG: Final[str] = "#ffffff"

ACCENT_PRIMARY: Final[str] = "#5B4FCF"
ACCENT_HOVER: Final[str] = "#4A3FBF"
TEXT_PRIMARY: Final[str] = "#1a1a2e"
TEXT_SECONDARY: Final[str] = "#6c757d"
TEXT_LIGHT: Final[str] = "#ffffff"

# Input / form
INPUT_BG: Final[str] = "#ffffff"
INPUT_BORDER: Final[str] = "#ced4da"
ERROR_TEXT: Final[str] = "#dc3545"
SUCCESS_TEXT: Final[str] = "#27ae60"

# Buttons
DANGER_PRIMARY: Final[str] = "#e74c3c"
DANGER_HOVER: Final[str] = "#c0392b"
NEUTRAL_BUTTON: Final[str] = "#e9ecef"
NEUTRAL_HOVER: Final[str] = "#dee2e6"

# Tabs / table
TAB_BORDER: Final[str] = "#e0e0e0"
TAB_HOVER: Final[str] = "#f0f0f0"
ROW_ALT_BG: Final[str] = "#f8f9fa"

# Stat tiles
STAT_TOTAL: Final[str] = "#5B4FCF"
STAT_TODAY: Final[str] = "#27ae60"
STAT_DEPARTMENTS: Final[str] = "#f39c12"

# Toasts
TOAST_SUCCESS_BG: Final[str] = "#27ae60"
TOAST_ERROR_BG: Final[str] = "#dc3545"

# ---------------------------------------------------------------------------
# Fonts (Segoe UI on Windows, system fallback elsewhere)
# ---------------------------------------------------------------------------

FONT_FAMILY: Final[str] = "Segoe UI"
FONT_BRAND: Final[tuple[str, int, str]] = (FONT_FAMILY, 22, "bold")
FONT_ICON_LG: Final[tuple[str, int, str]] = (FONT_FAMILY, 24, "bold")
FONT_HEADING: Final[tuple[str, int, str]] = (FONT_FAMILY, 20, "bold")
FONT_STAT: Final[tuple[str, int, str]] = (FONT_FAMILY, 28, "bold")
FONT_SUBTITLE: Final[tuple[str, int]] = (FONT_FAMILY, 12)
FONT_BODY: Final[tuple[str, int]] = (FONT_FAMILY, 13)
FONT_TAB: Final[tuple[str, int]] = (FONT_FAMILY, 13)
FONT_TAB_ACTIVE: Final[tuple[str, int, str]] = (FONT_FAMILY, 13, "bold")
FONT_LABEL: Final[tuple[str, int, str]] = (FONT_FAMILY, 11, "bold")
FONT_SMALL: Final[tuple[str, int]] = (FONT_FAMILY, 11)
FONT_CAPTION: Final[tuple[str, int]] = (FONT_FAMILY, 10)
FONT_BUTTON: Final[tuple[str, int, str]] = (FONT_FAMILY, 13, "bold")

# ---------------------------------------------------------------------------
# Dimensions
# ---------------------------------------------------------------------------

HEADER_HEIGHT: Final[int] = 56
LOGIN_WINDOW_WIDTH: Final[int] = 480
LOGIN_WINDOW_HEIGHT: Final[int] = 640
MAIN_WINDOW_WIDTH: Final[int] = 1200
MAIN_WINDOW_HEIGHT: Final[int] = 780
FORM_CARD_WIDTH: Final[int] = 560
INPUT_HEIGHT: Final[int] = 40
BUTTON_HEIGHT: Final[int] = 44
CORNER_RADIUS: Final[int] = 8
PADDING_SM: Final[int] = 8
PADDING_MD: Final[int] = 16
PADDING_LG: Final[int] = 24
