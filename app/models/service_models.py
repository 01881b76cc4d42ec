"""
Service Layer Data Transfer Objects.

Pydantic models for validated input/output at service boundaries.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from app.models.enums import FormState
from app.models.registration import Registration, RegistrationInput

T = TypeVar("T")

__all__ = [
    "CredentialsValidation",
    "DashboardStats",
    "Page",
    "RegistrationDetail",
    "RegistrationValidation",
    "ServiceResult",
    "SubmissionResult",
]


# ---------------------------------------------------------------------------
# Validation outcomes
# ---------------------------------------------------------------------------

class RegistrationValidation(BaseModel):
    """Either a normalized payload or field-keyed error messages."""

    value: Optional[RegistrationInput] = None
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.value is not None and not self.errors


class CredentialsValidation(BaseModel):
    """Validated login / sign-up credentials."""

    email: Optional[str] = None
    password: Optional[str] = None
    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


# ---------------------------------------------------------------------------
# Dashboard views
# ---------------------------------------------------------------------------

class Page(BaseModel):
    """One page of the filtered registration view.

    ``start_index`` and ``end_index`` are 1-based and inclusive, matching
    the "Showing 21-25 of 25" footer; both are 0 for an empty view.
    """

    items: list[Registration] = Field(default_factory=list)
    page: int = 1
    page_size: int = 10
    total_pages: int = 1
    total_items: int = 0

    @property
    def start_index(self) -> int:
        if not self.items:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def end_index(self) -> int:
        if not self.items:
            return 0
        return self.start_index + len(self.items) - 1

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


class DashboardStats(BaseModel):
    """Stat tiles derived from the full record set."""

    total: int = 0
    today: int = 0
    departments: int = 0


class RegistrationDetail(BaseModel):
    """Read-only projection for the detail dialog."""

    registration: Registration
    registered_on: str


# ---------------------------------------------------------------------------
# Public form submission
# ---------------------------------------------------------------------------

class SubmissionResult(BaseModel):
    """Outcome of one registration form submission.

    ``values`` echoes what the user typed so the form can be re-rendered
    unchanged after a failure.
    """

    success: bool
    state: FormState
    registration: Optional[Registration] = None
    errors: dict[str, str] = Field(default_factory=dict)
    error: Optional[str] = None
    values: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Generic envelope
# ---------------------------------------------------------------------------

class ServiceResult(BaseModel, Generic[T]):
    """
    Standard service return envelope.

    All admin-facing service methods return this, providing a consistent
    contract for the view layer.  ``errors`` carries field-scoped
    validation messages; ``error`` carries a transport/service failure.
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    errors: dict[str, str] = Field(default_factory=dict)
