from __future__ import annotations

"""
Data Models Package.

Re-exports the Pydantic models for short imports:
    from app.models import Registration, RegistrationInput, AdminUser
    from app.models import Gender, Department, AppRole
"""

from app.models.enums import (
    ALL_DEPARTMENTS,
    DEPARTMENTS,
    AppRole,
    Department,
    FormState,
    GateState,
    Gender,
)
from app.models.photo_models import PhotoFile
from app.models.registration import EDITABLE_FIELDS, Registration, RegistrationInput
from app.models.user import AdminUser

__all__ = [
    "ALL_DEPARTMENTS",
    "DEPARTMENTS",
    "EDITABLE_FIELDS",
    "AdminUser",
    "AppRole",
    "Department",
    "FormState",
    "GateState",
    "Gender",
    "PhotoFile",
    "Registration",
    "RegistrationInput",
]
