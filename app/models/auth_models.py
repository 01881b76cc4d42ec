"""
Authentication Pipeline Models.

Pydantic models and enumerations for the auth request/response
contracts between ``AuthService`` and the UI layer.  Every auth
operation returns a structured, inspectable result rather than raw
strings or exceptions.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Error classification
# ---------------------------------------------------------------------------

class AuthErrorCode(StrEnum):
    """Authentication error categories.

    Used by ``AuthService`` to classify Supabase errors and by the
    UI layer to decide which feedback to display.
    """

    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_NOT_CONFIRMED = "email_not_confirmed"
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    NOT_AN_ADMIN = "not_an_admin"
    ROLE_GRANT_FAILED = "role_grant_failed"
    NETWORK_ERROR = "network_error"
    VALIDATION_ERROR = "validation_error"
    UNKNOWN_ERROR = "unknown_error"


# ---------------------------------------------------------------------------
# Supabase error-text mapping
# ---------------------------------------------------------------------------

SUPABASE_ERROR_MAP: dict[str, tuple[AuthErrorCode, str]] = {
    "invalid login credentials": (
        AuthErrorCode.INVALID_CREDENTIALS,
        "Invalid email or password.",
    ),
    "invalid_credentials": (
        AuthErrorCode.INVALID_CREDENTIALS,
        "Invalid email or password.",
    ),
    "invalid_grant": (
        AuthErrorCode.INVALID_CREDENTIALS,
        "Invalid email or password.",
    ),
    "email not confirmed": (
        AuthErrorCode.EMAIL_NOT_CONFIRMED,
        "Please confirm your email address before signing in.",
    ),
    "already registered": (
        AuthErrorCode.EMAIL_ALREADY_EXISTS,
        "This email is already registered. Please sign in.",
    ),
    "user_already_exists": (
        AuthErrorCode.EMAIL_ALREADY_EXISTS,
        "This email is already registered. Please sign in.",
    ),
}


# ---------------------------------------------------------------------------
# Validation result
# ---------------------------------------------------------------------------

class ValidationResult(BaseModel):
    """Result of a single field validation check.

    Attributes
    ----------
    is_valid:
        ``True`` when the value passes the validation rule.
    error_message:
        Human-readable description of the failure, or ``None`` on success.
    """

    is_valid: bool
    error_message: Optional[str] = None

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Unified auth response
# ---------------------------------------------------------------------------

class AuthResult(BaseModel):
    """Unified response for login, admin sign-up and logout.

    Attributes
    ----------
    success:
        ``True`` when the operation completed without error.
    error_code:
        Structured error category (``None`` on success).
    error_message:
        Human-readable error description (``None`` on success).
    field_errors:
        Per-field credential validation messages, keyed ``email`` /
        ``password``.
    user_id:
        The Supabase UUID of the authenticated / registered user.
    email:
        The user's email address.
    is_admin:
        ``True`` when the identity holds the admin role grant.
    requires_confirmation:
        ``True`` after sign-up when the provider issued no session and the
        address must be confirmed before the first sign-in.
    """

    success: bool
    error_code: Optional[AuthErrorCode] = None
    error_message: Optional[str] = None
    field_errors: dict[str, str] = {}
    user_id: Optional[str] = None
    email: Optional[str] = None
    is_admin: bool = False
    requires_confirmation: bool = False

    model_config = {"from_attributes": True}
