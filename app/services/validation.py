"""
Field Validation Rules.

Pure functions shared by the public registration form, the admin edit
dialog and the admin login / sign-up forms.  Every rule returns a
``ValidationResult``; the aggregate validators collect the first failing
message per field into a field-keyed ``errors`` dict.

No side effects: nothing here touches the network or the session.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional

from app.models.auth_models import ValidationResult
from app.models.enums import Gender
from app.models.registration import RegistrationInput
from app.models.service_models import CredentialsValidation, RegistrationValidation


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_EMAIL_RE: re.Pattern[str] = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)

_MOBILE_RE: re.Pattern[str] = re.compile(r"[0-9]{10}")

NAME_MIN, NAME_MAX = 2, 100
ADDRESS_MIN, ADDRESS_MAX = 10, 500
EMAIL_MAX = 255
PASSWORD_MIN, PASSWORD_MAX = 6, 100

_OK = ValidationResult(is_valid=True)


def _fail(message: str) -> ValidationResult:
    return ValidationResult(is_valid=False, error_message=message)


# ---------------------------------------------------------------------------
# Single-field rules
# ---------------------------------------------------------------------------

def validate_full_name(value: str) -> ValidationResult:
    """Trimmed length must be within [2, 100]."""
    stripped = (value or "").strip()
    if len(stripped) < NAME_MIN:
        return _fail("Full name must be at least 2 characters")
    if len(stripped) > NAME_MAX:
        return _fail("Full name must be less than 100 characters")
    return _OK


def validate_mobile_number(value: str) -> ValidationResult:
    """Exactly ten ASCII digits, nothing else."""
    if not _MOBILE_RE.fullmatch((value or "").strip()):
        return _fail("Mobile number must be exactly 10 digits")
    return _OK


def validate_email(value: str) -> ValidationResult:
    """Validate an email address against a simplified RFC 5322 regex.

    Parameters
    ----------
    value:
        The raw email string; surrounding whitespace is ignored.

    Returns
    -------
    ValidationResult
        Syntax is checked before length, so an over-long but otherwise
        malformed address reports the syntax message.
    """
    stripped = (value or "").strip()
    if not _EMAIL_RE.match(stripped):
        return _fail("Please enter a valid email address")
    if len(stripped) > EMAIL_MAX:
        return _fail("Email must be less than 255 characters")
    return _OK


def validate_gender(value: str) -> ValidationResult:
    if value not in {g.value for g in Gender}:
        return _fail("Please select a gender")
    return _OK


def validate_department(value: str) -> ValidationResult:
    # Membership in DEPARTMENTS is enforced by the picker, not here.
    if not (value or "").strip():
        return _fail("Please select a department")
    return _OK


def validate_address(value: str) -> ValidationResult:
    stripped = (value or "").strip()
    if len(stripped) < ADDRESS_MIN:
        return _fail("Address must be at least 10 characters")
    if len(stripped) > ADDRESS_MAX:
        return _fail("Address must be less than 500 characters")
    return _OK


def validate_password(value: str) -> ValidationResult:
    """Length within [6, 100].  Passwords are never trimmed."""
    value = value or ""
    if len(value) < PASSWORD_MIN:
        return _fail("Password must be at least 6 characters")
    if len(value) > PASSWORD_MAX:
        return _fail("Password must be less than 100 characters")
    return _OK


_REGISTRATION_RULES = (
    ("full_name", validate_full_name),
    ("mobile_number", validate_mobile_number),
    ("email", validate_email),
    ("gender", validate_gender),
    ("department", validate_department),
    ("address", validate_address),
)


# ---------------------------------------------------------------------------
# Aggregate validators
# ---------------------------------------------------------------------------

def validate_registration(raw: Mapping[str, Optional[str]]) -> RegistrationValidation:
    """Validate all six registration fields.

    Every field is evaluated even when an earlier one fails, so the form
    can show all messages at once.

    Parameters
    ----------
    raw:
        Field name to raw input string.  Missing keys count as empty.

    Returns
    -------
    RegistrationValidation
        ``value`` holds the trimmed ``RegistrationInput`` when every rule
        passes; otherwise ``errors`` maps each failing field to its first
        failing message.
    """
    values = {name: (raw.get(name) or "") for name, _ in _REGISTRATION_RULES}

    errors: dict[str, str] = {}
    for name, rule in _REGISTRATION_RULES:
        result = rule(values[name])
        if not result.is_valid:
            errors[name] = result.error_message or "Invalid value"

    if errors:
        return RegistrationValidation(errors=errors)

    return RegistrationValidation(
        value=RegistrationInput(
            full_name=values["full_name"].strip(),
            mobile_number=values["mobile_number"].strip(),
            email=values["email"].strip(),
            gender=Gender(values["gender"]),
            department=values["department"].strip(),
            address=values["address"].strip(),
        )
    )


def validate_credentials(email: str, password: str) -> CredentialsValidation:
    """Validate admin login / sign-up credentials."""
    errors: dict[str, str] = {}

    email_check = validate_email(email)
    if not email_check.is_valid:
        errors["email"] = email_check.error_message or "Invalid email"

    password_check = validate_password(password)
    if not password_check.is_valid:
        errors["password"] = password_check.error_message or "Invalid password"

    if errors:
        return CredentialsValidation(errors=errors)
    return CredentialsValidation(email=email.strip(), password=password)
