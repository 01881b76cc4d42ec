"""
Shared Enumerations for Registration Desk Models.

All string enumerations for type-safe field constraints.
StrEnum values compare equal to their string equivalents, so values read
back from the store (``"male"``, ``"admin"``) match without conversion.
"""

from __future__ import annotations
from enum import StrEnum


class Gender(StrEnum):
    """Values accepted by the ``gender_type`` column."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Department(StrEnum):
    """Departments offered by the registration form.

    ``OTHER`` is the catch-all and stays last.  The store keeps department
    as free text; membership in this list is enforced by the UI only.
    """

    ENGINEERING = "Engineering"
    MARKETING = "Marketing"
    SALES = "Sales"
    HUMAN_RESOURCES = "Human Resources"
    FINANCE = "Finance"
    OPERATIONS = "Operations"
    CUSTOMER_SUPPORT = "Customer Support"
    RESEARCH_AND_DEVELOPMENT = "Research & Development"
    LEGAL = "Legal"
    OTHER = "Other"


DEPARTMENTS: tuple[str, ...] = tuple(d.value for d in Department)

# Sentinel for "no department constraint" in the dashboard filter.
ALL_DEPARTMENTS: str = "all"


class AppRole(StrEnum):
    """Role labels of the ``user_roles`` relation.  Only ADMIN is meaningful."""

    ADMIN = "admin"
    USER = "user"


class FormState(StrEnum):
    """Public registration form states."""

    EDITING = "EDITING"
    SUBMITTING = "SUBMITTING"
    SUCCESS = "SUCCESS"


class GateState(StrEnum):
    """Outcome of the admin dashboard access check."""

    PENDING = "PENDING"
    ALLOW = "ALLOW"
    REDIRECT = "REDIRECT"
