"""
Registration Models.

``Registration`` mirrors one row of the ``registrations`` table as the
store returns it.  ``RegistrationInput`` carries the six user-editable
fields after validation and trimming; it is the only shape that is ever
written back to the table.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from app.models.enums import Gender

# Columns an admin may change.  ``id``, ``photo_url`` and both timestamps
# are never part of an update payload.
EDITABLE_FIELDS: tuple[str, ...] = (
    "full_name",
    "mobile_number",
    "email",
    "gender",
    "department",
    "address",
)


class Registration(BaseModel):
    """A stored registration submission."""

    id: str
    full_name: str
    mobile_number: str
    email: str
    gender: Gender
    department: str
    address: str
    photo_url: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    def form_values(self) -> dict[str, str]:
        """Return the editable fields as raw form strings."""
        return {
            "full_name": self.full_name,
            "mobile_number": self.mobile_number,
            "email": self.email,
            "gender": str(self.gender),
            "department": self.department,
            "address": self.address,
        }


class RegistrationInput(BaseModel):
    """Validated, trimmed registration fields."""

    full_name: str
    mobile_number: str
    email: str
    gender: Gender
    department: str
    address: str

    def to_row(self) -> dict[str, str]:
        """Column payload for insert and partial update."""
        return self.model_dump(mode="json")
