import pytest

from app.models.enums import Gender
from app.services.validation import (
    validate_credentials,
    validate_email,
    validate_mobile_number,
    validate_password,
    validate_registration,
)


def test_valid_registration_is_trimmed(valid_values):
    result = validate_registration(valid_values)

    assert result.is_valid
    assert result.value.full_name == "Jane Doe"
    assert result.value.gender is Gender.FEMALE
    assert result.value.to_row()["gender"] == "female"


def test_every_failing_field_is_reported():
    result = validate_registration({
        "full_name": " J ",
        "mobile_number": "12345",
        "email": "not-an-email",
        "gender": "",
        "department": "   ",
        "address": "short",
    })

    assert result.value is None
    assert result.errors == {
        "full_name": "Full name must be at least 2 characters",
        "mobile_number": "Mobile number must be exactly 10 digits",
        "email": "Please enter a valid email address",
        "gender": "Please select a gender",
        "department": "Please select a department",
        "address": "Address must be at least 10 characters",
    }


def test_missing_keys_count_as_empty():
    result = validate_registration({})

    assert set(result.errors) == {
        "full_name", "mobile_number", "email", "gender", "department", "address",
    }


def test_upper_length_bounds(valid_values):
    values = dict(valid_values, full_name="x" * 101, address="y" * 501)

    errors = validate_registration(values).errors

    assert errors["full_name"] == "Full name must be less than 100 characters"
    assert errors["address"] == "Address must be less than 500 characters"


def test_length_bounds_are_inclusive(valid_values):
    values = dict(valid_values, full_name="ab", address="a" * 10)

    assert validate_registration(values).is_valid


@pytest.mark.parametrize("number", ["0123456789", " 9876543210 "])
def test_mobile_accepts_ten_digits(number):
    assert validate_mobile_number(number).is_valid


@pytest.mark.parametrize("number", ["987654321", "98765432101", "98765-4321", "+919876543"])
def test_mobile_rejects_everything_else(number):
    assert not validate_mobile_number(number).is_valid


def test_email_syntax_is_checked_before_length():
    long_valid = "a" * 250 + "@x.com"

    assert validate_email("no spaces@x.com").error_message == "Please enter a valid email address"
    assert validate_email(long_valid).error_message == "Email must be less than 255 characters"


def test_unknown_gender_is_rejected(valid_values):
    errors = validate_registration(dict(valid_values, gender="unknown")).errors

    assert errors == {"gender": "Please select a gender"}


def test_password_is_not_trimmed():
    assert validate_password("   a  ").is_valid
    assert validate_password("12345").error_message == "Password must be at least 6 characters"
    assert validate_password("p" * 101).error_message == "Password must be less than 100 characters"


def test_credentials_strip_email_only():
    result = validate_credentials("  admin@example.com ", " secret ")

    assert result.is_valid
    assert result.email == "admin@example.com"
    assert result.password == " secret "


def test_credentials_collect_both_errors():
    result = validate_credentials("bad", "123")

    assert not result.is_valid
    assert set(result.errors) == {"email", "password"}
