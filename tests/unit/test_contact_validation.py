"""Tests for contact detail validation."""

import pytest

from portal.models.booking import ContactDetails, validate_contact


def test_valid_contact() -> None:
    contact = ContactDetails(name="Jane Smith", email="jane@example.com", phone="+44 7700 900123")

    assert validate_contact(contact) == {}


def test_all_fields_required() -> None:
    errors = validate_contact(ContactDetails(name="  ", email="", phone=""))

    assert errors == {
        "name": "Name is required",
        "email": "Email is required",
        "phone": "Phone is required",
    }


@pytest.mark.parametrize("email", ["jane", "jane@", "jane@example", "jane smith@example.com"])
def test_invalid_email(email: str) -> None:
    errors = validate_contact(ContactDetails(name="Jane", email=email, phone="07700900123"))

    assert errors == {"email": "Please enter a valid email"}


@pytest.mark.parametrize("phone", ["12345", "0770090012a", "call me"])
def test_invalid_phone(phone: str) -> None:
    errors = validate_contact(ContactDetails(name="Jane", email="jane@example.com", phone=phone))

    assert errors == {"phone": "Please enter a valid phone number"}


def test_short_name() -> None:
    errors = validate_contact(ContactDetails(name="J", email="jane@example.com", phone="07700900123"))

    assert errors == {"name": "Name must be at least 2 characters"}
