"""Factories for accounts and registration payloads."""

from datetime import datetime, timedelta, timezone
from typing import Any

from hostel.application.services import RegistrationData
from hostel.domain.account import Account

TEST_EMAIL = "asha@nitm.ac.in"
TEST_PASSWORD = "hostel123"

# Fixed reference time for deterministic expiry tests
T0 = datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)


def registration_fields(**overrides: Any) -> dict[str, str]:
    """Valid registration fields (snake_case)."""
    fields = {
        "name": "Asha Devi",
        "email": TEST_EMAIL,
        "password": TEST_PASSWORD,
        "contact_number": "9876543210",
        "guardian_contact": "9123456780",
        "hostel": "Girls Hostel",
        "room_number": "G-12",
        "department": "CSE",
        "semester": "5",
        "gender": "Female",
    }
    fields.update(overrides)
    return fields


def registration_data(**overrides: Any) -> RegistrationData:
    return RegistrationData(**registration_fields(**overrides))


def registration_payload(**overrides: Any) -> dict[str, str]:
    """Valid registration JSON body (camelCase keys)."""
    fields = registration_fields(**overrides)
    return {
        "name": fields["name"],
        "email": fields["email"],
        "password": fields["password"],
        "contactNumber": fields["contact_number"],
        "guardianContact": fields["guardian_contact"],
        "hostel": fields["hostel"],
        "roomNumber": fields["room_number"],
        "department": fields["department"],
        "semester": fields["semester"],
        "gender": fields["gender"],
    }


def make_account(**overrides: Any) -> Account:
    """Build an unverified account with a pending verification code."""
    defaults: dict[str, Any] = {
        "name": "Asha Devi",
        "email": TEST_EMAIL,
        "password_hash": "$2b$04$placeholderplaceholderplaceholderplacehold",
        "contact_number": "9876543210",
        "guardian_contact": "9123456780",
        "hostel": "Girls Hostel",
        "room_number": "G-12",
        "department": "CSE",
        "semester": "5",
        "gender": "Female",
        "verification_code": 12345,
        "verification_code_expire": T0 + timedelta(minutes=15),
    }
    defaults.update(overrides)
    return Account(**defaults)
