"""Explicit validation pass for accounts.

``validate_account`` collects every field-level problem instead of failing
on the first one, so callers can report all of them at once.
"""

import re
from dataclasses import dataclass

from hostel.domain.account.aggregates.account import Account
from hostel.domain.account.value_objects import AccountPolicy, Gender

PHONE_PATTERN = re.compile(r"[0-9]{10}")
VERIFICATION_CODE_MIN = 10000
VERIFICATION_CODE_MAX = 99999

_REQUIRED_TEXT_FIELDS = ("name", "room_number", "department", "semester")


@dataclass(frozen=True)
class FieldViolation:
    """A single field that failed validation."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


def validate_account(account: Account, policy: AccountPolicy) -> list[FieldViolation]:
    """Return all field violations of ``account`` under ``policy``.

    Parameters
    ----------
    account
        The account to check.
    policy
        E-mail domain, allowed roles and allowed hostels.

    Returns
    -------
    List of violations, empty when the account is valid.
    """
    violations: list[FieldViolation] = []

    for name in _REQUIRED_TEXT_FIELDS:
        value = getattr(account, name)
        if not value or not str(value).strip():
            violations.append(FieldViolation(name, f"{name} is required"))

    if not account.email:
        violations.append(FieldViolation("email", "email is required"))
    elif not policy.is_institutional_email(account.email):
        violations.append(
            FieldViolation(
                "email",
                f"{account.email} is not a valid @{policy.email_domain} email",
            ),
        )

    if account.role not in policy.roles:
        violations.append(FieldViolation("role", f"Unknown role: {account.role}"))

    if account.hostel not in policy.hostels:
        violations.append(
            FieldViolation("hostel", f"Unknown hostel: {account.hostel}"),
        )

    if account.gender not in Gender.values():
        violations.append(
            FieldViolation("gender", f"Unknown gender: {account.gender}"),
        )

    if not PHONE_PATTERN.fullmatch(account.contact_number or ""):
        violations.append(
            FieldViolation(
                "contact_number",
                "Please enter a valid 10-digit phone number",
            ),
        )

    if not PHONE_PATTERN.fullmatch(account.guardian_contact or ""):
        violations.append(
            FieldViolation(
                "guardian_contact",
                "Please enter a valid 10-digit guardian phone number",
            ),
        )

    violations.extend(_validate_token_pairs(account))
    return violations


def _validate_token_pairs(account: Account) -> list[FieldViolation]:
    violations: list[FieldViolation] = []

    code = account.verification_code
    if (code is None) != (account.verification_code_expire is None):
        violations.append(
            FieldViolation(
                "verification_code",
                "verification code and expiry must be set together",
            ),
        )
    elif code is not None and not (
        VERIFICATION_CODE_MIN <= code <= VERIFICATION_CODE_MAX
    ):
        violations.append(
            FieldViolation("verification_code", "verification code must be 5 digits"),
        )

    if (account.reset_password_token is None) != (
        account.reset_password_expire is None
    ):
        violations.append(
            FieldViolation(
                "reset_password_token",
                "reset token and expiry must be set together",
            ),
        )

    return violations
