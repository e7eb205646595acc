"""Unit tests for the domain exception hierarchy."""

import pytest

from hostel.domain.account import (
    AccountNotFoundError,
    AccountValidationError,
    EmailAlreadyExistsError,
    FieldViolation,
)
from hostel.domain.shared.exceptions import (
    BadRequestError,
    DomainException,
    ErrorCode,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    ValidationError,
)


class TestDomainException:
    def test_defaults_come_from_subclass(self):
        exc = InvalidCredentialsError()

        assert exc.code == ErrorCode.INVALID_CREDENTIALS
        assert exc.message == "Invalid Email or Password."
        assert str(exc) == exc.message
        assert exc.details == {}

    def test_message_and_code_can_be_overridden(self):
        exc = ValidationError("Invalid OTP.", code=ErrorCode.OTP_MISMATCH)

        assert exc.code == ErrorCode.OTP_MISMATCH
        assert exc.message == "Invalid OTP."

    def test_repr_includes_code(self):
        exc = BadRequestError(details={"missing": ["name"]})
        assert repr(exc) == (
            "BadRequestError(message='Please fill in all required fields.', "
            "code='BAD_REQUEST', details={'missing': ['name']})"
        )

    @pytest.mark.parametrize(
        ("exc", "code"),
        [
            (EmailAlreadyExistsError("a@nitm.ac.in"), ErrorCode.ACCOUNT_ALREADY_EXISTS),
            (AccountNotFoundError(), ErrorCode.ACCOUNT_NOT_FOUND),
            (InvalidOrExpiredTokenError(), ErrorCode.INVALID_OR_EXPIRED_TOKEN),
        ],
    )
    def test_all_are_domain_exceptions(self, exc, code):
        assert isinstance(exc, DomainException)
        assert exc.code == code


class TestAccountExceptions:
    def test_email_already_exists_keeps_email(self):
        exc = EmailAlreadyExistsError("asha@nitm.ac.in")

        assert exc.email == "asha@nitm.ac.in"
        assert exc.message == "User already exists."
        assert exc.details == {"email": "asha@nitm.ac.in"}

    def test_validation_error_uses_first_violation(self):
        violations = [
            FieldViolation("contact_number", "Please enter a valid 10-digit phone number"),
            FieldViolation("hostel", "hostel is not a known hostel"),
        ]

        exc = AccountValidationError(violations)

        assert exc.code == ErrorCode.VALIDATION_ERROR
        assert exc.message == "Please enter a valid 10-digit phone number"
        assert [v["field"] for v in exc.details["violations"]] == [
            "contact_number",
            "hostel",
        ]
