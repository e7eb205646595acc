"""Account domain exceptions."""

from typing import Any

from hostel.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class EmailAlreadyExistsError(ConflictError):
    """A verified account already uses this email."""

    default_code = ErrorCode.ACCOUNT_ALREADY_EXISTS
    default_message = "User already exists."

    def __init__(self, email: str, message: str | None = None) -> None:
        self.email = email
        super().__init__(message, details={"email": email})


class AccountNotFoundError(EntityNotFoundError):
    default_code = ErrorCode.ACCOUNT_NOT_FOUND
    default_message = "User not found."


class AccountValidationError(ValidationError):
    """The validation pass reported one or more field violations.

    The first violation becomes the message; all of them are kept in
    ``details["violations"]``.
    """

    def __init__(self, violations: list[Any]) -> None:
        self.violations = violations
        first = violations[0].message if violations else None
        super().__init__(
            first,
            details={"violations": [v.to_dict() for v in violations]},
        )
