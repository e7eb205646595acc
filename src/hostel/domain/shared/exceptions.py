"""Classified failures raised by the account domain and the auth workflow.

Every failure a client may see is a ``DomainException`` carrying a stable
``ErrorCode``. The API layer maps codes to HTTP statuses in one table;
anything that is not a ``DomainException`` is reported as an internal error.
"""

from enum import Enum
from typing import Any, ClassVar


class ErrorCode(str, Enum):
    """Machine-readable codes returned in the ``code`` field of error bodies.

    Clients branch on these, so existing values must not change.
    """

    BAD_REQUEST = "BAD_REQUEST"
    INVALID_INPUT = "INVALID_INPUT"

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_EMAIL = "INVALID_EMAIL"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    PASSWORD_MISMATCH = "PASSWORD_MISMATCH"
    OTP_MISMATCH = "OTP_MISMATCH"
    OTP_EXPIRED = "OTP_EXPIRED"

    CONFLICT = "CONFLICT"
    ACCOUNT_ALREADY_EXISTS = "ACCOUNT_ALREADY_EXISTS"
    TOO_MANY_ATTEMPTS = "TOO_MANY_ATTEMPTS"

    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_OR_EXPIRED_TOKEN = "INVALID_OR_EXPIRED_TOKEN"

    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"

    EMAIL_ERROR = "EMAIL_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base class for classified failures.

    Subclasses pick their defaults through ``default_code`` and
    ``default_message``; both can still be overridden per raise.

    Attributes
    ----------
    message
        Text shown to the end user as-is
    code
        Stable error code
    details
        Extra context for logs (missing fields, violations, ...)
    """

    default_code: ClassVar[ErrorCode] = ErrorCode.INTERNAL_ERROR
    default_message: ClassVar[str] = "An internal error occurred"

    def __init__(
        self,
        message: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"code={self.code.value!r}, details={self.details!r})"
        )


class BadRequestError(DomainException):
    """Required request fields are missing."""

    default_code = ErrorCode.BAD_REQUEST
    default_message = "Please fill in all required fields."


class InvalidInputError(DomainException):
    """Input is well-formed but does not refer to anything usable."""

    default_code = ErrorCode.INVALID_INPUT
    default_message = "Invalid input."


class ValidationError(DomainException):
    default_code = ErrorCode.VALIDATION_ERROR
    default_message = "Validation failed."


class ConflictError(DomainException):
    default_code = ErrorCode.CONFLICT
    default_message = "The request conflicts with existing data."


class TooManyAttemptsError(DomainException):
    default_code = ErrorCode.TOO_MANY_ATTEMPTS
    default_message = "Too many attempts. Contact support."


class EntityNotFoundError(DomainException):
    default_code = ErrorCode.ENTITY_NOT_FOUND
    default_message = "Not found."


class InvalidCredentialsError(DomainException):
    """An email/password pair did not authenticate.

    The default message never says which half was wrong.
    """

    default_code = ErrorCode.INVALID_CREDENTIALS
    default_message = "Invalid Email or Password."


class InvalidOrExpiredTokenError(DomainException):
    """A password reset token is unknown, already used, or expired."""

    default_code = ErrorCode.INVALID_OR_EXPIRED_TOKEN
    default_message = "Reset Password token is invalid or has been expired."


class EmailDeliveryError(DomainException):
    default_code = ErrorCode.EMAIL_ERROR
    default_message = "Failed to send email."
