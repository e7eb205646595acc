"""Account domain.

This domain handles:
- Account aggregate (identity, residence details, token fields)
- Account policy (institutional e-mail domain, roles, hostels)
- Explicit field validation
"""

from hostel.domain.account.aggregates import Account
from hostel.domain.account.exceptions import (
    AccountNotFoundError,
    AccountValidationError,
    EmailAlreadyExistsError,
)
from hostel.domain.account.repositories import AccountRepository
from hostel.domain.account.validation import FieldViolation, validate_account
from hostel.domain.account.value_objects import (
    AccountPolicy,
    Gender,
    normalize_email,
)

__all__ = [
    "Account",
    "AccountNotFoundError",
    "AccountPolicy",
    "AccountRepository",
    "AccountValidationError",
    "EmailAlreadyExistsError",
    "FieldViolation",
    "Gender",
    "normalize_email",
    "validate_account",
]
