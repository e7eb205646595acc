"""Value objects for the account domain."""

from hostel.domain.account.value_objects.account_policy import (
    DEFAULT_EMAIL_DOMAIN,
    DEFAULT_HOSTELS,
    DEFAULT_ROLE,
    DEFAULT_ROLES,
    AccountPolicy,
)
from hostel.domain.account.value_objects.email import (
    institutional_email_pattern,
    normalize_email,
)
from hostel.domain.account.value_objects.gender import Gender

__all__ = [
    "DEFAULT_EMAIL_DOMAIN",
    "DEFAULT_HOSTELS",
    "DEFAULT_ROLE",
    "DEFAULT_ROLES",
    "AccountPolicy",
    "Gender",
    "institutional_email_pattern",
    "normalize_email",
]
