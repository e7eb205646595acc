"""Account policy value object.

Holds the closed sets and the e-mail domain an account is validated
against. Built from settings at the edge of the application.
"""

from dataclasses import dataclass, field

from hostel.domain.account.value_objects.email import (
    institutional_email_pattern,
    normalize_email,
)

DEFAULT_EMAIL_DOMAIN = "nitm.ac.in"
DEFAULT_ROLES = ("Admin", "Warden", "User")
DEFAULT_ROLE = "User"
DEFAULT_HOSTELS = ("PhD Boys Hostel", "3 Seater Boys Hostel", "Girls Hostel")


@dataclass(frozen=True)
class AccountPolicy:
    """Institution-specific rules for accounts."""

    email_domain: str = DEFAULT_EMAIL_DOMAIN
    roles: frozenset[str] = field(default_factory=lambda: frozenset(DEFAULT_ROLES))
    hostels: frozenset[str] = field(
        default_factory=lambda: frozenset(DEFAULT_HOSTELS),
    )
    default_role: str = DEFAULT_ROLE

    def __post_init__(self) -> None:
        if not self.email_domain:
            msg = "email_domain cannot be empty"
            raise ValueError(msg)
        if self.default_role not in self.roles:
            msg = f"Default role {self.default_role!r} is not an allowed role"
            raise ValueError(msg)
        object.__setattr__(self, "roles", frozenset(self.roles))
        object.__setattr__(self, "hostels", frozenset(self.hostels))

    def is_institutional_email(self, email: str | None) -> bool:
        normalized = normalize_email(email)
        pattern = institutional_email_pattern(self.email_domain)
        return bool(pattern.match(normalized))
