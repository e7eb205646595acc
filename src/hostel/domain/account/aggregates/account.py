"""Account aggregate.

An account is immutable: every state transition returns a new ``Account``
which the caller persists. Secrets (password hash, verification code,
reset token hash) are kept out of ``repr``.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

from hostel.domain.account.value_objects import DEFAULT_ROLE, normalize_email
from hostel.domain.shared.time import utc_now


@dataclass(frozen=True)
class Account:
    """Account aggregate root for a hostel resident or staff member."""

    name: str
    email: str
    contact_number: str
    guardian_contact: str
    hostel: str
    room_number: str
    department: str
    semester: str
    gender: str
    role: str = DEFAULT_ROLE
    id: UUID = field(default_factory=uuid4)
    password_hash: str | None = field(default=None, repr=False)
    account_verified: bool = False
    is_active: bool = True
    avatar_public_id: str | None = None
    avatar_url: str | None = None
    verification_code: int | None = field(default=None, repr=False)
    verification_code_expire: datetime | None = None
    reset_password_token: str | None = field(default=None, repr=False)
    reset_password_expire: datetime | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        object.__setattr__(self, "email", normalize_email(self.email))
        object.__setattr__(self, "name", (self.name or "").strip())

    @classmethod
    def register(  # noqa: PLR0913
        cls,
        *,
        name: str,
        email: str,
        password_hash: str,
        contact_number: str,
        guardian_contact: str,
        hostel: str,
        room_number: str,
        department: str,
        semester: str,
        gender: str,
        role: str = DEFAULT_ROLE,
    ) -> "Account":
        """Create a new, unverified account."""
        return cls(
            name=name,
            email=email,
            password_hash=password_hash,
            contact_number=contact_number,
            guardian_contact=guardian_contact,
            hostel=hostel,
            room_number=room_number,
            department=department,
            semester=semester,
            gender=gender,
            role=role,
        )

    @property
    def has_pending_verification(self) -> bool:
        return self.verification_code is not None

    @property
    def has_pending_reset(self) -> bool:
        return self.reset_password_token is not None

    def with_verification_code(self, code: int, expires_at: datetime) -> "Account":
        return replace(
            self,
            verification_code=code,
            verification_code_expire=expires_at,
            updated_at=utc_now(),
        )

    def mark_verified(self) -> "Account":
        """Verify the account and consume its verification code."""
        return replace(
            self,
            account_verified=True,
            verification_code=None,
            verification_code_expire=None,
            updated_at=utc_now(),
        )

    def with_reset_token(self, token_hash: str, expires_at: datetime) -> "Account":
        return replace(
            self,
            reset_password_token=token_hash,
            reset_password_expire=expires_at,
            updated_at=utc_now(),
        )

    def clear_reset_token(self) -> "Account":
        return replace(
            self,
            reset_password_token=None,
            reset_password_expire=None,
            updated_at=utc_now(),
        )

    def with_password(self, password_hash: str) -> "Account":
        return replace(self, password_hash=password_hash, updated_at=utc_now())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
