"""Auth schemas and data structures.

These are simple data classes used for transferring token data
between components.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


@dataclass(frozen=True)
class TokenPayload:
    """Decoded session token payload.

    Attributes
    ----------
    account_id
        The unique identifier of the account
    email
        The account's email address
    exp
        Token expiration timestamp
    token_type
        Always "session" for tokens issued by JWTService
    """

    account_id: UUID
    email: str
    exp: datetime
    token_type: str

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.exp.tzinfo) > self.exp

    def is_session_token(self) -> bool:
        return self.token_type == "session"


@dataclass(frozen=True)
class IssuedOtp:
    """A freshly generated verification code and its expiry."""

    code: int
    expires_at: datetime


class OtpCheckResult(str, Enum):
    VALID = "valid"
    MISMATCH = "mismatch"
    EXPIRED = "expired"


@dataclass(frozen=True)
class IssuedResetToken:
    """A freshly generated password reset token.

    Only ``token_hash`` may be persisted; ``token`` goes into the
    emailed link and nowhere else.
    """

    token: str
    token_hash: str
    expires_at: datetime

    def __repr__(self) -> str:
        return f"IssuedResetToken(token_hash={self.token_hash!r}, expires_at={self.expires_at!r})"


class ResetTokenCheckResult(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
