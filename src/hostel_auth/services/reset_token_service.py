"""Password reset token service.

Reset tokens are opaque random strings sent in an emailed link. Only the
SHA-256 hash of a token is ever persisted.
"""

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta
from typing import Callable

from hostel.domain.shared.time import utc_now
from hostel_auth.schemas import IssuedResetToken, ResetTokenCheckResult


class ResetTokenService:
    """Issues, hashes and checks password reset tokens."""

    DEFAULT_EXPIRE_MINUTES = 15
    TOKEN_BYTES = 20

    def __init__(
        self,
        expire_minutes: int = DEFAULT_EXPIRE_MINUTES,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._expire = timedelta(minutes=expire_minutes)
        self._clock = clock

    def hash_token(self, token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()

    def issue(self) -> IssuedResetToken:
        token = secrets.token_hex(self.TOKEN_BYTES)
        return IssuedResetToken(
            token=token,
            token_hash=self.hash_token(token),
            expires_at=self._clock() + self._expire,
        )

    def check(
        self,
        stored_hash: str | None,
        supplied_token: str | None,
        expires_at: datetime | None,
        now: datetime | None = None,
    ) -> ResetTokenCheckResult:
        if not stored_hash or not supplied_token or expires_at is None:
            return ResetTokenCheckResult.INVALID

        supplied_hash = self.hash_token(supplied_token)
        if not hmac.compare_digest(supplied_hash, stored_hash):
            return ResetTokenCheckResult.INVALID

        now = now or self._clock()
        if now >= expires_at:
            return ResetTokenCheckResult.INVALID

        return ResetTokenCheckResult.VALID
