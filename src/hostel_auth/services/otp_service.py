"""One-time verification code service."""

import secrets
from datetime import datetime, timedelta
from typing import Callable

from hostel.domain.shared.time import utc_now
from hostel_auth.schemas import IssuedOtp, OtpCheckResult


class OTPService:
    """Generates and checks the 5-digit email verification codes."""

    DEFAULT_EXPIRE_MINUTES = 15

    def __init__(
        self,
        expire_minutes: int = DEFAULT_EXPIRE_MINUTES,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._expire = timedelta(minutes=expire_minutes)
        self._clock = clock

    def generate_code(self) -> int:
        # Leading digit 1-9 keeps the code at exactly five digits.
        first_digit = secrets.randbelow(9) + 1
        remaining = secrets.randbelow(10_000)
        return first_digit * 10_000 + remaining

    def issue(self) -> IssuedOtp:
        return IssuedOtp(
            code=self.generate_code(),
            expires_at=self._clock() + self._expire,
        )

    def check(
        self,
        stored_code: int | None,
        supplied_code: int | str | None,
        expires_at: datetime | None,
        now: datetime | None = None,
    ) -> OtpCheckResult:
        """Compare a supplied code with the stored one.

        Equality is checked before expiry, so a wrong code is reported as a
        mismatch even when the stored code has also expired.
        """
        try:
            supplied = int(str(supplied_code).strip())
        except (TypeError, ValueError):
            return OtpCheckResult.MISMATCH

        if stored_code is None or supplied != stored_code:
            return OtpCheckResult.MISMATCH

        now = now or self._clock()
        if expires_at is None or now > expires_at:
            return OtpCheckResult.EXPIRED

        return OtpCheckResult.VALID
