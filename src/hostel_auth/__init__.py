"""Hostel Auth - Credential and token infrastructure.

This package provides the secrets side of authentication, independent of
the account domain. It handles:
- Password hashing (bcrypt)
- Session token creation and verification (JWT)
- Email verification codes (OTP)
- Password reset tokens (hashed at rest)

Architecture:
    hostel_auth/
    ├── services/           # Pure logic (hashing, tokens, codes)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from hostel_auth import PasswordHashingService, JWTService
"""

from hostel_auth.exceptions import (
    AuthError,
    ExpiredTokenError,
    InvalidTokenError,
    WeakPasswordError,
)
from hostel_auth.schemas import (
    IssuedOtp,
    IssuedResetToken,
    OtpCheckResult,
    ResetTokenCheckResult,
    TokenPayload,
)
from hostel_auth.services import (
    JWTService,
    OTPService,
    PasswordHashingService,
    ResetTokenService,
)

__all__ = [
    # Services
    "JWTService",
    "OTPService",
    "PasswordHashingService",
    "ResetTokenService",
    # Schemas
    "IssuedOtp",
    "IssuedResetToken",
    "OtpCheckResult",
    "ResetTokenCheckResult",
    "TokenPayload",
    # Exceptions
    "AuthError",
    "ExpiredTokenError",
    "InvalidTokenError",
    "WeakPasswordError",
]
