"""Authentication services.

Provides password hashing, session tokens (JWT), verification codes
and password reset tokens.
"""

from hostel_auth.services.jwt_service import JWTService
from hostel_auth.services.otp_service import OTPService
from hostel_auth.services.password_service import PasswordHashingService
from hostel_auth.services.reset_token_service import ResetTokenService

__all__ = [
    "JWTService",
    "OTPService",
    "PasswordHashingService",
    "ResetTokenService",
]
