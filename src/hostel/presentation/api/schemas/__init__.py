from hostel.presentation.api.schemas.auth import (
    AccountResponse,
    AuthResponse,
    CurrentAccountResponse,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    UpdatePasswordRequest,
    VerifyOtpRequest,
)
from hostel.presentation.api.schemas.common import (
    CamelModel,
    ErrorResponse,
    MessageResponse,
)

__all__ = [
    "AccountResponse",
    "AuthResponse",
    "CamelModel",
    "CurrentAccountResponse",
    "ErrorResponse",
    "ForgotPasswordRequest",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "RegisterResponse",
    "ResetPasswordRequest",
    "UpdatePasswordRequest",
    "VerifyOtpRequest",
]
