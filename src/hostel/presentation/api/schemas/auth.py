"""Authentication schemas for request/response models.

Request fields are optional at the schema level so that a missing field
reaches the authentication service and is reported as a 400 with the
service's own message.
"""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field

from hostel.domain.account import Account
from hostel.presentation.api.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Request schema for account registration."""

    name: str | None = None
    email: str | None = None
    password: str | None = None
    contact_number: str | None = None
    guardian_contact: str | None = None
    hostel: str | None = None
    room_number: str | None = None
    department: str | None = None
    semester: str | None = None
    gender: str | None = None

    model_config = ConfigDict(
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {
                "name": "Asha Devi",
                "email": "asha@nitm.ac.in",
                "password": "hostel123",
                "contactNumber": "9876543210",
                "guardianContact": "9123456780",
                "hostel": "Girls Hostel",
                "roomNumber": "G-12",
                "department": "CSE",
                "semester": "5",
                "gender": "Female",
            },
        },
    )


class VerifyOtpRequest(CamelModel):
    """Request schema for verifying the emailed code."""

    email: str | None = None
    otp: int | str | None = None


class LoginRequest(CamelModel):
    """Request schema for login."""

    email: str | None = None
    password: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"email": "asha@nitm.ac.in", "password": "hostel123"},
        },
    )


class ForgotPasswordRequest(CamelModel):
    """Request schema for requesting a password reset email."""

    email: str | None = None


class ResetPasswordRequest(CamelModel):
    """Request schema for resetting a password with an emailed token."""

    password: str | None = None
    confirm_password: str | None = None


class UpdatePasswordRequest(CamelModel):
    """Request schema for changing the caller's password."""

    current_password: str | None = None
    new_password: str | None = None
    confirm_new_password: str | None = None


class AvatarResponse(CamelModel):
    public_id: str | None = None
    url: str | None = None


class AccountResponse(CamelModel):
    """Response schema for account data.

    Never carries the password hash or any token field.
    """

    id: UUID
    name: str
    email: str
    role: str
    contact_number: str
    guardian_contact: str
    hostel: str
    room_number: str
    department: str
    semester: str
    gender: str
    account_verified: bool
    is_active: bool
    avatar: AvatarResponse | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        avatar = None
        if account.avatar_public_id or account.avatar_url:
            avatar = AvatarResponse(
                public_id=account.avatar_public_id,
                url=account.avatar_url,
            )
        return cls(
            id=account.id,
            name=account.name,
            email=account.email,
            role=account.role,
            contact_number=account.contact_number,
            guardian_contact=account.guardian_contact,
            hostel=account.hostel,
            room_number=account.room_number,
            department=account.department,
            semester=account.semester,
            gender=account.gender,
            account_verified=account.account_verified,
            is_active=account.is_active,
            avatar=avatar,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class RegisterResponse(CamelModel):
    """Response after registration.

    ``email_sent`` is False when the account was created but the
    verification code could not be delivered.
    """

    success: bool = True
    message: str
    email_sent: bool


class AuthResponse(CamelModel):
    """Response carrying a new session token."""

    success: bool = True
    message: str
    token: str
    user: AccountResponse


class CurrentAccountResponse(CamelModel):
    """Response for the caller's own account."""

    success: bool = True
    user: AccountResponse = Field(..., description="The authenticated account")
