"""Authentication router for registration, verification, login and passwords."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import APIRouter, Response
from sqlalchemy.ext.asyncio import AsyncSession

from hostel.application.services import RegistrationData
from hostel.domain.account import Account
from hostel.domain.shared.exceptions import DomainException
from hostel.presentation.api.dependencies import (
    SESSION_COOKIE,
    AuthService,
    CurrentAccount,
    DBSession,
    SettingsDep,
)
from hostel.presentation.api.schemas import (
    AccountResponse,
    AuthResponse,
    CurrentAccountResponse,
    ErrorResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    UpdatePasswordRequest,
    VerifyOtpRequest,
)
from hostel_config.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    500: {"model": ErrorResponse, "description": "Internal error"},
}


@asynccontextmanager
async def _unit_of_work(session: AsyncSession) -> AsyncIterator[None]:
    """Commit on success and on classified failures, roll back otherwise.

    Classified failures can carry intended writes: sibling pruning on a bad
    OTP, or clearing a reset token after a failed e-mail.
    """
    try:
        yield
    except DomainException:
        await session.commit()
        raise
    except Exception:
        await session.rollback()
        raise
    await session.commit()


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Set the session token as an HttpOnly cookie."""
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        secure=settings.api_cookie_secure,
        samesite=settings.api_cookie_samesite,
        max_age=settings.session_expire_days * 24 * 60 * 60,
        path="/",
        domain=settings.api_cookie_domain,
    )


def _clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE,
        path="/",
        domain=settings.api_cookie_domain,
        httponly=True,
        secure=settings.api_cookie_secure,
        samesite=settings.api_cookie_samesite,
    )


def _auth_response(
    response: Response,
    account: Account,
    token: str,
    message: str,
    settings: Settings,
) -> AuthResponse:
    _set_session_cookie(response, token, settings)
    return AuthResponse(
        message=message,
        token=token,
        user=AccountResponse.from_account(account),
    )


@router.post(
    "/register",
    summary="Register a new account",
    responses=ERROR_RESPONSES,
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
) -> RegisterResponse:
    """
    Register an unverified account and e-mail a 5-digit verification code.

    Only institutional e-mail addresses are accepted. At most five
    unverified registrations may exist per address.
    """
    async with _unit_of_work(session):
        result = await auth_service.register(
            RegistrationData(
                name=request.name,
                email=request.email,
                password=request.password,
                contact_number=request.contact_number,
                guardian_contact=request.guardian_contact,
                hostel=request.hostel,
                room_number=request.room_number,
                department=request.department,
                semester=request.semester,
                gender=request.gender,
            ),
        )

    if result.email_sent:
        message = "Verification code sent successfully"
    else:
        message = (
            "Account created, but the verification code could not be sent. "
            "Please register again to receive a new code."
        )
    return RegisterResponse(message=message, email_sent=result.email_sent)


@router.post(
    "/otp/verify",
    summary="Verify the e-mailed code",
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse}},
)
async def verify_otp(
    request: VerifyOtpRequest,
    response: Response,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
) -> AuthResponse:
    """Verify the newest registration for an e-mail and start a session."""
    async with _unit_of_work(session):
        account, token = await auth_service.verify_otp(request.email, request.otp)

    return _auth_response(response, account, token, "Account Verified.", settings)


@router.post("/login", summary="Log in", responses=ERROR_RESPONSES)
async def login(
    request: LoginRequest,
    response: Response,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
) -> AuthResponse:
    """Authenticate a verified account with e-mail and password."""
    async with _unit_of_work(session):
        account, token = await auth_service.login(request.email, request.password)

    return _auth_response(
        response,
        account,
        token,
        "User logged in successfully.",
        settings,
    )


@router.get("/logout", summary="Log out")
async def logout(response: Response, settings: SettingsDep) -> MessageResponse:
    """Expire the session cookie. Always succeeds."""
    _clear_session_cookie(response, settings)
    return MessageResponse(message="Logged out successfully.")


@router.get(
    "/me",
    summary="Get the current account",
    responses={401: {"model": ErrorResponse}},
)
async def get_me(current_account: CurrentAccount) -> CurrentAccountResponse:
    return CurrentAccountResponse(user=AccountResponse.from_account(current_account))


@router.post(
    "/password/forgot",
    summary="Request a password reset e-mail",
    responses=ERROR_RESPONSES,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    auth_service: AuthService,
    session: DBSession,
) -> MessageResponse:
    """E-mail a single-use reset link to a verified account."""
    async with _unit_of_work(session):
        account = await auth_service.forgot_password(request.email)

    return MessageResponse(message=f"Email sent to {account.email} successfully")


@router.put(
    "/password/reset/{token}",
    summary="Reset the password with an e-mailed token",
    responses=ERROR_RESPONSES,
)
async def reset_password(  # noqa: PLR0913
    token: str,
    request: ResetPasswordRequest,
    response: Response,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
) -> AuthResponse:
    async with _unit_of_work(session):
        account, session_token = await auth_service.reset_password(
            token,
            request.password,
            request.confirm_password,
        )

    return _auth_response(
        response,
        account,
        session_token,
        "Password reset successfully.",
        settings,
    )


@router.put(
    "/password/update",
    summary="Change the current account's password",
    responses={**ERROR_RESPONSES, 401: {"model": ErrorResponse}},
)
async def update_password(
    request: UpdatePasswordRequest,
    current_account: CurrentAccount,
    auth_service: AuthService,
    session: DBSession,
) -> MessageResponse:
    """Change the password. The current session stays valid."""
    async with _unit_of_work(session):
        await auth_service.update_password(
            current_account.id,
            request.current_password,
            request.new_password,
            request.confirm_new_password,
        )

    return MessageResponse(message="Password updated")
