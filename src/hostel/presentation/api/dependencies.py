"""Request-scoped wiring for the auth routes.

Each request gets its own database session; the account store, the token
services and the mail dispatcher are built per request from settings. Tests
swap any of them through ``app.dependency_overrides``.
"""

import logging
from datetime import datetime
from functools import lru_cache
from typing import Annotated, AsyncGenerator, Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from hostel.application.ports import MailDispatcher
from hostel.application.services import AuthenticationService
from hostel.domain.account import Account, AccountNotFoundError, AccountPolicy
from hostel.domain.shared.time import utc_now
from hostel.infrastructure.email import EmailService
from hostel.infrastructure.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
)
from hostel.presentation.api.config import get_api_settings
from hostel_auth import (
    InvalidTokenError,
    JWTService,
    OTPService,
    PasswordHashingService,
    ResetTokenService,
)
from hostel_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

SESSION_COOKIE = "token"

# Bearer header is the fallback when the cookie is absent
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Process-wide asyncpg engine built from the environment settings."""
    settings = get_settings()
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(get_engine(), expire_on_commit=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request. Routes decide when to commit."""
    async with get_session_maker()() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_clock() -> Callable[[], datetime]:
    """Time source for token expiry (overridden in tests)."""
    return utc_now


Clock = Annotated[Callable[[], datetime], Depends(get_clock)]


def get_account_policy(settings: SettingsDep) -> AccountPolicy:
    return AccountPolicy(
        email_domain=settings.institution_email_domain,
        roles=frozenset(settings.account_role_set),
        hostels=frozenset(settings.hostel_name_set),
        default_role=settings.default_account_role,
    )


def get_jwt_service(settings: SettingsDep) -> JWTService:
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        session_expire_days=settings.session_expire_days,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


def get_otp_service(settings: SettingsDep, clock: Clock) -> OTPService:
    return OTPService(
        expire_minutes=settings.verification_code_expire_minutes,
        clock=clock,
    )


def get_reset_token_service(settings: SettingsDep, clock: Clock) -> ResetTokenService:
    return ResetTokenService(
        expire_minutes=settings.reset_token_expire_minutes,
        clock=clock,
    )


def get_mail_dispatcher(settings: SettingsDep) -> MailDispatcher:
    return EmailService(settings)


async def get_authentication_service(  # noqa: PLR0913
    session: DBSession,
    settings: SettingsDep,
    clock: Clock,
    policy: AccountPolicy = Depends(get_account_policy),
    jwt_service: JWTService = Depends(get_jwt_service),
    password_service: PasswordHashingService = Depends(get_password_service),
    otp_service: OTPService = Depends(get_otp_service),
    reset_token_service: ResetTokenService = Depends(get_reset_token_service),
    mail_dispatcher: MailDispatcher = Depends(get_mail_dispatcher),
) -> AuthenticationService:
    """Workflow bound to this request's session, policy and clock."""
    return AuthenticationService(
        account_repository=AccountRepositorySQLAlchemy(session, policy),
        password_service=password_service,
        jwt_service=jwt_service,
        otp_service=otp_service,
        reset_token_service=reset_token_service,
        mail_dispatcher=mail_dispatcher,
        policy=policy,
        frontend_base_url=settings.frontend_base_url,
        max_unverified_accounts=settings.max_unverified_accounts,
        clock=clock,
    )


AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_account(
    request: Request,
    auth_service: AuthService,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    jwt_service: JWTService = Depends(get_jwt_service),
) -> Account:
    """
    FastAPI dependency to get the current authenticated account.

    The session token is read from the ``token`` cookie, falling back to
    the Authorization header.

    Raises
    ------
    HTTPException
        401 if token is missing, invalid, expired, or the account is gone
    """
    token = request.cookies.get(SESSION_COOKIE)
    if not token and credentials is not None:
        token = credentials.credentials

    if not token:
        raise _unauthorized("User is not authenticated.")

    try:
        payload = jwt_service.verify_token(token)
    except InvalidTokenError as e:
        logger.warning("Invalid session token: %s", e)
        raise _unauthorized("Invalid or expired token") from e

    if not payload.is_session_token():
        raise _unauthorized("Invalid token type")

    try:
        return await auth_service.get_self(payload.account_id)
    except AccountNotFoundError as e:
        logger.warning("Account not found for token: %s", payload.account_id)
        raise _unauthorized("User not found") from e


# Type alias for injected current account
CurrentAccount = Annotated[Account, Depends(get_current_account)]
