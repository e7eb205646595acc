"""Authentication service for account registration, verification and login."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, fields
from datetime import datetime
from typing import TYPE_CHECKING, Callable
from uuid import UUID

from hostel.domain.account import (
    Account,
    AccountNotFoundError,
    AccountPolicy,
    EmailAlreadyExistsError,
    normalize_email,
)
from hostel.domain.shared.exceptions import (
    BadRequestError,
    EmailDeliveryError,
    ErrorCode,
    InvalidCredentialsError,
    InvalidInputError,
    InvalidOrExpiredTokenError,
    TooManyAttemptsError,
    ValidationError,
)
from hostel.domain.shared.time import utc_now
from hostel_auth import (
    JWTService,
    OTPService,
    OtpCheckResult,
    PasswordHashingService,
    ResetTokenCheckResult,
    ResetTokenService,
    WeakPasswordError,
)

if TYPE_CHECKING:
    from hostel.application.ports import MailDispatcher
    from hostel.domain.account import AccountRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_UNVERIFIED_ACCOUNTS = 5


@dataclass(frozen=True)
class RegistrationData:
    """Profile fields submitted when registering."""

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

    def __repr__(self) -> str:
        return f"RegistrationData(email={self.email!r}, name={self.name!r})"

    def missing_fields(self) -> list[str]:
        return [
            f.name for f in fields(self) if not _present(getattr(self, f.name))
        ]


@dataclass(frozen=True)
class RegistrationResult:
    account: Account
    email_sent: bool


def _present(value: str | None) -> bool:
    return value is not None and str(value).strip() != ""


class AuthenticationService:
    """
    Application service for account authentication.

    Orchestrates hostel_auth infrastructure (password hashing, OTPs, reset
    tokens, session tokens) with the Account domain to provide:
    - Registration with e-mail verification
    - Login with password
    - Forgot / reset password
    - Password change

    The account store and mail dispatcher are injected; the service never
    commits. The caller owns the unit of work.
    """

    def __init__(  # noqa: PLR0913
        self,
        account_repository: AccountRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        otp_service: OTPService,
        reset_token_service: ResetTokenService,
        mail_dispatcher: MailDispatcher,
        policy: AccountPolicy | None = None,
        frontend_base_url: str = "",
        max_unverified_accounts: int = DEFAULT_MAX_UNVERIFIED_ACCOUNTS,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._account_repo = account_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._otp_service = otp_service
        self._reset_token_service = reset_token_service
        self._mail = mail_dispatcher
        self._policy = policy or AccountPolicy()
        self._frontend_base_url = frontend_base_url.rstrip("/")
        self._max_unverified = max_unverified_accounts
        self._clock = clock

    def _create_session_token(self, account: Account) -> str:
        return self._jwt_service.create_session_token(
            account_id=account.id,
            email=account.email,
        )

    def _check_password_length(self, *passwords: str) -> None:
        try:
            for password in passwords:
                self._password_service.validate_strength(password)
        except WeakPasswordError as e:
            raise ValidationError(e.message, code=ErrorCode.WEAK_PASSWORD) from e

    async def register(self, data: RegistrationData) -> RegistrationResult:
        """Create an unverified account and send its verification code.

        Parameters
        ----------
        data
            The submitted profile fields. All ten are required.

        Returns
        -------
        The created account and whether the verification e-mail went out.
        A failed dispatch does not undo the account; the caller may register
        again, bounded by the unverified account cap.
        """
        missing = data.missing_fields()
        if missing:
            raise BadRequestError(
                "Please fill in all required fields.",
                details={"missing": missing},
            )

        email = normalize_email(data.email)
        if not self._policy.is_institutional_email(email):
            msg = f"Only @{self._policy.email_domain} email is allowed."
            raise ValidationError(msg, code=ErrorCode.INVALID_EMAIL)

        if await self._account_repo.find_verified_by_email(email) is not None:
            logger.warning("Registration rejected, already verified: %s", email)
            raise EmailAlreadyExistsError(email)

        unverified = await self._account_repo.count_unverified_by_email(email)
        if unverified >= self._max_unverified:
            logger.warning(
                "Registration rejected, %d unverified attempts for %s",
                unverified,
                email,
            )
            msg = "Too many attempts. Contact support."
            raise TooManyAttemptsError(msg)

        self._check_password_length(data.password)
        password_hash = self._password_service.hash(data.password)

        otp = self._otp_service.issue()
        account = Account.register(
            name=data.name,
            email=email,
            password_hash=password_hash,
            contact_number=data.contact_number.strip(),
            guardian_contact=data.guardian_contact.strip(),
            hostel=data.hostel,
            room_number=data.room_number,
            department=data.department,
            semester=data.semester,
            gender=data.gender,
            role=self._policy.default_role,
        ).with_verification_code(otp.code, otp.expires_at)
        account = await self._account_repo.create(account)

        email_sent = True
        try:
            await asyncio.to_thread(
                self._mail.send_verification_code_email,
                email,
                otp.code,
            )
        except Exception as e:  # noqa: BLE001
            email_sent = False
            logger.error("Failed to send verification code to %s: %s", email, e)

        logger.info("Account registered: %s (id: %s)", email, account.id)
        return RegistrationResult(account=account, email_sent=email_sent)

    async def verify_otp(
        self,
        email: str | None,
        otp: int | str | None,
    ) -> tuple[Account, str]:
        """Verify the newest unverified account for an e-mail.

        All older unverified siblings are deleted before the code is
        checked, whether or not the check succeeds.

        Returns
        -------
        The verified account and a session token.
        """
        if not _present(email) or not _present(otp):
            msg = "Email or OTP is missing."
            raise BadRequestError(msg)

        email = normalize_email(email)
        candidates = await self._account_repo.find_unverified_by_email(email)
        if not candidates:
            raise AccountNotFoundError("User not found or already verified.")

        account = candidates[0]
        if len(candidates) > 1:
            await self._account_repo.delete_unverified_except(email, account.id)

        result = self._otp_service.check(
            account.verification_code,
            otp,
            account.verification_code_expire,
            now=self._clock(),
        )
        if result is OtpCheckResult.MISMATCH:
            logger.warning("Invalid OTP supplied for %s", email)
            raise ValidationError("Invalid OTP.", code=ErrorCode.OTP_MISMATCH)
        if result is OtpCheckResult.EXPIRED:
            logger.warning("Expired OTP supplied for %s", email)
            raise ValidationError("OTP expired.", code=ErrorCode.OTP_EXPIRED)

        account = await self._account_repo.save(account.mark_verified(), validate=False)

        logger.info("Account verified: %s (id: %s)", email, account.id)
        return account, self._create_session_token(account)

    async def login(
        self,
        email: str | None,
        password: str | None,
    ) -> tuple[Account, str]:
        if not _present(email) or not password:
            msg = "Please Enter all Fields."
            raise BadRequestError(msg)

        email = normalize_email(email)
        account = await self._account_repo.find_verified_by_email(
            email,
            include_password=True,
        )
        if account is None:
            logger.warning("Login failed, no verified account: %s", email)
            raise InvalidCredentialsError

        if not self._password_service.verify(password, account.password_hash):
            logger.warning("Login failed, wrong password: %s", email)
            raise InvalidCredentialsError

        if self._password_service.needs_rehash(account.password_hash):
            account = await self._rehash(account, password)

        logger.info("Account logged in: %s", email)
        return account, self._create_session_token(account)

    async def _rehash(self, account: Account, password: str) -> Account:
        """Re-hash with the current cost factor after bcrypt_rounds changed."""
        try:
            password_hash = self._password_service.hash(password)
        except WeakPasswordError:
            # Set under an older policy; keep the existing hash
            return account
        logger.info("Upgrading password hash cost for account: %s", account.id)
        return await self._account_repo.save(
            account.with_password(password_hash),
            validate=False,
        )

    async def get_self(self, account_id: UUID) -> Account:
        account = await self._account_repo.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError
        return account

    async def forgot_password(self, email: str | None) -> Account:
        """Issue a reset token and e-mail the reset link.

        Raises
        ------
        EmailDeliveryError
            If the link could not be sent. The issued token is cleared
            before raising.
        """
        if not _present(email):
            msg = "Email is required."
            raise BadRequestError(msg)

        email = normalize_email(email)
        account = await self._account_repo.find_verified_by_email(email)
        if account is None:
            msg = "Invalid email."
            raise InvalidInputError(msg)

        issued = self._reset_token_service.issue()
        account = await self._account_repo.save(
            account.with_reset_token(issued.token_hash, issued.expires_at),
            validate=False,
        )

        reset_link = f"{self._frontend_base_url}/password/reset/{issued.token}"
        try:
            await asyncio.to_thread(
                self._mail.send_password_reset_email,
                to_email=account.email,
                reset_link=reset_link,
            )
        except Exception as e:
            logger.error("Failed to send password reset email to %s: %s", email, e)
            await self._account_repo.save(account.clear_reset_token(), validate=False)
            msg = "Failed to send password reset email."
            raise EmailDeliveryError(msg) from e

        logger.info("Password reset email sent to %s", email)
        return account

    async def reset_password(
        self,
        token: str | None,
        password: str | None,
        confirm_password: str | None,
    ) -> tuple[Account, str]:
        """Set a new password using an e-mailed reset token.

        Returns
        -------
        The updated account and a fresh session token.
        """
        now = self._clock()
        account = None
        if token:
            token_hash = self._reset_token_service.hash_token(token)
            account = await self._account_repo.find_by_reset_token_hash(
                token_hash,
                now,
            )
        if account is None or not self._reset_token_usable(account, token, now):
            logger.warning("Password reset with unknown or expired token")
            raise InvalidOrExpiredTokenError

        if not password or not confirm_password:
            msg = "Please enter all fields."
            raise BadRequestError(msg)

        if password != confirm_password:
            msg = "Password and Confirm Password do not match."
            raise ValidationError(msg, code=ErrorCode.PASSWORD_MISMATCH)

        self._check_password_length(password, confirm_password)

        password_hash = self._password_service.hash(password)
        account = await self._account_repo.save(
            account.with_password(password_hash).clear_reset_token(),
        )

        logger.info("Password reset completed for account: %s", account.id)
        return account, self._create_session_token(account)

    def _reset_token_usable(self, account: Account, token: str, now: datetime) -> bool:
        result = self._reset_token_service.check(
            account.reset_password_token,
            token,
            account.reset_password_expire,
            now=now,
        )
        return result is ResetTokenCheckResult.VALID

    async def update_password(
        self,
        account_id: UUID,
        current_password: str | None,
        new_password: str | None,
        confirm_new_password: str | None,
    ) -> Account:
        if not current_password or not new_password or not confirm_new_password:
            msg = "Please enter all fields."
            raise BadRequestError(msg)

        account = await self._account_repo.find_by_id(
            account_id,
            include_password=True,
        )
        if account is None:
            raise AccountNotFoundError

        if not self._password_service.verify(current_password, account.password_hash):
            logger.warning("Password update rejected for account: %s", account_id)
            raise InvalidCredentialsError("Current password is incorrect.")

        self._check_password_length(new_password, confirm_new_password)

        if new_password != confirm_new_password:
            msg = "New password and confirm new password do not match."
            raise ValidationError(msg, code=ErrorCode.PASSWORD_MISMATCH)

        password_hash = self._password_service.hash(new_password)
        account = await self._account_repo.save(account.with_password(password_hash))

        logger.info("Password changed for account: %s", account_id)
        return account
