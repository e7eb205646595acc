"""SQLAlchemy implementation of AccountRepository."""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hostel.domain.account import (
    Account,
    AccountPolicy,
    AccountRepository,
    AccountValidationError,
    EmailAlreadyExistsError,
    FieldViolation,
    normalize_email,
    validate_account,
)
from hostel.domain.shared.time import ensure_tz_aware
from hostel.infrastructure.persistence.sqlalchemy.models import AccountModel

logger = logging.getLogger(__name__)

# Columns copied verbatim between model and aggregate on save
_MUTABLE_FIELDS = (
    "name",
    "email",
    "role",
    "contact_number",
    "guardian_contact",
    "hostel",
    "room_number",
    "department",
    "semester",
    "gender",
    "account_verified",
    "is_active",
    "avatar_public_id",
    "avatar_url",
    "verification_code",
    "verification_code_expire",
    "reset_password_token",
    "reset_password_expire",
)


class AccountRepositorySQLAlchemy(AccountRepository):
    """SQLAlchemy implementation of the AccountRepository interface."""

    def __init__(
        self,
        session: AsyncSession,
        policy: AccountPolicy | None = None,
    ) -> None:
        self._session = session
        self._policy = policy or AccountPolicy()

    async def find_by_id(
        self,
        account_id: UUID,
        include_password: bool = False,
    ) -> Account | None:
        model = await self._find_model_by_id(account_id)
        if model is None:
            return None
        return self._map_to_domain(model, include_password)

    async def find_verified_by_email(
        self,
        email: str,
        include_password: bool = False,
    ) -> Account | None:
        stmt = select(AccountModel).where(
            AccountModel.email == normalize_email(email),
            AccountModel.account_verified.is_(True),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model, include_password)

    async def find_unverified_by_email(self, email: str) -> list[Account]:
        stmt = (
            select(AccountModel)
            .where(
                AccountModel.email == normalize_email(email),
                AccountModel.account_verified.is_(False),
            )
            .order_by(AccountModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(m) for m in result.scalars().all()]

    async def count_unverified_by_email(self, email: str) -> int:
        stmt = (
            select(func.count())
            .select_from(AccountModel)
            .where(
                AccountModel.email == normalize_email(email),
                AccountModel.account_verified.is_(False),
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def create(self, account: Account) -> Account:
        violations = validate_account(account, self._policy)
        if not account.password_hash:
            violations.append(FieldViolation("password", "password is required"))
        if violations:
            raise AccountValidationError(violations)

        model = self._map_to_model(account)
        self._session.add(model)
        await self._flush_or_conflict(account.email)

        logger.info("Created account: %s (email: %s)", account.id, account.email)
        return self._map_to_domain(model)

    async def delete_unverified_except(self, email: str, keep_id: UUID) -> int:
        stmt = delete(AccountModel).where(
            AccountModel.email == normalize_email(email),
            AccountModel.account_verified.is_(False),
            AccountModel.id != keep_id,
        )
        result = await self._session.execute(stmt)
        deleted = result.rowcount or 0
        if deleted:
            logger.info(
                "Deleted %d unverified sibling account(s) for %s",
                deleted,
                email,
            )
        return deleted

    async def find_by_reset_token_hash(
        self,
        token_hash: str,
        now: datetime,
    ) -> Account | None:
        stmt = select(AccountModel).where(
            AccountModel.reset_password_token == token_hash,
            AccountModel.reset_password_expire > now,
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def save(self, account: Account, validate: bool = True) -> Account:
        if validate:
            violations = validate_account(account, self._policy)
            if violations:
                raise AccountValidationError(violations)

        model = await self._find_model_by_id(account.id)
        if model is None:
            msg = f"Account {account.id} does not exist"
            raise LookupError(msg)

        for name in _MUTABLE_FIELDS:
            setattr(model, name, getattr(account, name))
        if account.password_hash is not None:
            model.password_hash = account.password_hash

        await self._flush_or_conflict(account.email)
        logger.debug("Updated account: %s", account.id)
        return self._map_to_domain(model)

    async def _flush_or_conflict(self, email: str) -> None:
        try:
            await self._session.flush()
        except IntegrityError as e:
            await self._session.rollback()
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise EmailAlreadyExistsError(email) from e
            raise

    async def _find_model_by_id(self, account_id: UUID) -> AccountModel | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(
        self,
        model: AccountModel,
        include_password: bool = False,
    ) -> Account:
        return Account(
            id=model.id,
            name=model.name,
            email=model.email,
            password_hash=model.password_hash if include_password else None,
            role=model.role,
            contact_number=model.contact_number,
            guardian_contact=model.guardian_contact,
            hostel=model.hostel,
            room_number=model.room_number,
            department=model.department,
            semester=model.semester,
            gender=model.gender,
            account_verified=model.account_verified,
            is_active=model.is_active,
            avatar_public_id=model.avatar_public_id,
            avatar_url=model.avatar_url,
            verification_code=model.verification_code,
            verification_code_expire=ensure_tz_aware(model.verification_code_expire),
            reset_password_token=model.reset_password_token,
            reset_password_expire=ensure_tz_aware(model.reset_password_expire),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, account: Account) -> AccountModel:
        model = AccountModel(
            id=account.id,
            password_hash=account.password_hash,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
        for name in _MUTABLE_FIELDS:
            setattr(model, name, getattr(account, name))
        return model
