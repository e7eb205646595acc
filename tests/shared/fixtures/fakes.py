"""In-process fakes for the account store, mail dispatcher and clock."""

import time
from dataclasses import replace
from datetime import datetime, timedelta
from itertools import count
from uuid import UUID

from hostel.application.ports import MailDispatcher
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


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingMailDispatcher(MailDispatcher):
    """Mail dispatcher that records messages and can be told to fail."""

    def __init__(self, delay: float = 0.0) -> None:
        self.delay = delay
        self.verification_codes: list[tuple[str, int]] = []
        self.reset_links: list[tuple[str, str]] = []
        self.fail_with: Exception | None = None

    def send_verification_code_email(self, to_email: str, code: int) -> None:
        time.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        self.verification_codes.append((to_email, code))

    def send_password_reset_email(self, to_email: str, reset_link: str) -> None:
        time.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        self.reset_links.append((to_email, reset_link))

    @property
    def last_code(self) -> int:
        return self.verification_codes[-1][1]

    @property
    def last_reset_token(self) -> str:
        return self.reset_links[-1][1].rsplit("/", 1)[-1]


class InMemoryAccountRepository(AccountRepository):
    """Dict-backed account store with the same contract as the SQL one."""

    def __init__(self, policy: AccountPolicy | None = None) -> None:
        self._policy = policy or AccountPolicy()
        self._rows: dict[UUID, Account] = {}
        self._order: dict[UUID, int] = {}
        self._seq = count()

    @property
    def all(self) -> list[Account]:
        return list(self._rows.values())

    def stored(self, account_id: UUID) -> Account:
        """Raw stored row including the password hash."""
        return self._rows[account_id]

    def _view(self, account: Account, include_password: bool = False) -> Account:
        if include_password:
            return account
        return replace(account, password_hash=None)

    def _newest_first(self, accounts: list[Account]) -> list[Account]:
        return sorted(
            accounts,
            key=lambda a: (a.created_at, self._order[a.id]),
            reverse=True,
        )

    def _check_unique_verified(self, account: Account) -> None:
        if not account.account_verified:
            return
        for other in self._rows.values():
            if (
                other.id != account.id
                and other.account_verified
                and other.email == account.email
            ):
                raise EmailAlreadyExistsError(account.email)

    async def find_by_id(
        self,
        account_id: UUID,
        include_password: bool = False,
    ) -> Account | None:
        account = self._rows.get(account_id)
        return self._view(account, include_password) if account else None

    async def find_verified_by_email(
        self,
        email: str,
        include_password: bool = False,
    ) -> Account | None:
        email = normalize_email(email)
        for account in self._rows.values():
            if account.email == email and account.account_verified:
                return self._view(account, include_password)
        return None

    async def find_unverified_by_email(self, email: str) -> list[Account]:
        email = normalize_email(email)
        matches = [
            a for a in self._rows.values() if a.email == email and not a.account_verified
        ]
        return [self._view(a) for a in self._newest_first(matches)]

    async def count_unverified_by_email(self, email: str) -> int:
        return len(await self.find_unverified_by_email(email))

    async def create(self, account: Account) -> Account:
        violations = validate_account(account, self._policy)
        if not account.password_hash:
            violations.append(FieldViolation("password", "password is required"))
        if violations:
            raise AccountValidationError(violations)
        self._check_unique_verified(account)
        self._rows[account.id] = account
        self._order[account.id] = next(self._seq)
        return self._view(account)

    async def delete_unverified_except(self, email: str, keep_id: UUID) -> int:
        email = normalize_email(email)
        doomed = [
            a.id
            for a in self._rows.values()
            if a.email == email and not a.account_verified and a.id != keep_id
        ]
        for account_id in doomed:
            del self._rows[account_id]
        return len(doomed)

    async def find_by_reset_token_hash(
        self,
        token_hash: str,
        now: datetime,
    ) -> Account | None:
        for account in self._rows.values():
            if (
                account.reset_password_token == token_hash
                and account.reset_password_expire is not None
                and account.reset_password_expire > now
            ):
                return self._view(account)
        return None

    async def save(self, account: Account, validate: bool = True) -> Account:
        if validate:
            violations = validate_account(account, self._policy)
            if violations:
                raise AccountValidationError(violations)
        stored = self._rows.get(account.id)
        if stored is None:
            msg = f"Account {account.id} does not exist"
            raise LookupError(msg)
        if account.password_hash is None:
            account = replace(account, password_hash=stored.password_hash)
        self._check_unique_verified(account)
        self._rows[account.id] = account
        return self._view(account)
