"""Account repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from hostel.domain.account.aggregates.account import Account


class AccountRepository(ABC):
    """Repository interface for Account aggregates.

    Reads leave ``password_hash`` as ``None`` unless ``include_password``
    is requested.
    """

    @abstractmethod
    async def find_by_id(
        self,
        account_id: UUID,
        include_password: bool = False,
    ) -> Account | None:
        """Find an account by its ID."""

    @abstractmethod
    async def find_verified_by_email(
        self,
        email: str,
        include_password: bool = False,
    ) -> Account | None:
        """Find the verified account for an email."""

    @abstractmethod
    async def find_unverified_by_email(self, email: str) -> list[Account]:
        """List unverified accounts for an email, newest first."""

    @abstractmethod
    async def count_unverified_by_email(self, email: str) -> int:
        """Count unverified accounts for an email."""

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Validate and insert a new account.

        Raises
        ------
        AccountValidationError
            If the validation pass reports violations.
        EmailAlreadyExistsError
            If a verified account already holds the email.
        """

    @abstractmethod
    async def delete_unverified_except(self, email: str, keep_id: UUID) -> int:
        """Delete unverified accounts for an email except ``keep_id``."""

    @abstractmethod
    async def find_by_reset_token_hash(
        self,
        token_hash: str,
        now: datetime,
    ) -> Account | None:
        """Find the account holding a reset token that expires after ``now``."""

    @abstractmethod
    async def save(self, account: Account, validate: bool = True) -> Account:
        """Persist changes to an existing account.

        A ``None`` password hash leaves the stored hash untouched.
        """
