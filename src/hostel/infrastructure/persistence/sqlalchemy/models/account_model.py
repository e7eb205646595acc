"""SQLAlchemy model for the Account aggregate."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from hostel.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class AccountModel(Base, TimestampMixin):
    """SQLAlchemy model for persisting Account aggregates.

    Several unverified rows may share an email; at most one verified row
    may, enforced by a partial unique index.
    """

    __tablename__ = "accounts"
    __table_args__ = (
        Index(
            "uq_accounts_verified_email",
            "email",
            unique=True,
            sqlite_where=text("account_verified = 1"),
            postgresql_where=text("account_verified = true"),
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), default="User", nullable=False)

    contact_number: Mapped[str] = mapped_column(String(10), nullable=False)
    guardian_contact: Mapped[str] = mapped_column(String(10), nullable=False)
    hostel: Mapped[str] = mapped_column(String(100), nullable=False)
    room_number: Mapped[str] = mapped_column(String(50), nullable=False)
    department: Mapped[str] = mapped_column(String(100), nullable=False)
    semester: Mapped[str] = mapped_column(String(20), nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)

    account_verified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    avatar_public_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    verification_code: Mapped[int | None] = mapped_column(Integer, nullable=True)
    verification_code_expire: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    reset_password_token: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        index=True,
    )
    reset_password_expire: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<AccountModel(id={self.id}, email={self.email}, "
            f"verified={self.account_verified})>"
        )
