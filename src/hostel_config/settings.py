"""Environment-driven settings for the hostel auth service.

Lookup order, highest priority first:

1. process environment,
2. the file named by ``HOSTEL_ENV_FILE`` (relative paths resolve against
   the project root),
3. ``config/.env.dev`` for local development,
4. ``config/.env`` for deployments.

List-valued settings (CORS origins, roles, hostel names) are written as
comma-separated strings so they survive plain ``KEY=value`` env files.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, SecretStr, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_FILE_VAR = "HOSTEL_ENV_FILE"
_ENV_FILE_CANDIDATES = (".env.dev", ".env")


def _find_project_root() -> Path:
    """Walk up from this file to the first directory holding ``config/`` or ``.git``."""
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if (candidate / "config").is_dir() or (candidate / ".git").is_dir():
            return candidate
        # Container image root
        if candidate == Path("/app"):
            return candidate
    return here.parents[1]


def get_config_dir() -> Path:
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    explicit = os.environ.get(_ENV_FILE_VAR)
    if explicit:
        path = Path(explicit)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()
    for name in _ENV_FILE_CANDIDATES:
        path = config_dir / name
        if path.exists():
            return path
    return None


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Service configuration.

    ``jwt_secret_key`` and ``postgres_password`` have no defaults; startup
    fails loudly when either is missing.
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Secrets
    jwt_secret_key: SecretStr = Field(description="HS256 key for session tokens")
    postgres_password: SecretStr

    app_name: str = "NITM Hostel Management System"
    debug: bool = False

    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_db: str = "nitm_hostel_management_system"

    # HTTP server and session cookie
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: str = ""
    api_cookie_secure: bool = True
    api_cookie_samesite: Literal["lax", "strict", "none"] = "strict"
    api_cookie_domain: str | None = None
    session_expire_days: int = Field(default=7, gt=0)

    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # Account policy
    institution_email_domain: str = "nitm.ac.in"
    account_roles: str = "Admin,Warden,User"
    default_account_role: str = "User"
    hostel_names: str = "PhD Boys Hostel,3 Seater Boys Hostel,Girls Hostel"
    max_unverified_accounts: int = Field(default=5, gt=0)

    # One-time token lifetimes
    verification_code_expire_minutes: int = Field(default=15, gt=0)
    reset_token_expire_minutes: int = Field(default=15, gt=0)

    # Outbound mail
    smtp_enabled: bool = False
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: SecretStr | None = None
    smtp_from_email: str = ""
    smtp_from_name: str = "NITM Hostel Management System"
    smtp_use_tls: bool = True
    smtp_starttls: bool = True
    smtp_timeout: float = Field(default=10.0, gt=0)

    # Reset links point here: {frontend_base_url}/password/reset/{token}
    frontend_base_url: str = "http://localhost:5173"

    log_level: str = "INFO"

    @field_validator("api_cors_origins", "account_roles", "hostel_names", mode="before")
    @classmethod
    def _join_lists(cls, v: Any) -> str:
        if isinstance(v, (list, tuple)):
            return ",".join(str(item) for item in v)
        return str(v) if v else ""

    @field_validator("institution_email_domain")
    @classmethod
    def _normalize_domain(cls, v: str) -> str:
        domain = v.strip().lstrip("@").lower()
        if not domain:
            msg = "institution_email_domain cannot be empty"
            raise ValueError(msg)
        return domain

    @model_validator(mode="after")
    def _check_default_role(self) -> Settings:
        if self.default_account_role not in self.account_role_set:
            msg = (
                f"default_account_role {self.default_account_role!r} "
                f"is not one of {self.account_role_set}"
            )
            raise ValueError(msg)
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """asyncpg URL assembled from the ``postgres_*`` settings."""
        password = self.postgres_password.get_secret_value()
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        return _split_csv(self.api_cors_origins)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def account_role_set(self) -> list[str]:
        return _split_csv(self.account_roles)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def hostel_name_set(self) -> list[str]:
        return _split_csv(self.hostel_names)


@lru_cache()
def get_settings() -> Settings:
    """Settings from the environment, built once per process."""
    return Settings()  # type: ignore[call-arg]


def clear_settings_cache() -> None:
    get_settings.cache_clear()
