"""Unit tests for Settings."""

import pytest
from pydantic import ValidationError

from hostel_config.settings import Settings


def _settings(**overrides) -> Settings:
    values = {"jwt_secret_key": "secret", "postgres_password": "pw"}
    values.update(overrides)
    return Settings(**values)


class TestSettings:
    def test_defaults(self):
        settings = _settings()

        assert settings.institution_email_domain == "nitm.ac.in"
        assert settings.account_role_set == ["Admin", "Warden", "User"]
        assert settings.default_account_role == "User"
        assert settings.max_unverified_accounts == 5
        assert settings.verification_code_expire_minutes == 15
        assert settings.reset_token_expire_minutes == 15
        assert settings.session_expire_days == 7

    def test_database_url(self):
        settings = _settings(postgres_host="db", postgres_db="hostel")

        assert settings.database_url == "postgresql+asyncpg://postgres:pw@db:5432/hostel"

    def test_csv_settings_accept_lists(self):
        settings = _settings(
            api_cors_origins=["http://a.test", "http://b.test"],
            hostel_names="Girls Hostel, PhD Boys Hostel ,",
        )

        assert settings.cors_origins == ["http://a.test", "http://b.test"]
        assert settings.hostel_name_set == ["Girls Hostel", "PhD Boys Hostel"]

    def test_email_domain_is_normalized(self):
        assert _settings(institution_email_domain=" @NITM.ac.in ").institution_email_domain == (
            "nitm.ac.in"
        )

    def test_default_role_must_be_allowed(self):
        with pytest.raises(ValidationError, match="default_account_role"):
            _settings(account_roles="Admin,Warden", default_account_role="User")

    def test_environment_is_read(self, monkeypatch):
        monkeypatch.setenv("MAX_UNVERIFIED_ACCOUNTS", "3")
        monkeypatch.setenv("SMTP_ENABLED", "true")

        settings = _settings()

        assert settings.max_unverified_accounts == 3
        assert settings.smtp_enabled is True

    def test_bcrypt_rounds_lower_bound(self):
        with pytest.raises(ValidationError):
            _settings(bcrypt_rounds=3)


class TestSmtpTimeout:
    def test_default(self):
        assert _settings().smtp_timeout == 10.0

    @pytest.mark.parametrize("value", [0, -1])
    def test_must_be_positive(self, value):
        with pytest.raises(ValidationError):
            _settings(smtp_timeout=value)
