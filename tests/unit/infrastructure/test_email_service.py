"""Unit tests for the SMTP EmailService."""

import smtplib
from unittest.mock import MagicMock, patch

import pytest

from hostel.infrastructure.email import EmailService
from hostel.infrastructure.email.email_service import (
    PASSWORD_RESET_SUBJECT,
    VERIFICATION_CODE_SUBJECT,
)
from hostel_config.settings import Settings

TEST_EMAIL = "asha@nitm.ac.in"
RESET_LINK = "http://hostel.test/password/reset/abc123"


def _settings(**overrides) -> Settings:
    values = {
        "jwt_secret_key": "test-secret",
        "postgres_password": "test-password",
        "smtp_enabled": True,
        "smtp_host": "smtp.test",
        "smtp_port": 587,
        "smtp_user": "mailer",
        "smtp_password": "mailer-pass",
        "smtp_from_email": "noreply@nitm.ac.in",
    }
    values.update(overrides)
    return Settings(**values)


def _smtp_mock(smtp_cls: MagicMock) -> MagicMock:
    server = MagicMock()
    smtp_cls.return_value.__enter__.return_value = server
    return server


class TestEmailServiceDisabled:
    """SMTP disabled means messages are logged and dropped."""

    @patch("hostel.infrastructure.email.email_service.smtplib.SMTP")
    def test_verification_code_is_not_sent(self, smtp_cls):
        service = EmailService(_settings(smtp_enabled=False))

        service.send_verification_code_email(TEST_EMAIL, 12345)

        smtp_cls.assert_not_called()

    @patch("hostel.infrastructure.email.email_service.smtplib.SMTP")
    def test_reset_link_is_not_sent(self, smtp_cls):
        service = EmailService(_settings(smtp_enabled=False))

        service.send_password_reset_email(TEST_EMAIL, RESET_LINK)

        smtp_cls.assert_not_called()


class TestEmailServiceStartTls:
    """Tests for delivery over STARTTLS."""

    @patch("hostel.infrastructure.email.email_service.smtplib.SMTP")
    def test_sends_verification_code(self, smtp_cls):
        server = _smtp_mock(smtp_cls)
        service = EmailService(_settings())

        service.send_verification_code_email(TEST_EMAIL, 12345)

        smtp_cls.assert_called_once_with("smtp.test", 587, timeout=10.0)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "mailer-pass")
        message = server.send_message.call_args[0][0]
        assert message["Subject"] == VERIFICATION_CODE_SUBJECT
        assert message["To"] == TEST_EMAIL
        assert "12345" in message.as_string()

    @patch("hostel.infrastructure.email.email_service.smtplib.SMTP")
    def test_sends_reset_link(self, smtp_cls):
        server = _smtp_mock(smtp_cls)
        service = EmailService(_settings())

        service.send_password_reset_email(TEST_EMAIL, RESET_LINK)

        message = server.send_message.call_args[0][0]
        assert message["Subject"] == PASSWORD_RESET_SUBJECT
        assert RESET_LINK in message.as_string()

    @patch("hostel.infrastructure.email.email_service.smtplib.SMTP")
    def test_no_login_without_user(self, smtp_cls):
        server = _smtp_mock(smtp_cls)
        service = EmailService(_settings(smtp_user=""))

        service.send_verification_code_email(TEST_EMAIL, 12345)

        server.login.assert_not_called()
        server.send_message.assert_called_once()

    @patch("hostel.infrastructure.email.email_service.smtplib.SMTP")
    def test_smtp_failure_is_raised(self, smtp_cls):
        server = _smtp_mock(smtp_cls)
        server.send_message.side_effect = smtplib.SMTPRecipientsRefused({})
        service = EmailService(_settings())

        with pytest.raises(smtplib.SMTPException):
            service.send_verification_code_email(TEST_EMAIL, 12345)

    @patch("hostel.infrastructure.email.email_service.smtplib.SMTP")
    def test_connection_failure_is_raised(self, smtp_cls):
        smtp_cls.side_effect = ConnectionRefusedError("refused")
        service = EmailService(_settings())

        with pytest.raises(OSError):
            service.send_password_reset_email(TEST_EMAIL, RESET_LINK)


class TestEmailServiceImplicitTls:
    @patch("hostel.infrastructure.email.email_service.smtplib.SMTP_SSL")
    def test_uses_smtp_ssl(self, smtp_ssl_cls):
        server = _smtp_mock(smtp_ssl_cls)
        service = EmailService(_settings(smtp_starttls=False, smtp_port=465))

        service.send_verification_code_email(TEST_EMAIL, 12345)

        assert smtp_ssl_cls.call_args[0] == ("smtp.test", 465)
        assert smtp_ssl_cls.call_args.kwargs["timeout"] == 10.0
        server.send_message.assert_called_once()


class TestEmailServiceMisconfigured:
    def test_missing_host_raises(self):
        service = EmailService(_settings(smtp_host=""))

        with pytest.raises(RuntimeError, match="SMTP host not configured"):
            service.send_verification_code_email(TEST_EMAIL, 12345)


class TestEmailServiceTimeout:
    @patch("hostel.infrastructure.email.email_service.smtplib.SMTP")
    def test_configured_timeout_is_passed_to_connection(self, smtp_cls):
        _smtp_mock(smtp_cls)
        service = EmailService(_settings(smtp_timeout=2.5))

        service.send_verification_code_email(TEST_EMAIL, 12345)

        assert smtp_cls.call_args.kwargs["timeout"] == 2.5
