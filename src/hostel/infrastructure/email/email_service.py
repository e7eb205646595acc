"""SMTP delivery of verification codes and password reset links."""

import logging
import smtplib
import ssl
from contextlib import contextmanager
from email.message import EmailMessage
from typing import Iterator

from hostel.application.ports import MailDispatcher
from hostel_config.settings import Settings

logger = logging.getLogger(__name__)

VERIFICATION_CODE_SUBJECT = "Verification Code(Hostel Management System)"

VERIFICATION_CODE_TEXT = """Dear User,

Your verification code for the NITM Hostel Management System is:

    {code}

The code expires in {minutes} minutes. Do not share it with anyone.

If you did not register, ignore this e-mail.

NITM Hostel Management System
"""

VERIFICATION_CODE_HTML = """<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; background: #f4f4f4; padding: 20px;">
  <div style="max-width: 600px; margin: 0 auto; background: #fff; padding: 32px;">
    <h2 style="text-align: center;">Verify Your Email Address</h2>
    <p>Dear User,</p>
    <p>To complete your registration, enter this verification code:</p>
    <p style="text-align: center; font-size: 24px; font-weight: bold;">{code}</p>
    <p>The code expires in {minutes} minutes. Do not share it with anyone.</p>
    <p style="color: #888; font-size: 13px;">NITM Hostel Management System</p>
  </div>
</body>
</html>
"""

PASSWORD_RESET_SUBJECT = "NITM Hostel Management System Password Recovery"

PASSWORD_RESET_TEXT = """Dear User,

Your password reset link is:

{reset_link}

The link can be used once and expires in {minutes} minutes.

If you did not request a reset, ignore this e-mail.

NITM Hostel Management System
"""

PASSWORD_RESET_HTML = """<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; background: #f4f4f4; padding: 20px;">
  <div style="max-width: 600px; margin: 0 auto; background: #fff; padding: 32px;">
    <h2 style="text-align: center;">Reset Your Password</h2>
    <p>Use the button below to choose a new password.</p>
    <p style="text-align: center;">
      <a href="{reset_link}">Reset Password</a>
    </p>
    <p>The link can be used once and expires in {minutes} minutes.</p>
    <p style="color: #888; font-size: 13px;">NITM Hostel Management System</p>
  </div>
</body>
</html>
"""


class EmailService(MailDispatcher):
    """Sends account e-mails over SMTP.

    With ``smtp_enabled`` off nothing is sent; the message contents are
    logged instead so that codes and links stay usable in development.
    Delivery errors propagate to the caller.
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    def send_verification_code_email(self, to_email: str, code: int) -> None:
        if not self._settings.smtp_enabled:
            logger.warning(
                "SMTP disabled, verification code for %s is %s",
                to_email,
                code,
            )
            return

        minutes = self._settings.verification_code_expire_minutes
        self._send(
            to_email,
            VERIFICATION_CODE_SUBJECT,
            VERIFICATION_CODE_TEXT.format(code=code, minutes=minutes),
            VERIFICATION_CODE_HTML.format(code=code, minutes=minutes),
        )

    def send_password_reset_email(self, to_email: str, reset_link: str) -> None:
        if not self._settings.smtp_enabled:
            logger.warning(
                "SMTP disabled, password reset link for %s is %s",
                to_email,
                reset_link,
            )
            return

        minutes = self._settings.reset_token_expire_minutes
        self._send(
            to_email,
            PASSWORD_RESET_SUBJECT,
            PASSWORD_RESET_TEXT.format(reset_link=reset_link, minutes=minutes),
            PASSWORD_RESET_HTML.format(reset_link=reset_link, minutes=minutes),
        )

    def _build_message(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str,
    ) -> EmailMessage:
        sender = self._settings.smtp_from_email or self._settings.smtp_user
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = f"{self._settings.smtp_from_name} <{sender}>"
        message["To"] = to_email
        message.set_content(text_body)
        message.add_alternative(html_body, subtype="html")
        return message

    @contextmanager
    def _connect(self) -> Iterator[smtplib.SMTP]:
        """Open an authenticated SMTP connection.

        ``smtp_use_tls`` without ``smtp_starttls`` means implicit TLS
        (usually port 465); otherwise the connection starts plain and is
        upgraded when ``smtp_starttls`` is set (usually port 587).
        """
        s = self._settings
        implicit_tls = s.smtp_use_tls and not s.smtp_starttls
        if implicit_tls:
            server: smtplib.SMTP = smtplib.SMTP_SSL(
                s.smtp_host,
                s.smtp_port,
                timeout=s.smtp_timeout,
                context=ssl.create_default_context(),
            )
        else:
            server = smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=s.smtp_timeout)

        with server as conn:
            if s.smtp_starttls and not implicit_tls:
                conn.starttls(context=ssl.create_default_context())
            if s.smtp_user:
                password = s.smtp_password.get_secret_value() if s.smtp_password else ""
                conn.login(s.smtp_user, password)
            yield conn

    def _send(self, to_email: str, subject: str, text_body: str, html_body: str) -> None:
        if not self._settings.smtp_host:
            msg = "SMTP host not configured"
            logger.error(msg)
            raise RuntimeError(msg)

        message = self._build_message(to_email, subject, text_body, html_body)
        try:
            with self._connect() as server:
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Sending %r to %s failed: %s", subject, to_email, e)
            raise

        logger.info("Sent %r to %s", subject, to_email)
