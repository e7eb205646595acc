"""Outbound mail port."""

from abc import ABC, abstractmethod


class MailDispatcher(ABC):
    """Sends the account e-mails. Implementations raise on failure."""

    @abstractmethod
    def send_verification_code_email(self, to_email: str, code: int) -> None:
        """Send the 5-digit verification code."""

    @abstractmethod
    def send_password_reset_email(self, to_email: str, reset_link: str) -> None:
        """Send the password reset link."""
