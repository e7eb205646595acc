from hostel.application.ports.mail_dispatcher import MailDispatcher

__all__ = ["MailDispatcher"]
