"""Email delivery adapters."""

from .resend import MailerError, MockMailer, ResendMailer, TemplateNotFoundError

__all__ = ["MailerError", "MockMailer", "ResendMailer", "TemplateNotFoundError"]
