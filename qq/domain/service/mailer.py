"""Outbound email port."""

from abc import ABC, abstractmethod

from qq.domain.value.common import ValueObject

# Placeholder replaced by the plaintext code in the OTP template
OTP_PLACEHOLDER = "{{OTP}}"


class SendEmailParams(ValueObject):
    """A single outbound email."""

    to: str
    from_address: str
    subject: str
    body: str  # HTML


class Mailer(ABC):
    """Generic mailer interface for all email providers."""

    @abstractmethod
    async def send_email(self, params: SendEmailParams) -> None:
        """Send an email.

        Args:
            params: Recipient, sender, subject and HTML body

        Raises:
            AdapterError: If the provider rejects or cannot be reached
        """
        pass

    @abstractmethod
    async def get_template(self, name: str) -> str:
        """Load an HTML email template.

        Args:
            name: Template name without extension (e.g. "otp")

        Returns:
            Template source

        Raises:
            AdapterError: If the template does not exist
        """
        pass


def render_otp_template(template: str, code: str) -> str:
    """Substitute the code into the template's placeholder (first occurrence)."""
    return template.replace(OTP_PLACEHOLDER, code, 1)
