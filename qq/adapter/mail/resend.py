"""Resend email client implementation.

Sends HTML email through the Resend REST API and serves the HTML templates
packaged next to this module.
"""

from importlib import resources

import httpx
import logfire

from qq.adapter.error import AdapterError, ProviderError
from qq.domain.service.mailer import OTP_PLACEHOLDER, Mailer, SendEmailParams


class MailerError(ProviderError):
    """Email provider rejected the request or could not be reached."""

    pass


class TemplateNotFoundError(AdapterError):
    """Requested template does not exist or the name is not allowed."""

    pass


def _check_template_name(name: str) -> None:
    if not name or ".." in name or "/" in name or "\\" in name:
        raise TemplateNotFoundError(f"Invalid template name: {name!r}")


class ResendMailer(Mailer):
    """Mailer backed by the Resend API."""

    def __init__(
        self,
        api_key: str,
        api_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Resend mailer.

        Args:
            api_key: Resend API key
            api_url: Endpoint for sending emails
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use a mock transport)
        """
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    async def send_email(self, params: SendEmailParams) -> None:
        """Send an email through Resend.

        Args:
            params: Recipient, sender, subject and HTML body

        Raises:
            MailerError: If the request fails or Resend rejects it
        """
        payload = {
            "from": params.from_address,
            "to": [params.to],
            "subject": params.subject,
            "html": params.body,
        }

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Resend HTTP error", error=str(e), to=params.to)
            raise MailerError(f"HTTP error while sending email: {e}") from e

        if response.status_code >= 400:
            # Body may echo the request; log status only
            logfire.error(
                "Resend rejected email",
                status_code=response.status_code,
                to=params.to,
            )
            raise MailerError(f"Failed to send email: {response.status_code}")

        logfire.info("Email sent", to=params.to, subject=params.subject)

    async def get_template(self, name: str) -> str:
        """Load a packaged HTML template.

        Args:
            name: Template name without extension

        Returns:
            Template source

        Raises:
            TemplateNotFoundError: If the name is invalid or no such template
        """
        _check_template_name(name)
        template = resources.files("qq.adapter.mail").joinpath(
            "templates", f"{name}.html"
        )
        try:
            return template.read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError) as e:
            raise TemplateNotFoundError(f"Template not found: {name}") from e


class MockMailer(Mailer):
    """Mock mailer for development and testing.

    Records every email instead of sending it. Failures can be switched on
    per instance.
    """

    def __init__(self, templates: dict[str, str] | None = None) -> None:
        self.templates = (
            templates
            if templates is not None
            else {"otp": f"<p>Your code: {OTP_PLACEHOLDER}</p>"}
        )
        self.sent: list[SendEmailParams] = []
        self.fail_on_send = False
        self.fail_on_template = False

    async def send_email(self, params: SendEmailParams) -> None:
        if self.fail_on_send:
            raise MailerError("Mock send failure")
        self.sent.append(params)
        logfire.info("Mock email recorded", to=params.to)

    async def get_template(self, name: str) -> str:
        _check_template_name(name)
        if self.fail_on_template or name not in self.templates:
            raise TemplateNotFoundError(f"Template not found: {name}")
        return self.templates[name]
