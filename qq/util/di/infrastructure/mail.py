"""Mail infrastructure providers."""

from dishka import Scope, provide
import logfire

from qq.adapter.mail import ResendMailer
from qq.config import MailSettings, Settings
from qq.domain.service import Mailer
from qq.util.di.base import ProviderBase
from qq.util.error import ConfigurationError


class MailerProvider(ProviderBase):
    """Mailer component base."""

    __mock_component__ = "mailer"


class ProdMailerProvider(MailerProvider):
    """Production mailer provider using Resend."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_mailer(self, settings: Settings, mail_settings: MailSettings) -> Mailer:
        """Provide Resend mailer.

        Raises:
            ConfigurationError: If no API key is set in production
        """
        if not mail_settings.resend_api_key:
            if settings.environment == "production":
                raise ConfigurationError("MAIL__RESEND_API_KEY must be set in production")
            logfire.warn("Resend API key not set, emails will be rejected")

        return ResendMailer(
            api_key=mail_settings.resend_api_key,
            api_url=mail_settings.api_url,
        )
