"""Mock mail providers for testing."""

from dishka import Scope, provide

from qq.adapter.mail import MockMailer
from qq.domain.service import Mailer
from qq.util.di.infrastructure.mail import MailerProvider


class MockMailerProvider(MailerProvider):
    """Mock mailer provider recording emails instead of sending them."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mailer(self) -> Mailer:
        """Provide mock mailer."""
        return MockMailer()
