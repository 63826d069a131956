"""Domain layer DI providers."""

from dishka import Scope, provide

from qq.config import AuthSettings, OtpSettings
from qq.domain.service import AuthService, JWTService, UserService
from qq.util.di.base import ProviderBase
from qq.util.otp import RandomSource, SecretsRandomSource


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services hold no transaction state (the unit of work is passed to each
    call), so they are APP-scoped.
    """

    scope = Scope.APP

    @provide
    def get_random_source(self) -> RandomSource:
        """Provide cryptographically secure randomness for OTP codes."""
        return SecretsRandomSource()

    @provide
    def get_auth_service(
        self, random_source: RandomSource, otp_settings: OtpSettings
    ) -> AuthService:
        """Provide authentication domain service."""
        return AuthService(random_source=random_source, otp_settings=otp_settings)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self) -> UserService:
        """Provide user domain service."""
        return UserService()
