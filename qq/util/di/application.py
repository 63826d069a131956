"""Application layer DI providers."""

from dishka import Scope, provide

from qq.application.usecase.auth import (
    GetCurrentUserUseCase,
    RefreshTokensUseCase,
    RegisterOrLoginOTPUseCase,
    VerifyOTPAndLoginUseCase,
)
from qq.config import MailSettings
from qq.domain.repository import TransactionManager
from qq.domain.service import AuthService, JWTService, Mailer, UserService
from qq.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_register_or_login_otp_use_case(
        self,
        transaction_manager: TransactionManager,
        auth_service: AuthService,
        user_service: UserService,
        mailer: Mailer,
        mail_settings: MailSettings,
    ) -> RegisterOrLoginOTPUseCase:
        """Provide register-or-login OTP use case."""
        return RegisterOrLoginOTPUseCase(
            transaction_manager=transaction_manager,
            auth_service=auth_service,
            user_service=user_service,
            mailer=mailer,
            mail_settings=mail_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_verify_otp_and_login_use_case(
        self,
        transaction_manager: TransactionManager,
        auth_service: AuthService,
        user_service: UserService,
        jwt_service: JWTService,
    ) -> VerifyOTPAndLoginUseCase:
        """Provide verify OTP and login use case."""
        return VerifyOTPAndLoginUseCase(
            transaction_manager=transaction_manager,
            auth_service=auth_service,
            user_service=user_service,
            jwt_service=jwt_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_refresh_tokens_use_case(
        self,
        transaction_manager: TransactionManager,
        user_service: UserService,
        jwt_service: JWTService,
    ) -> RefreshTokensUseCase:
        """Provide refresh tokens use case."""
        return RefreshTokensUseCase(
            transaction_manager=transaction_manager,
            user_service=user_service,
            jwt_service=jwt_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self,
        transaction_manager: TransactionManager,
        jwt_service: JWTService,
        user_service: UserService,
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            transaction_manager=transaction_manager,
            jwt_service=jwt_service,
            user_service=user_service,
        )
