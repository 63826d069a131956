"""Test configuration and helpers."""

import itertools

import logfire

from qq.config import AuthSettings, OtpSettings

# Keep spans local; tests never export telemetry
logfire.configure(send_to_logfire=False, console=False)


class FixedRandomSource:
    """Random source that yields the characters of a fixed string, cycling.

    Ignores the alphabet, so tests can pin codes such as ``1A2B3C``.
    """

    def __init__(self, chars: str) -> None:
        self._chars = itertools.cycle(chars)

    def choice(self, alphabet: str) -> str:
        return next(self._chars)


def make_auth_settings(**overrides) -> AuthSettings:
    """Auth settings with a fixed test secret."""
    values = {"jwt_secret": "test-secret-key-for-unit-tests-only"}
    values.update(overrides)
    return AuthSettings(**values)


def make_otp_settings(**overrides) -> OtpSettings:
    """OTP settings with defaults."""
    return OtpSettings(**overrides)


async def make_register_use_case(env, chars: str = "1A2B3C"):
    """Register-or-login use case whose codes are the characters of ``chars``.

    Args:
        env: Request-scoped test container
        chars: Characters the random source yields, in order
    """
    from qq.application.usecase.auth import RegisterOrLoginOTPUseCase
    from qq.config import MailSettings
    from qq.domain.repository import TransactionManager
    from qq.domain.service import AuthService, Mailer, UserService

    return RegisterOrLoginOTPUseCase(
        transaction_manager=await env.get(TransactionManager),
        auth_service=AuthService(FixedRandomSource(chars), await env.get(OtpSettings)),
        user_service=await env.get(UserService),
        mailer=await env.get(Mailer),
        mail_settings=await env.get(MailSettings),
    )
