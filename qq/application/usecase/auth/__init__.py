"""Authentication use cases."""

from .get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from .refresh_tokens import RefreshTokensRequest, RefreshTokensUseCase
from .register_or_login import (
    RegisterOrLoginOTPRequest,
    RegisterOrLoginOTPResponse,
    RegisterOrLoginOTPUseCase,
)
from .verify_otp import VerifyOTPAndLoginRequest, VerifyOTPAndLoginUseCase

__all__ = [
    "GetCurrentUserRequest",
    "GetCurrentUserResponse",
    "GetCurrentUserUseCase",
    "RefreshTokensRequest",
    "RefreshTokensUseCase",
    "RegisterOrLoginOTPRequest",
    "RegisterOrLoginOTPResponse",
    "RegisterOrLoginOTPUseCase",
    "VerifyOTPAndLoginRequest",
    "VerifyOTPAndLoginUseCase",
]
