"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from qq.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
    RefreshTokensRequest,
    RefreshTokensUseCase,
    RegisterOrLoginOTPRequest,
    RegisterOrLoginOTPUseCase,
    VerifyOTPAndLoginRequest,
    VerifyOTPAndLoginUseCase,
)
from qq.domain.error import UnauthorizedError
from qq.util.jwt import TokenPair

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

bearer_scheme = HTTPBearer(auto_error=False)


class RequestOTPResponse(BaseModel):
    """Response after a code was issued."""

    is_new_user: bool
    message: str


class TokenResponse(BaseModel):
    """Access/refresh token pair."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"

    @classmethod
    def from_pair(cls, pair: TokenPair) -> "TokenResponse":
        return cls(access_token=pair.access_token, refresh_token=pair.refresh_token)


@router.post("/otp", response_model=RequestOTPResponse)
async def request_otp(
    request: RegisterOrLoginOTPRequest,
    use_case: FromDishka[RegisterOrLoginOTPUseCase],
) -> RequestOTPResponse:
    """Register a new email or log in an existing one by emailing a code.

    Example:
        POST /auth/otp
        {"email": "alice@example.com"}

        Response:
        {"is_new_user": true, "message": "Verification code sent"}
    """
    logger.info("OTP requested")
    response = await use_case.execute(request)
    return RequestOTPResponse(
        is_new_user=response.is_new_user,
        message="Verification code sent",
    )


@router.post("/otp/verify", response_model=TokenResponse)
async def verify_otp(
    request: VerifyOTPAndLoginRequest,
    use_case: FromDishka[VerifyOTPAndLoginUseCase],
) -> TokenResponse:
    """Exchange an emailed code for an access/refresh token pair."""
    pair = await use_case.execute(request)
    return TokenResponse.from_pair(pair)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_tokens(
    request: RefreshTokensRequest,
    use_case: FromDishka[RefreshTokensUseCase],
) -> TokenResponse:
    """Exchange a refresh token for a new token pair."""
    pair = await use_case.execute(request)
    return TokenResponse.from_pair(pair)


@router.get("/me", response_model=GetCurrentUserResponse)
async def get_me(
    use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> GetCurrentUserResponse:
    """Return the profile of the user the bearer access token belongs to.

    Raises:
        UnauthorizedError: If no bearer token is sent
    """
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")
    return await use_case.execute(GetCurrentUserRequest(token=credentials.credentials))
