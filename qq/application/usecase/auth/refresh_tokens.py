"""Refresh tokens use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from qq.application.usecase.base import BaseUseCase
from qq.domain.error import (
    DomainError,
    InternalServerError,
    UnauthorizedError,
    ValidationError,
)
from qq.domain.repository import TransactionManager
from qq.domain.service import JWTService, UserService
from qq.domain.value import UserId
from qq.util.jwt import JWTError, TokenPair


class RefreshTokensRequest(BaseModel):
    """Refresh token issued by a previous login."""

    refresh_token: str


def parse_user_id(raw: str) -> UserId:
    """Parse the ``user_id`` claim.

    Raises:
        ValidationError: If the claim is empty or not a UUID
    """
    if not raw:
        raise ValidationError("Token does not carry a user id")
    try:
        return UserId(UUID(raw))
    except ValueError as e:
        raise ValidationError(f"Token user id is not a UUID: {raw}") from e


class RefreshTokensUseCase(BaseUseCase):
    """Use case for exchanging a refresh token for a new pair.

    Refresh is stateless: the old refresh token stays valid until it expires.
    """

    def __init__(
        self,
        transaction_manager: TransactionManager,
        user_service: UserService,
        jwt_service: JWTService,
    ) -> None:
        self.transaction_manager = transaction_manager
        self.user_service = user_service
        self.jwt_service = jwt_service

    async def execute(self, request: RefreshTokensRequest) -> TokenPair:
        """Execute refresh flow.

        Args:
            request: Request with the refresh token

        Returns:
            Fresh access/refresh token pair for the same user

        Raises:
            UnauthorizedError: If the token fails validation
            ValidationError: If the token's user id is empty or malformed
            NotFoundError: If the user no longer exists
        """
        with logfire.span("refresh_tokens"):
            try:
                claims = self.jwt_service.validate(request.refresh_token)
            except JWTError as e:
                raise UnauthorizedError(f"Invalid refresh token: {e}") from e

            user_id = parse_user_id(claims.user_id)

            try:
                # Read-only; leaving the block rolls back
                async with self.transaction_manager.begin() as uow:
                    user = await self.user_service.find_by_id(uow, user_id)
            except DomainError:
                raise
            except Exception as e:
                raise InternalServerError(f"refresh_tokens failed: {e}") from e

            pair = self.jwt_service.issue_token_pair(str(user.id))
            logfire.info("Tokens refreshed", user_id=str(user.id))
            return pair
