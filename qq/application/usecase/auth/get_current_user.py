"""Get current user use case."""

from datetime import datetime

from pydantic import BaseModel

from qq.application.usecase.auth.refresh_tokens import parse_user_id
from qq.application.usecase.base import BaseUseCase
from qq.domain.error import (
    DomainError,
    InternalServerError,
    NotFoundError,
    UnauthorizedError,
)
from qq.domain.repository import TransactionManager
from qq.domain.service import JWTService, UserService
from qq.domain.value import PrivacyLevel
from qq.util.jwt import JWTError


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # Access token


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user_id: str
    email: str
    username: str
    display_name: str | None
    privacy_level: PrivacyLevel
    avatar_key: str | None
    created_at: datetime


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for getting current authenticated user."""

    def __init__(
        self,
        transaction_manager: TransactionManager,
        jwt_service: JWTService,
        user_service: UserService,
    ) -> None:
        """Initialize get current user use case.

        Args:
            transaction_manager: Opens the read-only unit of work
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.transaction_manager = transaction_manager
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Args:
            request: Request with access token

        Returns:
            Profile of the token's user

        Raises:
            UnauthorizedError: If token is invalid or expired
            ValidationError: If the token's user id is malformed
            NotFoundError: If user not found
        """
        try:
            claims = self.jwt_service.validate(request.token)
        except JWTError as e:
            raise UnauthorizedError(f"Invalid access token: {e}") from e

        user_id = parse_user_id(claims.user_id)

        try:
            async with self.transaction_manager.begin() as uow:
                user = await self.user_service.find_by_id(uow, user_id)
                identity = await uow.auth_identities.find_by_id(user.auth_id)
                if not identity:
                    raise NotFoundError("AuthIdentity", str(user.auth_id))
        except DomainError:
            raise
        except Exception as e:
            raise InternalServerError(f"get_current_user failed: {e}") from e

        return GetCurrentUserResponse(
            user_id=str(user.id),
            email=identity.email,
            username=user.username.root,
            display_name=user.display_name,
            privacy_level=user.privacy_level,
            avatar_key=user.avatar_key,
            created_at=user.created_at,
        )
