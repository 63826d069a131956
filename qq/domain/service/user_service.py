"""User domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from qq.domain.error import NotFoundError
from qq.domain.model import User
from qq.domain.repository import UnitOfWork
from qq.domain.value import AuthIdentityId, PrivacyLevel, UserId
from qq.domain.value.types import Username

from .base import Service

DEFAULT_USERNAME_PREFIX = "user_"


def default_username(auth_id: AuthIdentityId) -> Username:
    """Derive a placeholder username from the identity ID.

    Uses the first 6 bytes of the UUID; the store's unique constraint on
    username is the real guard against collisions.
    """
    return Username(DEFAULT_USERNAME_PREFIX + auth_id.bytes[:6].hex())


class UserService(Service):
    """Domain service for user profile operations."""

    async def find_by_email(self, uow: UnitOfWork, email: str) -> User:
        """Get user by the email of their identity.

        Args:
            uow: Active unit of work
            email: Normalised login email

        Returns:
            User entity

        Raises:
            NotFoundError: If no user is linked to the email
        """
        with logfire.span("user_service.find_by_email", email=email):
            user = await uow.users.find_by_email(email)
            if not user:
                logfire.info("User not found", email=email)
                raise NotFoundError("User", email)
            logfire.info("User found", email=email, user_id=str(user.id))
            return user

    async def find_by_id(self, uow: UnitOfWork, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            uow: Active unit of work
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.find_by_id", user_id=str(user_id)):
            user = await uow.users.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            logfire.info("User found", user_id=str(user_id))
            return user

    async def create_default(self, uow: UnitOfWork, auth_id: AuthIdentityId) -> User:
        """Create the profile for a freshly created identity.

        Args:
            uow: Active unit of work
            auth_id: Identity the profile belongs to

        Returns:
            Created user

        Raises:
            UniqueViolationError: If the identity already has a user or the
                derived username is taken
        """
        with logfire.span("user_service.create_default", auth_id=str(auth_id)):
            now = datetime.now(timezone.utc)
            user = User(
                id=UserId(uuid4()),
                auth_id=auth_id,
                username=default_username(auth_id),
                display_name=None,
                privacy_level=PrivacyLevel.PUBLIC,
                avatar_key=None,
                created_at=now,
                updated_at=now,
            )
            saved = await uow.users.create(user)
            logfire.info(
                "User created",
                user_id=str(saved.id),
                auth_id=str(auth_id),
                username=saved.username.root,
            )
            return saved
