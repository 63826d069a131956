"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from qq.domain.model.user import User
from qq.domain.value import AuthIdentityId, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Implementations must enforce uniqueness of ``auth_id`` and ``username``.
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: The user to insert

        Returns:
            The inserted user

        Raises:
            UniqueViolationError: If auth_id or username is taken
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_auth_id(self, auth_id: AuthIdentityId) -> Optional[User]:
        """Find the user linked to an identity.

        Args:
            auth_id: The identity's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by the email of their linked identity.

        Args:
            email: Normalised login email

        Returns:
            The user if found, None otherwise
        """
        pass
