"""Auth identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from qq.domain.model.auth_identity import AuthIdentity
from qq.domain.value import AuthIdentityId


class AuthIdentityRepository(ABC):
    """Repository for AuthIdentity entity.

    Implementations must enforce uniqueness of ``email`` and raise
    ``UniqueViolationError`` on conflict.
    """

    @abstractmethod
    async def create(self, identity: AuthIdentity) -> AuthIdentity:
        """Insert a new identity.

        Args:
            identity: The identity to insert

        Returns:
            The inserted identity

        Raises:
            UniqueViolationError: If the email is already registered
        """
        pass

    @abstractmethod
    async def find_by_id(self, auth_id: AuthIdentityId) -> Optional[AuthIdentity]:
        """Find an identity by ID.

        Args:
            auth_id: The identity's unique identifier

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[AuthIdentity]:
        """Find an identity by normalised email.

        Args:
            email: Login email

        Returns:
            The identity if found, None otherwise
        """
        pass
