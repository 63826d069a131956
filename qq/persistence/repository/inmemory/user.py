"""In-memory user repository for testing."""

from typing import Optional

from qq.domain.model import User
from qq.domain.repository import UserRepository
from qq.domain.value import AuthIdentityId, UserId

from .database import InMemoryTables


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, tables: InMemoryTables) -> None:
        self._tables = tables
        self.inserted: list[User] = []

    async def create(self, user: User) -> User:
        """Insert a user, enforcing auth_id and username uniqueness."""
        self._tables.check_user(user)
        self._tables.users[user.id] = user
        self.inserted.append(user)
        return user

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._tables.users.get(user_id)

    async def find_by_auth_id(self, auth_id: AuthIdentityId) -> Optional[User]:
        for user in self._tables.users.values():
            if user.auth_id == auth_id:
                return user
        return None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by the email of their identity."""
        for identity in self._tables.auth_identities.values():
            if identity.email == email:
                return await self.find_by_auth_id(identity.id)
        return None
