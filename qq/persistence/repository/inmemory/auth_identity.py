"""In-memory auth identity repository for testing."""

from typing import Optional

from qq.domain.model import AuthIdentity
from qq.domain.repository import AuthIdentityRepository
from qq.domain.value import AuthIdentityId

from .database import InMemoryTables


class InMemoryAuthIdentityRepository(AuthIdentityRepository):
    """In-memory implementation of AuthIdentityRepository for testing."""

    def __init__(self, tables: InMemoryTables) -> None:
        self._tables = tables
        self.inserted: list[AuthIdentity] = []

    async def create(self, identity: AuthIdentity) -> AuthIdentity:
        """Insert an identity, enforcing email uniqueness within the transaction."""
        self._tables.check_identity_unique(identity)
        self._tables.auth_identities[identity.id] = identity
        self.inserted.append(identity)
        return identity

    async def find_by_id(self, auth_id: AuthIdentityId) -> Optional[AuthIdentity]:
        return self._tables.auth_identities.get(auth_id)

    async def find_by_email(self, email: str) -> Optional[AuthIdentity]:
        for identity in self._tables.auth_identities.values():
            if identity.email == email:
                return identity
        return None
