"""PostgreSQL implementation of AuthIdentity repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from qq.domain.model import AuthIdentity
from qq.domain.repository import AuthIdentityRepository
from qq.domain.value import AuthIdentityId
from qq.persistence.error import translate_db_error
from qq.persistence.mappers import auth_identity_to_dict, row_to_auth_identity
from qq.persistence.tables import auth_identity_table


class PostgresAuthIdentityRepository(AuthIdentityRepository):
    """PostgreSQL implementation of AuthIdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, identity: AuthIdentity) -> AuthIdentity:
        """Insert a new identity.

        Args:
            identity: The identity to insert

        Returns:
            The inserted identity

        Raises:
            UniqueViolationError: If the email is already registered
        """
        stmt = auth_identity_table.insert().values(**auth_identity_to_dict(identity))
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            raise translate_db_error(e) from e
        return identity

    async def find_by_id(self, auth_id: AuthIdentityId) -> Optional[AuthIdentity]:
        stmt = select(auth_identity_table).where(auth_identity_table.c.id == auth_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_auth_identity(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[AuthIdentity]:
        stmt = select(auth_identity_table).where(auth_identity_table.c.email == email)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_auth_identity(dict(row)) if row else None
