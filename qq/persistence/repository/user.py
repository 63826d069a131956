"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from qq.domain.model import User
from qq.domain.repository import UserRepository
from qq.domain.value import AuthIdentityId, UserId
from qq.persistence.error import translate_db_error
from qq.persistence.mappers import row_to_user, user_to_dict
from qq.persistence.tables import auth_identity_table, user_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: User to insert

        Returns:
            Inserted user

        Raises:
            UniqueViolationError: If the identity already has a user or the
                username is taken
        """
        stmt = user_table.insert().values(**user_to_dict(user))
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            raise translate_db_error(e) from e
        return user

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(user_table).where(user_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_auth_id(self, auth_id: AuthIdentityId) -> Optional[User]:
        stmt = select(user_table).where(user_table.c.auth_id == auth_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by the email of their identity.

        This joins the auth_identity and user tables.

        Args:
            email: Normalised login email

        Returns:
            User if found, None otherwise
        """
        stmt = (
            select(user_table)
            .select_from(
                user_table.join(
                    auth_identity_table,
                    user_table.c.auth_id == auth_identity_table.c.id,
                )
            )
            .where(auth_identity_table.c.email == email)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None
