"""PostgreSQL implementation of OtpCode repository."""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from qq.domain.model import OtpCode
from qq.domain.repository import OtpCodeRepository
from qq.domain.value import AuthIdentityId
from qq.persistence.error import translate_db_error
from qq.persistence.mappers import otp_code_to_dict, row_to_otp_code
from qq.persistence.tables import auth_identity_table, otp_code_table


class PostgresOtpCodeRepository(OtpCodeRepository):
    """PostgreSQL implementation of OtpCodeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, otp_code: OtpCode) -> OtpCode:
        """Insert a new code hash.

        Raises:
            ValidationError: If the owning identity does not exist
        """
        stmt = otp_code_table.insert().values(**otp_code_to_dict(otp_code))
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            raise translate_db_error(e) from e
        return otp_code

    async def find_by_hash_and_email(
        self, code_hash: str, email: str
    ) -> Optional[OtpCode]:
        stmt = (
            select(otp_code_table)
            .join(
                auth_identity_table,
                auth_identity_table.c.id == otp_code_table.c.auth_id,
            )
            .where(
                otp_code_table.c.code_hash == code_hash,
                auth_identity_table.c.email == email,
            )
            .order_by(otp_code_table.c.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_otp_code(dict(row)) if row else None

    async def list_by_auth_id(self, auth_id: AuthIdentityId) -> list[OtpCode]:
        stmt = (
            select(otp_code_table)
            .where(otp_code_table.c.auth_id == auth_id)
            .order_by(otp_code_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_otp_code(dict(row)) for row in result.mappings().all()]

    async def delete_by_auth_id(self, auth_id: AuthIdentityId) -> int:
        stmt = delete(otp_code_table).where(otp_code_table.c.auth_id == auth_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_by_email(self, email: str) -> int:
        """Delete all codes for the identity with the given email.

        Uses a subquery so an unknown email deletes nothing.
        """
        owner_ids = select(auth_identity_table.c.id).where(
            auth_identity_table.c.email == email
        )
        stmt = delete(otp_code_table).where(otp_code_table.c.auth_id.in_(owner_ids))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
