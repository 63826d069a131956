"""SQLAlchemy-backed unit of work."""

from typing import Optional

import logfire
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from qq.domain.error import InternalServerError
from qq.domain.repository import TransactionManager, UnitOfWork
from qq.persistence.error import translate_db_error
from qq.persistence.repository import (
    PostgresAuthIdentityRepository,
    PostgresOtpCodeRepository,
    PostgresUserRepository,
)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """One database transaction on its own session.

    Repositories are bound to the session when the transaction begins, so
    every read and write inside the ``async with`` block sees the same
    snapshot.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__()
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    async def _begin(self) -> None:
        self._session = self._session_factory()
        try:
            await self._session.begin()
        except SQLAlchemyError as e:
            await self._session.close()
            raise translate_db_error(e) from e
        self.auth_identities = PostgresAuthIdentityRepository(self._session)
        self.otp_codes = PostgresOtpCodeRepository(self._session)
        self.users = PostgresUserRepository(self._session)

    async def _commit(self) -> None:
        if self._session is None:
            raise InternalServerError("Transaction not started")
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            logfire.error("Transaction commit failed", error=str(e))
            raise translate_db_error(e) from e

    async def _rollback(self) -> None:
        if self._session is not None:
            await self._session.rollback()

    async def _close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None


class SqlAlchemyTransactionManager(TransactionManager):
    """Opens units of work on sessions from the shared factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    def begin(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self.session_factory)
