"""Unit of work interface.

A unit of work is one database transaction together with the repositories
bound to it. Use cases open one, pass it explicitly to every service call, and
either commit it once or let it roll back on exit.

    async with transaction_manager.begin() as uow:
        identity_id = await auth_service.create_identity(uow, email)
        ...
        await uow.commit()
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional, Self

from qq.domain.error import InternalServerError
from qq.domain.repository.auth_identity import AuthIdentityRepository
from qq.domain.repository.otp_code import OtpCodeRepository
from qq.domain.repository.user import UserRepository


class UnitOfWork(ABC):
    """Transaction scope exposing transaction-bound repositories.

    Rollback is idempotent: it is a no-op after a commit or a previous
    rollback. Leaving the ``async with`` block without committing rolls back.
    """

    auth_identities: AuthIdentityRepository
    otp_codes: OtpCodeRepository
    users: UserRepository

    def __init__(self) -> None:
        self._finished = False

    async def __aenter__(self) -> Self:
        await self._begin()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            await self.rollback()
        finally:
            await self._close()

    @property
    def is_finished(self) -> bool:
        """Whether the transaction was committed or rolled back."""
        return self._finished

    async def commit(self) -> None:
        """Commit the transaction.

        Raises:
            InternalServerError: If the unit of work is already finished
        """
        if self._finished:
            raise InternalServerError("Transaction already finished")
        await self._commit()
        self._finished = True

    async def rollback(self) -> None:
        """Roll back the transaction unless it is already finished."""
        if self._finished:
            return
        self._finished = True
        await self._rollback()

    @abstractmethod
    async def _begin(self) -> None:
        pass

    @abstractmethod
    async def _commit(self) -> None:
        pass

    @abstractmethod
    async def _rollback(self) -> None:
        pass

    async def _close(self) -> None:
        """Release resources held by the transaction."""
        pass


class TransactionManager(ABC):
    """Factory for units of work."""

    @abstractmethod
    def begin(self) -> UnitOfWork:
        """Create a new, not yet started, unit of work."""
        pass
