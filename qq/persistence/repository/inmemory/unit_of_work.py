"""In-memory unit of work for testing."""

from typing import Optional

from qq.domain.error import InternalServerError
from qq.domain.repository import TransactionManager, UnitOfWork

from .auth_identity import InMemoryAuthIdentityRepository
from .database import InMemoryDatabase, InMemoryTables
from .otp_code import InMemoryOtpCodeRepository
from .user import InMemoryUserRepository


class InMemoryUnitOfWork(UnitOfWork):
    """Snapshot transaction over an ``InMemoryDatabase``.

    Writes are invisible to other units of work until commit; rollback simply
    drops the working copy.
    """

    auth_identities: InMemoryAuthIdentityRepository
    otp_codes: InMemoryOtpCodeRepository
    users: InMemoryUserRepository

    def __init__(self, database: InMemoryDatabase) -> None:
        super().__init__()
        self._database = database
        self._working: Optional[InMemoryTables] = None

    async def _begin(self) -> None:
        self._working = self._database.snapshot()
        self.auth_identities = InMemoryAuthIdentityRepository(self._working)
        self.otp_codes = InMemoryOtpCodeRepository(self._working)
        self.users = InMemoryUserRepository(self._working)

    async def _commit(self) -> None:
        if self._working is None:
            raise InternalServerError("Transaction not started")
        self._database.apply(
            inserted_identities=self.auth_identities.inserted,
            inserted_otp_codes=self.otp_codes.inserted,
            inserted_users=self.users.inserted,
            deleted_otp_code_ids=self.otp_codes.deleted_ids,
        )

    async def _rollback(self) -> None:
        self._working = None


class InMemoryTransactionManager(TransactionManager):
    """Opens in-memory units of work over one shared database."""

    def __init__(self, database: Optional[InMemoryDatabase] = None) -> None:
        self.database = database or InMemoryDatabase()

    def begin(self) -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(self.database)
