"""In-memory repository implementations for testing."""

from .auth_identity import InMemoryAuthIdentityRepository
from .database import InMemoryDatabase, InMemoryTables
from .otp_code import InMemoryOtpCodeRepository
from .unit_of_work import InMemoryTransactionManager, InMemoryUnitOfWork
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAuthIdentityRepository",
    "InMemoryDatabase",
    "InMemoryOtpCodeRepository",
    "InMemoryTables",
    "InMemoryTransactionManager",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
]
