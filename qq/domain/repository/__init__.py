"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from qq.domain.repository.auth_identity import AuthIdentityRepository
from qq.domain.repository.otp_code import OtpCodeRepository
from qq.domain.repository.unit_of_work import TransactionManager, UnitOfWork
from qq.domain.repository.user import UserRepository

__all__ = [
    "AuthIdentityRepository",
    "OtpCodeRepository",
    "TransactionManager",
    "UnitOfWork",
    "UserRepository",
]
