"""PostgreSQL repository implementations."""

from qq.persistence.repository.auth_identity import PostgresAuthIdentityRepository
from qq.persistence.repository.otp_code import PostgresOtpCodeRepository
from qq.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresAuthIdentityRepository",
    "PostgresOtpCodeRepository",
    "PostgresUserRepository",
]
