"""Domain value objects."""

from qq.domain.value.identifiers import AuthIdentityId, OtpCodeId, UserId
from qq.domain.value.types import (
    AuthProvider,
    Email,
    PrivacyLevel,
    Username,
    VerifiedIdentity,
    normalize_email,
)

__all__ = [
    # Identifiers
    "AuthIdentityId",
    "OtpCodeId",
    "UserId",
    # Types
    "AuthProvider",
    "Email",
    "PrivacyLevel",
    "Username",
    "VerifiedIdentity",
    "normalize_email",
]
