"""Domain model entities."""

from qq.domain.model.auth_identity import AuthIdentity
from qq.domain.model.otp_code import OtpCode
from qq.domain.model.user import User

__all__ = [
    "AuthIdentity",
    "OtpCode",
    "User",
]
