"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum

from pydantic import field_validator

from qq.domain.value.common import RootValueObject, ValueObject
from qq.domain.value.identifiers import AuthIdentityId, UserId

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AuthProvider(str, Enum):
    """Supported authentication providers."""

    EMAIL_OTP = "email_otp"


class PrivacyLevel(str, Enum):
    """Profile visibility."""

    PUBLIC = "public"
    PRIVATE = "private"


def normalize_email(email: str) -> str:
    """Trim and lower-case an email address."""
    return email.strip().lower()


class Email(RootValueObject[str]):
    """Login email address, normalised to lower case."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalise and check basic address shape."""
        v = normalize_email(v)
        if len(v) > 255 or not _EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v


class Username(RootValueObject[str]):
    """Public username."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not re.match(r"^[a-z0-9_]{3,32}$", v):
            raise ValueError(
                "Username must be 3-32 characters: lowercase letters, digits, underscore"
            )
        return v


class VerifiedIdentity(ValueObject):
    """Result of a successful OTP verification."""

    auth_id: AuthIdentityId
    user_id: UserId
