"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from qq.domain.model import AuthIdentity, OtpCode, User
from qq.domain.value import (
    AuthIdentityId,
    AuthProvider,
    OtpCodeId,
    PrivacyLevel,
    UserId,
)
from qq.domain.value.types import Username


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_auth_identity(row: Dict[str, Any]) -> AuthIdentity:
    """Convert database row to AuthIdentity domain model."""
    return AuthIdentity(
        id=AuthIdentityId(_uuid(row["id"])),
        email=row["email"],
        provider=AuthProvider(row["provider"]),
        created_at=row["created_at"],
    )


def auth_identity_to_dict(identity: AuthIdentity) -> Dict[str, Any]:
    """Convert AuthIdentity domain model to database dict."""
    return {
        "id": identity.id,
        "email": identity.email,
        "provider": identity.provider.value,
        "created_at": identity.created_at,
    }


def row_to_otp_code(row: Dict[str, Any]) -> OtpCode:
    """Convert database row to OtpCode domain model."""
    return OtpCode(
        id=OtpCodeId(_uuid(row["id"])),
        auth_id=AuthIdentityId(_uuid(row["auth_id"])),
        code_hash=row["code_hash"],
        created_at=row["created_at"],
    )


def otp_code_to_dict(otp_code: OtpCode) -> Dict[str, Any]:
    """Convert OtpCode domain model to database dict."""
    return otp_code.model_dump()


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        auth_id=AuthIdentityId(_uuid(row["auth_id"])),
        username=Username(row["username"]),
        display_name=row.get("display_name"),
        privacy_level=PrivacyLevel(row["privacy_level"]),
        avatar_key=row.get("avatar_key"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": user.id,
        "auth_id": user.auth_id,
        "username": user.username.root,
        "display_name": user.display_name,
        "privacy_level": user.privacy_level.value,
        "avatar_key": user.avatar_key,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }
