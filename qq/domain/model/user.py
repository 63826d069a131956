"""User aggregate root.

Each user profile is linked 1:1 to an authentication identity.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from qq.domain.model.common import DomainModel
from qq.domain.value import AuthIdentityId, PrivacyLevel, UserId
from qq.domain.value.types import Username


class User(DomainModel):
    """User profile."""

    id: UserId
    auth_id: AuthIdentityId
    username: Username
    display_name: Optional[str] = None
    privacy_level: PrivacyLevel = PrivacyLevel.PUBLIC
    avatar_key: Optional[str] = None  # Object storage key, managed elsewhere
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
