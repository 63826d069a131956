"""Authentication identity entity.

The account record keyed by login email, independent of profile data.
"""

from datetime import datetime, timezone

from pydantic import Field

from qq.domain.model.common import DomainModel
from qq.domain.value import AuthIdentityId, AuthProvider


class AuthIdentity(DomainModel):
    """Login identity - one per distinct email.

    Created once on first sign-up and never updated afterwards.
    """

    id: AuthIdentityId
    email: str  # Normalised, globally unique
    provider: AuthProvider = AuthProvider.EMAIL_OTP
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
