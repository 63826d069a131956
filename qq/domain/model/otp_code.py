"""One-time passcode entity."""

from datetime import datetime, timezone

from pydantic import Field

from qq.domain.model.common import DomainModel
from qq.domain.value import AuthIdentityId, OtpCodeId


class OtpCode(DomainModel):
    """Stored OTP - only the hash of the code, never the plaintext."""

    id: OtpCodeId
    auth_id: AuthIdentityId
    code_hash: str  # Hex SHA-256 of the plaintext code
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
