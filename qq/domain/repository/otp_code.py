"""OTP code repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from qq.domain.model.otp_code import OtpCode
from qq.domain.value import AuthIdentityId


class OtpCodeRepository(ABC):
    """Repository for stored one-time passcode hashes."""

    @abstractmethod
    async def create(self, otp_code: OtpCode) -> OtpCode:
        """Insert a new code hash.

        Args:
            otp_code: The code to insert

        Returns:
            The inserted code
        """
        pass

    @abstractmethod
    async def find_by_hash_and_email(
        self, code_hash: str, email: str
    ) -> Optional[OtpCode]:
        """Find the most recent code with the given hash owned by the email.

        Codes of other identities never match, even when their hash is equal.

        Args:
            code_hash: Hex SHA-256 of the plaintext code
            email: Normalised login email of the owning identity

        Returns:
            The code if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_auth_id(self, auth_id: AuthIdentityId) -> list[OtpCode]:
        """List all stored codes for an identity.

        Args:
            auth_id: Owning identity

        Returns:
            Codes ordered by creation time (may be empty)
        """
        pass

    @abstractmethod
    async def delete_by_auth_id(self, auth_id: AuthIdentityId) -> int:
        """Delete all codes for an identity.

        Args:
            auth_id: Owning identity

        Returns:
            Number of deleted codes
        """
        pass

    @abstractmethod
    async def delete_by_email(self, email: str) -> int:
        """Delete all codes for the identity with the given email.

        Args:
            email: Normalised login email

        Returns:
            Number of deleted codes
        """
        pass
