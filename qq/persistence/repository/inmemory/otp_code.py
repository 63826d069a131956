"""In-memory OTP code repository for testing."""

from typing import Optional

from qq.domain.model import OtpCode
from qq.domain.repository import OtpCodeRepository
from qq.domain.value import AuthIdentityId, OtpCodeId

from .database import InMemoryTables


class InMemoryOtpCodeRepository(OtpCodeRepository):
    """In-memory implementation of OtpCodeRepository for testing."""

    def __init__(self, tables: InMemoryTables) -> None:
        self._tables = tables
        self.inserted: list[OtpCode] = []
        self.deleted_ids: set[OtpCodeId] = set()

    async def create(self, otp_code: OtpCode) -> OtpCode:
        self._tables.check_otp_code(otp_code)
        self._tables.otp_codes[otp_code.id] = otp_code
        self.inserted.append(otp_code)
        return otp_code

    async def find_by_hash_and_email(
        self, code_hash: str, email: str
    ) -> Optional[OtpCode]:
        """Most recent code with the hash owned by the email's identity."""
        owner_ids = {
            i.id for i in self._tables.auth_identities.values() if i.email == email
        }
        matches = [
            c
            for c in self._tables.otp_codes.values()
            if c.code_hash == code_hash and c.auth_id in owner_ids
        ]
        if not matches:
            return None
        return max(matches, key=lambda c: c.created_at)

    async def list_by_auth_id(self, auth_id: AuthIdentityId) -> list[OtpCode]:
        codes = [c for c in self._tables.otp_codes.values() if c.auth_id == auth_id]
        return sorted(codes, key=lambda c: c.created_at)

    async def delete_by_auth_id(self, auth_id: AuthIdentityId) -> int:
        doomed = [c.id for c in self._tables.otp_codes.values() if c.auth_id == auth_id]
        for otp_code_id in doomed:
            del self._tables.otp_codes[otp_code_id]
            self._forget(otp_code_id)
        return len(doomed)

    async def delete_by_email(self, email: str) -> int:
        for identity in self._tables.auth_identities.values():
            if identity.email == email:
                return await self.delete_by_auth_id(identity.id)
        return 0

    def _forget(self, otp_code_id: OtpCodeId) -> None:
        # A row inserted and deleted in the same transaction never reaches
        # the committed state.
        before = len(self.inserted)
        self.inserted = [c for c in self.inserted if c.id != otp_code_id]
        if len(self.inserted) == before:
            self.deleted_ids.add(otp_code_id)
