"""Authentication domain service.

Owns the AuthIdentity lifecycle and OTP issuance/verification. Codes are
hashed before they touch the store, so a database read alone never yields a
usable secret. Verification looks the hash up among the codes of the
identity with the given email, so equal codes held by two identities never
interfere.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire

from qq.config import OtpSettings
from qq.domain.error import InvalidOTPError
from qq.domain.model import AuthIdentity, OtpCode
from qq.domain.repository import UnitOfWork
from qq.domain.value import (
    AuthIdentityId,
    AuthProvider,
    OtpCodeId,
    VerifiedIdentity,
)
from qq.util.otp import RandomSource, generate_code, hash_code

from .base import Service


class AuthService(Service):
    """Domain service for email OTP authentication."""

    def __init__(self, random_source: RandomSource, otp_settings: OtpSettings) -> None:
        """Initialize auth service.

        Args:
            random_source: Source of randomness for OTP codes
            otp_settings: OTP length, alphabet and TTL
        """
        self.random_source = random_source
        self.otp_settings = otp_settings

    async def create_identity(self, uow: UnitOfWork, email: str) -> AuthIdentityId:
        """Create a new email OTP identity.

        Args:
            uow: Active unit of work
            email: Normalised login email

        Returns:
            ID of the new identity

        Raises:
            UniqueViolationError: If the email is already registered
        """
        with logfire.span("auth_service.create_identity", email=email):
            identity = AuthIdentity(
                id=AuthIdentityId(uuid4()),
                email=email,
                provider=AuthProvider.EMAIL_OTP,
                created_at=datetime.now(timezone.utc),
            )
            saved = await uow.auth_identities.create(identity)
            logfire.info("Identity created", auth_id=str(saved.id))
            return saved.id

    async def generate_and_store_otp(
        self, uow: UnitOfWork, auth_id: AuthIdentityId
    ) -> str:
        """Generate a code and persist its hash.

        The returned plaintext is the only copy; it is not logged or stored.

        Args:
            uow: Active unit of work
            auth_id: Identity the code belongs to

        Returns:
            Plaintext code
        """
        with logfire.span("auth_service.generate_and_store_otp", auth_id=str(auth_id)):
            code = generate_code(
                self.random_source,
                self.otp_settings.code_length,
                self.otp_settings.alphabet,
            )
            await uow.otp_codes.create(
                OtpCode(
                    id=OtpCodeId(uuid4()),
                    auth_id=auth_id,
                    code_hash=hash_code(code),
                    created_at=datetime.now(timezone.utc),
                )
            )
            logfire.info("OTP stored", auth_id=str(auth_id))
            return code

    async def invalidate_pending_codes(
        self, uow: UnitOfWork, auth_id: AuthIdentityId
    ) -> int:
        """Delete all stored codes for an identity.

        Args:
            uow: Active unit of work
            auth_id: Identity whose codes are deleted

        Returns:
            Number of deleted codes
        """
        with logfire.span(
            "auth_service.invalidate_pending_codes", auth_id=str(auth_id)
        ):
            deleted = await uow.otp_codes.delete_by_auth_id(auth_id)
            logfire.info("Pending OTPs invalidated", auth_id=str(auth_id), count=deleted)
            return deleted

    async def invalidate_pending_codes_by_email(
        self, uow: UnitOfWork, email: str
    ) -> int:
        """Delete all stored codes for the identity with the given email.

        Args:
            uow: Active unit of work
            email: Normalised login email

        Returns:
            Number of deleted codes
        """
        with logfire.span("auth_service.invalidate_pending_codes_by_email", email=email):
            deleted = await uow.otp_codes.delete_by_email(email)
            logfire.info("Pending OTPs invalidated", email=email, count=deleted)
            return deleted

    async def verify_code(
        self, uow: UnitOfWork, email: str, code: str
    ) -> VerifiedIdentity:
        """Verify a plaintext code against the stored hashes.

        Does not delete anything; callers invalidate after a successful
        verification.

        Args:
            uow: Active unit of work
            email: Normalised login email the code was sent to
            code: Plaintext code supplied by the user

        Returns:
            The identity and user the code belongs to

        Raises:
            InvalidOTPError: If no code matches, the code belongs to another
                email, or the code has expired
        """
        with logfire.span("auth_service.verify_code", email=email):
            otp_code = await uow.otp_codes.find_by_hash_and_email(
                hash_code(code), email
            )
            if not otp_code:
                logfire.warn("OTP verification failed - no match", email=email)
                raise InvalidOTPError()

            identity = await uow.auth_identities.find_by_id(otp_code.auth_id)
            if not identity or identity.email != email:
                logfire.warn("OTP verification failed - email mismatch", email=email)
                raise InvalidOTPError()

            if self._is_expired(otp_code):
                logfire.warn("OTP verification failed - expired", email=email)
                raise InvalidOTPError("OTP code has expired")

            user = await uow.users.find_by_auth_id(identity.id)
            if not user:
                logfire.error(
                    "OTP verified but identity has no user", auth_id=str(identity.id)
                )
                raise InvalidOTPError()

            logfire.info("OTP verified", auth_id=str(identity.id), user_id=str(user.id))
            return VerifiedIdentity(auth_id=identity.id, user_id=user.id)

    def _is_expired(self, otp_code: OtpCode) -> bool:
        age = datetime.now(timezone.utc) - otp_code.created_at
        return age > timedelta(minutes=self.otp_settings.ttl_minutes)
