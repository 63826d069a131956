"""Unit tests for the in-memory unit of work."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from qq.domain.error import InternalServerError, UniqueViolationError, ValidationError
from qq.domain.model import AuthIdentity, OtpCode
from qq.domain.value import AuthIdentityId, OtpCodeId
from qq.persistence.repository.inmemory import InMemoryTransactionManager


def _identity(email: str = "alice@example.com") -> AuthIdentity:
    return AuthIdentity(id=AuthIdentityId(uuid4()), email=email)


def _otp(auth_id: AuthIdentityId, code_hash: str = "h") -> OtpCode:
    return OtpCode(
        id=OtpCodeId(uuid4()),
        auth_id=auth_id,
        code_hash=code_hash,
        created_at=datetime.now(timezone.utc),
    )


@pytest.fixture
def tm():
    return InMemoryTransactionManager()


class TestCommitAndRollback:
    """Visibility of writes across units of work."""

    @pytest.mark.asyncio
    async def test_committed_writes_are_visible(self, tm):
        identity = _identity()
        async with tm.begin() as uow:
            await uow.auth_identities.create(identity)
            await uow.commit()

        async with tm.begin() as uow:
            assert await uow.auth_identities.find_by_email(identity.email) == identity

    @pytest.mark.asyncio
    async def test_uncommitted_writes_are_discarded(self, tm):
        async with tm.begin() as uow:
            await uow.auth_identities.create(_identity())

        async with tm.begin() as uow:
            assert await uow.auth_identities.find_by_email("alice@example.com") is None
        assert tm.database.commit_count == 0

    @pytest.mark.asyncio
    async def test_exception_rolls_back(self, tm):
        with pytest.raises(RuntimeError):
            async with tm.begin() as uow:
                await uow.auth_identities.create(_identity())
                raise RuntimeError("boom")

        assert tm.database.tables.auth_identities == {}

    @pytest.mark.asyncio
    async def test_writes_invisible_to_concurrent_transaction(self, tm):
        async with tm.begin() as first, tm.begin() as second:
            await first.auth_identities.create(_identity())

            assert await second.auth_identities.find_by_email("alice@example.com") is None

    @pytest.mark.asyncio
    async def test_rollback_is_idempotent_and_noop_after_commit(self, tm):
        async with tm.begin() as uow:
            await uow.auth_identities.create(_identity())
            await uow.commit()
            await uow.rollback()
            await uow.rollback()

        assert len(tm.database.tables.auth_identities) == 1

    @pytest.mark.asyncio
    async def test_commit_twice_fails(self, tm):
        async with tm.begin() as uow:
            await uow.commit()
            with pytest.raises(InternalServerError):
                await uow.commit()

    @pytest.mark.asyncio
    async def test_commit_without_begin_fails(self, tm):
        uow = tm.begin()

        with pytest.raises(InternalServerError, match="not started"):
            await uow.commit()

    @pytest.mark.asyncio
    async def test_injected_commit_failure(self, tm):
        tm.database.fail_on_commit = InternalServerError("disk full")

        async with tm.begin() as uow:
            await uow.auth_identities.create(_identity())
            with pytest.raises(InternalServerError):
                await uow.commit()

        assert tm.database.tables.auth_identities == {}


class TestConstraints:
    """Unique and foreign key enforcement."""

    @pytest.mark.asyncio
    async def test_duplicate_email_in_same_transaction(self, tm):
        async with tm.begin() as uow:
            await uow.auth_identities.create(_identity())
            with pytest.raises(UniqueViolationError):
                await uow.auth_identities.create(_identity())

    @pytest.mark.asyncio
    async def test_lost_race_surfaces_at_commit(self, tm):
        """Two transactions inserting the same email: the later commit loses."""
        async with tm.begin() as first, tm.begin() as second:
            await first.auth_identities.create(_identity())
            await second.auth_identities.create(_identity())

            await first.commit()
            with pytest.raises(UniqueViolationError):
                await second.commit()

        assert len(tm.database.tables.auth_identities) == 1

    @pytest.mark.asyncio
    async def test_otp_requires_identity(self, tm):
        async with tm.begin() as uow:
            with pytest.raises(ValidationError):
                await uow.otp_codes.create(_otp(AuthIdentityId(uuid4())))


class TestOtpCodes:
    """In-memory OTP repository behaviour."""

    @pytest.mark.asyncio
    async def test_delete_of_committed_codes_is_published(self, tm):
        identity = _identity()
        async with tm.begin() as uow:
            await uow.auth_identities.create(identity)
            await uow.otp_codes.create(_otp(identity.id))
            await uow.otp_codes.create(_otp(identity.id))
            await uow.commit()

        async with tm.begin() as uow:
            assert await uow.otp_codes.delete_by_auth_id(identity.id) == 2
            await uow.commit()

        assert tm.database.tables.otp_codes == {}

    @pytest.mark.asyncio
    async def test_insert_then_delete_in_one_transaction(self, tm):
        identity = _identity()
        async with tm.begin() as uow:
            await uow.auth_identities.create(identity)
            await uow.otp_codes.create(_otp(identity.id))
            await uow.otp_codes.delete_by_email(identity.email)
            await uow.otp_codes.create(_otp(identity.id, code_hash="fresh"))
            await uow.commit()

        codes = list(tm.database.tables.otp_codes.values())
        assert [c.code_hash for c in codes] == ["fresh"]

    @pytest.mark.asyncio
    async def test_list_by_auth_id(self, tm):
        identity = _identity()
        async with tm.begin() as uow:
            await uow.auth_identities.create(identity)
            await uow.otp_codes.create(_otp(identity.id, code_hash="a"))
            await uow.otp_codes.create(_otp(identity.id, code_hash="b"))

            codes = await uow.otp_codes.list_by_auth_id(identity.id)

        assert [c.code_hash for c in codes] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_find_by_hash_is_scoped_to_email(self, tm):
        alice = _identity()
        bob = _identity("bob@example.com")
        async with tm.begin() as uow:
            await uow.auth_identities.create(alice)
            await uow.auth_identities.create(bob)
            await uow.otp_codes.create(_otp(alice.id, code_hash="same"))
            await uow.otp_codes.create(_otp(bob.id, code_hash="same"))

            found = await uow.otp_codes.find_by_hash_and_email("same", alice.email)
            missing = await uow.otp_codes.find_by_hash_and_email(
                "same", "carol@example.com"
            )

        assert found.auth_id == alice.id
        assert missing is None
