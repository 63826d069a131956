"""Integration tests for the PostgreSQL repositories and unit of work.

Require a migrated database (``python scripts/run_migrations.py``).
"""

from uuid import uuid4

from dishka import AsyncContainer
import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from qq.domain.error import UniqueViolationError, ValidationError
from qq.domain.model import AuthIdentity, OtpCode, User
from qq.domain.repository import TransactionManager
from qq.domain.service.user_service import default_username
from qq.domain.value import AuthIdentityId, OtpCodeId, UserId
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real PostgreSQL, mocked mailer
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env: AsyncContainer):
    """Truncate all tables before each test."""
    engine = await integration_env.get(AsyncEngine)
    async with engine.begin() as conn:
        await conn.execute(text('TRUNCATE TABLE otp_code, "user", auth_identity CASCADE'))
    yield


def _identity(email: str = "alice@example.com") -> AuthIdentity:
    return AuthIdentity(id=AuthIdentityId(uuid4()), email=email)


class TestPostgresRepositories:
    """Round trips through the real schema."""

    @pytest.mark.asyncio
    async def test_identity_user_and_codes(self, integration_env: AsyncContainer):
        tm = await integration_env.get(TransactionManager)
        identity = _identity()
        user = User(
            id=UserId(uuid4()),
            auth_id=identity.id,
            username=default_username(identity.id),
        )

        async with tm.begin() as uow:
            await uow.auth_identities.create(identity)
            await uow.users.create(user)
            await uow.otp_codes.create(
                OtpCode(id=OtpCodeId(uuid4()), auth_id=identity.id, code_hash="a" * 64)
            )
            await uow.commit()

        async with tm.begin() as uow:
            assert (await uow.auth_identities.find_by_email(identity.email)).id == identity.id
            assert (await uow.users.find_by_email(identity.email)).id == user.id
            assert (await uow.users.find_by_auth_id(identity.id)).username == user.username
            found = await uow.otp_codes.find_by_hash_and_email(
                "a" * 64, identity.email
            )
            assert found is not None and found.auth_id == identity.id
            assert len(await uow.otp_codes.list_by_auth_id(identity.id)) == 1

            assert await uow.otp_codes.delete_by_email(identity.email) == 1
            await uow.commit()

        async with tm.begin() as uow:
            assert await uow.otp_codes.list_by_auth_id(identity.id) == []

    @pytest.mark.asyncio
    async def test_code_lookup_is_scoped_to_email(
        self, integration_env: AsyncContainer
    ):
        tm = await integration_env.get(TransactionManager)
        alice = _identity()
        bob = _identity("bob@example.com")

        async with tm.begin() as uow:
            await uow.auth_identities.create(alice)
            await uow.auth_identities.create(bob)
            for owner in (alice, bob):
                await uow.otp_codes.create(
                    OtpCode(
                        id=OtpCodeId(uuid4()), auth_id=owner.id, code_hash="c" * 64
                    )
                )
            await uow.commit()

        async with tm.begin() as uow:
            found = await uow.otp_codes.find_by_hash_and_email("c" * 64, alice.email)

        assert found.auth_id == alice.id

    @pytest.mark.asyncio
    async def test_duplicate_email_is_unique_violation(
        self, integration_env: AsyncContainer
    ):
        tm = await integration_env.get(TransactionManager)
        async with tm.begin() as uow:
            await uow.auth_identities.create(_identity())
            await uow.commit()

        async with tm.begin() as uow:
            with pytest.raises(UniqueViolationError):
                await uow.auth_identities.create(_identity())

    @pytest.mark.asyncio
    async def test_code_for_unknown_identity_is_validation_error(
        self, integration_env: AsyncContainer
    ):
        tm = await integration_env.get(TransactionManager)

        async with tm.begin() as uow:
            with pytest.raises(ValidationError):
                await uow.otp_codes.create(
                    OtpCode(
                        id=OtpCodeId(uuid4()),
                        auth_id=AuthIdentityId(uuid4()),
                        code_hash="b" * 64,
                    )
                )

    @pytest.mark.asyncio
    async def test_rollback_discards_writes(self, integration_env: AsyncContainer):
        tm = await integration_env.get(TransactionManager)

        async with tm.begin() as uow:
            await uow.auth_identities.create(_identity())

        async with tm.begin() as uow:
            assert await uow.auth_identities.find_by_email("alice@example.com") is None
