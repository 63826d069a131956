"""Unit tests for UserService."""

from uuid import UUID, uuid4

import pytest

from qq.domain.error import NotFoundError, UniqueViolationError
from qq.domain.service import AuthService, UserService
from qq.domain.service.user_service import default_username
from qq.domain.value import AuthIdentityId, PrivacyLevel, UserId
from qq.persistence.repository.inmemory import InMemoryTransactionManager
from qq.util.otp import SecretsRandomSource
from tests.conftest import make_otp_settings


@pytest.fixture
def tm():
    return InMemoryTransactionManager()


async def _create_identity(tm, email="alice@example.com"):
    async with tm.begin() as uow:
        auth_id = await AuthService(
            SecretsRandomSource(), make_otp_settings()
        ).create_identity(uow, email)
        await uow.commit()
    return auth_id


def test_default_username_uses_first_six_bytes():
    auth_id = AuthIdentityId(UUID("0123456789ab4def8123456789abcdef"))

    assert default_username(auth_id).root == "user_0123456789ab"


class TestCreateDefault:
    """Tests for UserService.create_default()."""

    @pytest.mark.asyncio
    async def test_creates_public_profile(self, tm):
        auth_id = await _create_identity(tm)
        service = UserService()

        async with tm.begin() as uow:
            user = await service.create_default(uow, auth_id)
            await uow.commit()

        assert user.auth_id == auth_id
        assert user.username == default_username(auth_id)
        assert user.privacy_level == PrivacyLevel.PUBLIC
        assert user.display_name is None
        assert tm.database.tables.users[user.id] == user

    @pytest.mark.asyncio
    async def test_second_profile_for_identity_is_rejected(self, tm):
        auth_id = await _create_identity(tm)
        service = UserService()
        async with tm.begin() as uow:
            await service.create_default(uow, auth_id)
            await uow.commit()

        async with tm.begin() as uow:
            with pytest.raises(UniqueViolationError):
                await service.create_default(uow, auth_id)


class TestFind:
    """Tests for UserService lookups."""

    @pytest.mark.asyncio
    async def test_find_by_email(self, tm):
        auth_id = await _create_identity(tm)
        service = UserService()
        async with tm.begin() as uow:
            created = await service.create_default(uow, auth_id)
            await uow.commit()

        async with tm.begin() as uow:
            found = await service.find_by_email(uow, "alice@example.com")

        assert found == created

    @pytest.mark.asyncio
    async def test_find_by_email_not_found(self, tm):
        async with tm.begin() as uow:
            with pytest.raises(NotFoundError):
                await UserService().find_by_email(uow, "nobody@example.com")

    @pytest.mark.asyncio
    async def test_find_by_email_identity_without_user(self, tm):
        """An identity alone is not a user."""
        await _create_identity(tm)

        async with tm.begin() as uow:
            with pytest.raises(NotFoundError):
                await UserService().find_by_email(uow, "alice@example.com")

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, tm):
        async with tm.begin() as uow:
            with pytest.raises(NotFoundError) as exc_info:
                await UserService().find_by_id(uow, UserId(uuid4()))

        assert exc_info.value.resource == "User"
