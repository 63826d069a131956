"""Unit tests for VerifyOTPAndLoginUseCase."""

from dishka import AsyncContainer
import pytest

from qq.application.usecase.auth import (
    RegisterOrLoginOTPRequest,
    VerifyOTPAndLoginRequest,
    VerifyOTPAndLoginUseCase,
)
from qq.domain.error import InvalidOTPError
from qq.domain.service import JWTService
from qq.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import make_register_use_case
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _register(env, email="alice@example.com", chars="1A2B3C"):
    use_case = await make_register_use_case(env, chars)
    await use_case.execute(RegisterOrLoginOTPRequest(email=email))


class TestVerifyOTPAndLoginUseCase:
    """Tests for VerifyOTPAndLoginUseCase."""

    @pytest.mark.asyncio
    async def test_valid_code_issues_tokens_for_user(self, unit_env: AsyncContainer):
        # Arrange
        await _register(unit_env)
        use_case = await unit_env.get(VerifyOTPAndLoginUseCase)
        jwt_service = await unit_env.get(JWTService)
        database = await unit_env.get(InMemoryDatabase)
        user = next(iter(database.tables.users.values()))

        # Act
        pair = await use_case.execute(
            VerifyOTPAndLoginRequest(email="alice@example.com", code="1A2B3C")
        )

        # Assert
        assert jwt_service.validate(pair.access_token).user_id == str(user.id)
        assert jwt_service.validate(pair.refresh_token).user_id == str(user.id)
        assert database.tables.otp_codes == {}

    @pytest.mark.asyncio
    async def test_code_verifies_only_once(self, unit_env: AsyncContainer):
        await _register(unit_env)
        use_case = await unit_env.get(VerifyOTPAndLoginUseCase)
        request = VerifyOTPAndLoginRequest(email="alice@example.com", code="1A2B3C")
        await use_case.execute(request)

        with pytest.raises(InvalidOTPError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_wrong_code_keeps_pending_code(self, unit_env: AsyncContainer):
        await _register(unit_env)
        use_case = await unit_env.get(VerifyOTPAndLoginUseCase)
        database = await unit_env.get(InMemoryDatabase)

        with pytest.raises(InvalidOTPError):
            await use_case.execute(
                VerifyOTPAndLoginRequest(email="alice@example.com", code="ZZZZZZ")
            )

        assert len(database.tables.otp_codes) == 1

    @pytest.mark.asyncio
    async def test_code_of_another_email(self, unit_env: AsyncContainer):
        await _register(unit_env, "alice@example.com", "1A2B3C")
        await _register(unit_env, "bob@example.com", "9Z9Z9Z")
        use_case = await unit_env.get(VerifyOTPAndLoginUseCase)

        with pytest.raises(InvalidOTPError):
            await use_case.execute(
                VerifyOTPAndLoginRequest(email="bob@example.com", code="1A2B3C")
            )

    @pytest.mark.asyncio
    async def test_code_also_held_by_another_email(self, unit_env: AsyncContainer):
        await _register(unit_env, "alice@example.com", "ABC123")
        await _register(unit_env, "bob@example.com", "ABC123")
        use_case = await unit_env.get(VerifyOTPAndLoginUseCase)
        database = await unit_env.get(InMemoryDatabase)

        pair = await use_case.execute(
            VerifyOTPAndLoginRequest(email="alice@example.com", code="ABC123")
        )

        assert pair.access_token
        # Only alice's code is consumed
        assert len(database.tables.otp_codes) == 1

    @pytest.mark.asyncio
    async def test_new_code_supersedes_old_one(self, unit_env: AsyncContainer):
        await _register(unit_env, chars="1A2B3C")
        await _register(unit_env, chars="9Z9Z9Z")
        use_case = await unit_env.get(VerifyOTPAndLoginUseCase)

        with pytest.raises(InvalidOTPError):
            await use_case.execute(
                VerifyOTPAndLoginRequest(email="alice@example.com", code="1A2B3C")
            )
        pair = await use_case.execute(
            VerifyOTPAndLoginRequest(email="alice@example.com", code="9Z9Z9Z")
        )

        assert pair.access_token

    @pytest.mark.asyncio
    async def test_unknown_email(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(VerifyOTPAndLoginUseCase)

        with pytest.raises(InvalidOTPError):
            await use_case.execute(
                VerifyOTPAndLoginRequest(email="nobody@example.com", code="1A2B3C")
            )

    @pytest.mark.asyncio
    async def test_email_is_normalised(self, unit_env: AsyncContainer):
        await _register(unit_env)
        use_case = await unit_env.get(VerifyOTPAndLoginUseCase)

        pair = await use_case.execute(
            VerifyOTPAndLoginRequest(email="ALICE@example.com", code="1A2B3C")
        )

        assert pair.refresh_token
