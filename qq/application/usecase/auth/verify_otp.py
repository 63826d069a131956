"""Verify OTP and login use case."""

import logfire
from pydantic import BaseModel, Field

from qq.application.usecase.base import BaseUseCase
from qq.domain.error import DomainError, InternalServerError
from qq.domain.repository import TransactionManager
from qq.domain.service import AuthService, JWTService, UserService
from qq.domain.value import Email
from qq.util.jwt import TokenPair


class VerifyOTPAndLoginRequest(BaseModel):
    """Email and the code that was sent to it."""

    email: Email
    code: str = Field(min_length=1)


class VerifyOTPAndLoginUseCase(BaseUseCase):
    """Use case for exchanging a valid code for a token pair."""

    def __init__(
        self,
        transaction_manager: TransactionManager,
        auth_service: AuthService,
        user_service: UserService,
        jwt_service: JWTService,
    ) -> None:
        self.transaction_manager = transaction_manager
        self.auth_service = auth_service
        self.user_service = user_service
        self.jwt_service = jwt_service

    async def execute(self, request: VerifyOTPAndLoginRequest) -> TokenPair:
        """Execute verify-and-login flow.

        The code is consumed by deleting every pending code of the identity in
        the same transaction, so it verifies at most once.

        Args:
            request: Email and plaintext code

        Returns:
            Fresh access/refresh token pair

        Raises:
            InvalidOTPError: If the code does not match the email or expired
            NotFoundError: If the identity has no user
            InternalServerError: On any other failure before commit
        """
        email = request.email.root

        with logfire.span("verify_otp_and_login", email=email):
            try:
                async with self.transaction_manager.begin() as uow:
                    verified = await self.auth_service.verify_code(
                        uow, email, request.code
                    )
                    user = await self.user_service.find_by_email(uow, email)
                    await self.auth_service.invalidate_pending_codes(
                        uow, verified.auth_id
                    )
                    await uow.commit()
            except DomainError:
                raise
            except Exception as e:
                raise InternalServerError(f"verify_otp_and_login failed: {e}") from e

            pair = self.jwt_service.issue_token_pair(str(user.id))
            logfire.info("User logged in", user_id=str(user.id))
            return pair
