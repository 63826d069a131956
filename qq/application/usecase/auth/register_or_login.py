"""Register-or-login via email OTP use case."""

import logfire
from pydantic import BaseModel

from qq.application.usecase.base import BaseUseCase
from qq.config import MailSettings
from qq.domain.error import (
    DomainError,
    EmailDeliveryError,
    InternalServerError,
    NotFoundError,
)
from qq.domain.repository import TransactionManager
from qq.domain.service import (
    AuthService,
    Mailer,
    SendEmailParams,
    UserService,
    render_otp_template,
)
from qq.domain.value import Email


class RegisterOrLoginOTPRequest(BaseModel):
    """Request a one-time code for an email."""

    email: Email


class RegisterOrLoginOTPResponse(BaseModel):
    """Whether the email was new to the system."""

    is_new_user: bool


class RegisterOrLoginOTPUseCase(BaseUseCase):
    """Use case for passwordless sign-up and sign-in.

    Creates the identity and user on first contact, replaces any pending
    codes with a fresh one and emails it.
    """

    def __init__(
        self,
        transaction_manager: TransactionManager,
        auth_service: AuthService,
        user_service: UserService,
        mailer: Mailer,
        mail_settings: MailSettings,
    ) -> None:
        """Initialize register-or-login use case.

        Args:
            transaction_manager: Opens the unit of work
            auth_service: Authentication domain service
            user_service: User domain service
            mailer: Outbound email port
            mail_settings: Sender address, subject and template name
        """
        self.transaction_manager = transaction_manager
        self.auth_service = auth_service
        self.user_service = user_service
        self.mailer = mailer
        self.mail_settings = mail_settings

    async def execute(
        self, request: RegisterOrLoginOTPRequest
    ) -> RegisterOrLoginOTPResponse:
        """Execute register-or-login flow.

        Steps:
        1. Look up the user by email inside one transaction
        2. If new: create identity and default user
        3. Invalidate pending codes and store a new one
        4. Load the email template, then commit
        5. Send the code outside the transaction

        Args:
            request: Request with the login email

        Returns:
            Whether a new user was created

        Raises:
            UniqueViolationError: If a concurrent request registered the email
            EmailDeliveryError: If the code was stored but the email failed
            InternalServerError: On any other failure before commit
        """
        email = request.email.root

        with logfire.span("register_or_login_otp", email=email):
            try:
                async with self.transaction_manager.begin() as uow:
                    try:
                        user = await self.user_service.find_by_email(uow, email)
                        auth_id = user.auth_id
                        is_new_user = False
                    except NotFoundError:
                        auth_id = await self.auth_service.create_identity(uow, email)
                        await self.user_service.create_default(uow, auth_id)
                        is_new_user = True

                    await self.auth_service.invalidate_pending_codes(uow, auth_id)
                    code = await self.auth_service.generate_and_store_otp(uow, auth_id)
                    template = await self.mailer.get_template(
                        self.mail_settings.otp_template
                    )
                    await uow.commit()
            except DomainError as e:
                logfire.warn(
                    "Register or login failed",
                    email=email,
                    error_type=type(e).__name__,
                )
                raise
            except Exception as e:
                logfire.error("Register or login failed", email=email, error=str(e))
                raise InternalServerError(f"register_or_login_otp failed: {e}") from e

            logfire.info("OTP committed", email=email, is_new_user=is_new_user)

            params = SendEmailParams(
                to=email,
                from_address=self.mail_settings.from_address,
                subject=self.mail_settings.otp_subject,
                body=render_otp_template(template, code),
            )
            try:
                await self.mailer.send_email(params)
            except Exception as e:
                logfire.error(
                    "OTP email delivery failed",
                    email=email,
                    is_new_user=is_new_user,
                    error=str(e),
                )
                raise EmailDeliveryError(email, is_new_user) from e

            return RegisterOrLoginOTPResponse(is_new_user=is_new_user)
