"""Mapping of domain errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from qq.domain.error import (
    DomainError,
    EmailDeliveryError,
    InternalServerError,
    InvalidOTPError,
    NotFoundError,
    UnauthorizedError,
    UniqueViolationError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first: EmailDeliveryError is an InternalServerError
STATUS_CODES: list[tuple[type[DomainError], int]] = [
    (EmailDeliveryError, status.HTTP_502_BAD_GATEWAY),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidOTPError, status.HTTP_401_UNAUTHORIZED),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (UniqueViolationError, status.HTTP_409_CONFLICT),
    (InternalServerError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_code_for(error: DomainError) -> int:
    """HTTP status for a domain error (500 when unclassified)."""
    for error_type, code in STATUS_CODES:
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_detail(error: DomainError, code: int) -> str:
    """Client-facing message; internal details stay in the logs."""
    if isinstance(error, EmailDeliveryError):
        return "Verification code created but the email could not be sent"
    if code >= 500:
        return "Internal server error"
    if isinstance(error, UnauthorizedError):
        return "Invalid or expired token"
    return str(error)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    code = status_code_for(exc)
    if code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {code}")

    body: dict[str, object] = {"detail": error_detail(exc, code)}
    if isinstance(exc, UniqueViolationError):
        body["retryable"] = exc.retryable
    if isinstance(exc, EmailDeliveryError):
        body["is_new_user"] = exc.is_new_user
    return JSONResponse(status_code=code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain error handler on the application."""
    app.add_exception_handler(DomainError, domain_error_handler)
