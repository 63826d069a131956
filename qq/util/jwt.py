"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from qq.config import AuthSettings

# Only symmetric MAC algorithms are ever accepted on validation
HMAC_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})


class TokenClaims(BaseModel):
    """JWT token claims."""

    user_id: str = ""
    sub: str = ""
    iss: str | None = None
    aud: str | None = None
    iat: datetime
    exp: datetime


class TokenPair(BaseModel):
    """Access token and refresh token issued together."""

    access_token: str
    refresh_token: str


class JWTError(Exception):
    """JWT-related error."""

    pass


class MalformedTokenError(JWTError):
    """Token cannot be parsed or is missing required claims."""

    pass


class ExpiredTokenError(JWTError):
    """Token expiry is in the past."""

    pass


class BadSignatureError(JWTError):
    """Token signature does not match the configured secret."""

    pass


class UnexpectedAlgorithmError(JWTError):
    """Token header names an algorithm other than the configured HMAC one."""

    pass


class InvalidIssuerOrAudienceError(JWTError):
    """Token issuer or audience does not match configuration."""

    pass


def create_token(
    user_id: str,
    lifetime: timedelta,
    settings: AuthSettings,
    now: datetime | None = None,
) -> str:
    """Create a signed JWT token for the user.

    Args:
        user_id: User ID (written to both ``sub`` and ``user_id``)
        lifetime: Time until expiry
        settings: Authentication settings
        now: Issue time (defaults to current UTC time)

    Returns:
        Encoded JWT token
    """
    issued_at = now or datetime.now(timezone.utc)

    payload = {
        "user_id": user_id,
        "sub": user_id,
        "iss": settings.issuer,
        "aud": settings.audience,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_token_pair(
    user_id: str, settings: AuthSettings, now: datetime | None = None
) -> TokenPair:
    """Create an access/refresh token pair for the user.

    Args:
        user_id: User ID
        settings: Authentication settings
        now: Issue time (defaults to current UTC time)

    Returns:
        Token pair
    """
    issued_at = now or datetime.now(timezone.utc)
    return TokenPair(
        access_token=create_token(
            user_id,
            timedelta(minutes=settings.access_token_expire_minutes),
            settings,
            now=issued_at,
        ),
        refresh_token=create_token(
            user_id,
            timedelta(hours=settings.refresh_token_expire_hours),
            settings,
            now=issued_at,
        ),
    )


def verify_token(token: str, settings: AuthSettings) -> TokenClaims:
    """Verify and decode a JWT token.

    The header algorithm is checked before the signature so that ``none`` and
    asymmetric algorithms are rejected outright.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token claims if valid

    Raises:
        MalformedTokenError: If the token cannot be parsed
        UnexpectedAlgorithmError: If the header algorithm is not accepted
        BadSignatureError: If the signature does not verify
        ExpiredTokenError: If the token has expired
        InvalidIssuerOrAudienceError: If iss/aud do not match (strict mode)
    """
    try:
        header = jwt.get_unverified_header(token)
    except jwt.InvalidTokenError:
        raise MalformedTokenError("Token could not be parsed")

    algorithm = header.get("alg")
    if algorithm not in HMAC_ALGORITHMS or algorithm != settings.jwt_algorithm:
        raise UnexpectedAlgorithmError(f"Unexpected signing algorithm: {algorithm}")

    strict = settings.verify_issuer_audience
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.audience if strict else None,
            issuer=settings.issuer if strict else None,
            options={
                "require": ["exp", "iat"],
                "verify_aud": strict,
                "verify_iss": strict,
            },
        )
    except jwt.ExpiredSignatureError:
        raise ExpiredTokenError("Token has expired")
    except jwt.InvalidSignatureError:
        raise BadSignatureError("Token signature is invalid")
    except jwt.InvalidAlgorithmError:
        raise UnexpectedAlgorithmError("Unexpected signing algorithm")
    except (jwt.InvalidAudienceError, jwt.InvalidIssuerError):
        raise InvalidIssuerOrAudienceError("Token issuer or audience is invalid")
    except jwt.InvalidTokenError as e:
        raise MalformedTokenError(f"Invalid token: {e}")

    try:
        return TokenClaims(**payload)
    except PydanticValidationError:
        raise MalformedTokenError("Token claims are malformed")
