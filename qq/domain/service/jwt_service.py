"""JWT token domain service."""

import logfire

from qq.config import AuthSettings
from qq.util.jwt import TokenClaims, TokenPair, create_token_pair, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations.

    Stateless: safe to share across concurrent requests.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def issue_token_pair(self, user_id: str) -> TokenPair:
        """Issue an access/refresh token pair for the user.

        Args:
            user_id: User ID

        Returns:
            Token pair
        """
        with logfire.span("jwt_service.issue_token_pair", user_id=user_id):
            pair = create_token_pair(user_id, self.auth_settings)
            logfire.info("Token pair issued", user_id=user_id)
            return pair

    def validate(self, token: str) -> TokenClaims:
        """Verify JWT token and extract claims.

        Args:
            token: JWT token string

        Returns:
            Token claims

        Raises:
            JWTError: If token is malformed, expired, badly signed, uses an
                unexpected algorithm, or has the wrong issuer/audience
        """
        with logfire.span("jwt_service.validate"):
            try:
                claims = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", user_id=claims.user_id)
                return claims
            except Exception as e:
                logfire.warn(
                    "JWT token verification failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise
