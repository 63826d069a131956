"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    """Database configuration."""

    url: str = "postgresql+asyncpg://qq:qq@localhost:5432/qq"
    pool_size: int = 5
    max_overflow: int = 10


class AuthSettings(BaseModel):
    """Token issuing configuration."""

    # JWT settings
    jwt_secret: str = "CHANGE_ME_IN_PRODUCTION"  # Must be overridden in production
    jwt_algorithm: str = "HS256"
    issuer: str = "qq-auth"
    audience: str = "qq-app"

    # Access tokens are short-lived (minutes), refresh tokens long-lived (hours)
    access_token_expire_minutes: int = 15
    refresh_token_expire_hours: int = 720

    # When False, iss/aud are still written but not checked on validation
    verify_issuer_audience: bool = True

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_hmac_algorithm(cls, v: str) -> str:
        """Only symmetric HMAC algorithms are supported."""
        if v not in ("HS256", "HS384", "HS512"):
            raise ValueError("jwt_algorithm must be one of HS256, HS384, HS512")
        return v


class OtpSettings(BaseModel):
    """One-time passcode configuration."""

    code_length: int = 6
    alphabet: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

    # Codes older than this are rejected on verification
    ttl_minutes: int = 10


class MailSettings(BaseModel):
    """Outbound email configuration."""

    # Resend API key (required in production)
    resend_api_key: str = ""
    api_url: str = "https://api.resend.com/emails"

    from_address: str = "noreply@qq.local"
    otp_subject: str = "OTP Verification"
    otp_template: str = "otp"


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, using ``__`` for nested values:

        AUTH__JWT_SECRET=...
        AUTH__ACCESS_TOKEN_EXPIRE_MINUTES=15
        DATABASE__URL=postgresql+asyncpg://...
        MAIL__RESEND_API_KEY=...
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows DATABASE__URL syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Git commit SHA (loaded from version.txt file or defaults to "unknown")
    git_sha: str = "unknown"

    host: str = "localhost"
    port: int = 8000

    # Origins allowed by CORS (JSON list in the environment)
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Nested settings
    database: DatabaseSettings = DatabaseSettings()
    auth: AuthSettings = AuthSettings()
    otp: OtpSettings = OtpSettings()
    mail: MailSettings = MailSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    def model_post_init(self, __context) -> None:
        """Load git SHA from the version file when deployed."""
        if self.git_sha == "unknown":
            self.git_sha = self._load_git_sha()

    @staticmethod
    def _load_git_sha() -> str:
        """Load git SHA from version file.

        Returns:
            Git SHA if version file exists, otherwise "unknown"
        """
        version_file = Path("/app/version.txt")
        if version_file.exists():
            try:
                return version_file.read_text().strip()
            except OSError:
                return "unknown"
        # In development, version file may not exist
        return "unknown"

    @property
    def database_url(self) -> str:
        """Shortcut for the database URL."""
        return self.database.url
