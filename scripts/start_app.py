#!/usr/bin/env python3
"""Start the qq auth API with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from qq.config import Settings
from qq.util.logging import setup_logging
from qq.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    # Configure Logfire early to catch startup errors
    configure_logfire(settings)

    if settings.environment == "production" and (
        settings.auth.jwt_secret == "CHANGE_ME_IN_PRODUCTION"
    ):
        logfire.error("Refusing to start with the default JWT secret")
        return 1

    try:
        logfire.info("Starting qq auth API", git_sha=settings.git_sha)

        # The app module is imported by uvicorn after Logfire is configured
        uvicorn.run(
            "qq.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
