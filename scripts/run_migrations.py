#!/usr/bin/env python3
"""Apply the auth schema migrations with Logfire error tracking."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from qq.config import Settings
from qq.util.observability import configure_logfire


def main() -> int:
    """Upgrade the database to head and log any errors to Logfire."""
    settings = Settings()

    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations", environment=settings.environment)

        # migrations/env.py reads the URL from Settings
        alembic_cfg = Config("alembic.ini")
        command.upgrade(alembic_cfg, "head")

        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
