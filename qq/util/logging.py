"""Stdlib logging setup for the API process.

Structured spans and events go through logfire; this only shapes the plain
``logging`` output of uvicorn, SQLAlchemy and the route handlers.
"""

import logging
import sys

from qq.config import Settings

# Chatty libraries that only log useful detail in debug mode
QUIET_LOGGERS = ("httpx", "httpcore", "asyncpg", "sqlalchemy.engine")


def setup_logging(settings: Settings) -> None:
    """Configure root and library log levels.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if settings.debug else logging.WARNING)

    logging.getLogger("qq").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
