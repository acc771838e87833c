"""Stdlib logging baseline.

Our own code logs through logfire. This module only routes library loggers
(uvicorn, sqlalchemy, alembic, asyncpg) to stdout and into Logfire, so they
sit next to our spans.
"""

import logging
import sys

import logfire

from letters.config import Settings

# Chatty at INFO: one line per relay call
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout), logfire.LogfireLoggingHandler()],
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured (environment=%s, level=%s)",
        settings.environment,
        logging.getLevelName(level),
    )
