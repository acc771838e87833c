#!/usr/bin/env python3
"""Upgrade the database schema.

Usage: run_migrations.py [REVISION]   (defaults to head)
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from letters.config import Settings
from letters.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    configure_logfire(Settings())

    with logfire.span("run_migrations", revision=revision):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception as e:
            logfire.error(
                "Migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Non-zero exit stops the deploy
            raise
        logfire.info("Schema at revision", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
