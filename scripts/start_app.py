#!/usr/bin/env python3
"""Serve the API with uvicorn.

Logfire is configured before the app module is imported, so failures while
building the app are reported too.
"""

import sys

import logfire
import uvicorn

from letters.config import Settings
from letters.util.logging import setup_logging
from letters.util.observability import configure_logfire

APP = "letters.interface.api.app:app"


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info("Starting API", port=settings.port, environment=settings.environment)
    try:
        uvicorn.run(
            APP,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            log_config=None,
        )
    except Exception as e:
        logfire.error(
            "API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
