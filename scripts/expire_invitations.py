#!/usr/bin/env python3
"""Expire overdue invitations.

Meant to run from cron. Lazy expiry already keeps overdue invitations from
being confirmed; the sweep keeps stored statuses and listings tidy.
"""

import asyncio
import sys

import logfire

from letters.application.usecase.invitation import (
    ExpireInvitationsRequest,
    ExpireInvitationsUseCase,
)
from letters.config import Settings
from letters.util.di.container import create_script_container
from letters.util.observability import configure_logfire


async def sweep() -> int:
    """Run one sweep in its own request scope.

    Returns:
        Number of invitations expired
    """
    container = create_script_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(ExpireInvitationsUseCase)
            response = await use_case.execute(ExpireInvitationsRequest())
            return response.expired_count
    finally:
        await container.close()


def main() -> int:
    settings = Settings()
    configure_logfire(settings)

    try:
        with logfire.span("expire_invitations_script"):
            count = asyncio.run(sweep())
        logfire.info("Invitation sweep finished", expired_count=count)
        return 0

    except Exception as e:
        logfire.error(
            "Invitation sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
