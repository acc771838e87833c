"""Logfire setup and instrumentation.

Domain services open one span per operation and log structured events
inside it::

    with logfire.span("state_machine.refresh", invitation_id=str(invitation.id)):
        logfire.info("Invitation expired", invitation_id=str(invitation.id))

Invitation tokens are credentials; only ``InvitationToken.redacted`` may be
logged.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from letters.config import Settings

SERVICE_NAME = "letters-api"


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before anything is instrumented.

    Export to Logfire is on when forced by ``OBSERVABILITY__SEND_TO_LOGFIRE``
    or, failing that, when a token is present. Console output is always on.
    """
    send = settings.observability.send_to_logfire
    if send is None:
        send = settings.observability.logfire_token is not None

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Logfire configured", environment=settings.environment, export=send
    )


def _route_attributes(request, attributes: dict) -> dict:
    # Raw paths carry invitation tokens; keep the route template instead
    route = request.scope.get("route")
    if route is not None:
        attributes = {**attributes, "route": route.path}
    return attributes


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except health probes."""
    logfire.instrument_fastapi(
        app,
        request_attributes_mapper=_route_attributes,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace calls to the mail relay."""
    logfire.instrument_httpx()
