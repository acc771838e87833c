"""Container factories."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from letters.util.di import PROVIDERS, get_provider


def _production_providers() -> list:
    return [get_provider(base, use_mock=False)() for base in PROVIDERS]


def create_container() -> AsyncContainer:
    """Production container for the API (REQUEST scope follows HTTP requests)."""
    return make_async_container(*_production_providers(), FastapiProvider())


def create_script_container() -> AsyncContainer:
    """Production container for scripts, which open request scopes by hand."""
    return make_async_container(*_production_providers())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach ``container`` to ``app`` so routes can use ``FromDishka``."""
    setup_dishka(container, app)
