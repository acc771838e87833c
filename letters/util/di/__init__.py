"""Dependency injection wiring.

``PROVIDERS`` lists one entry per layer or component. An entry with
subclasses is a swappable component (persistence, notification, clock); the
subclass is chosen by its ``__is_mock__`` flag. An entry without subclasses
is used as is.
"""

from typing import Type

from letters.util.di.application import ProdApplicationProvider
from letters.util.di.base import Component, ProviderBase
from letters.util.di.core import ProdConfigProvider
from letters.util.di.domain import ProdDomainProvider
from letters.util.di.infrastructure import (
    ClockProvider,
    NotificationProvider,
    PersistenceProvider,
    ProdClockProvider,
    ProdNotificationProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    ClockProvider,
    NotificationProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve an entry of ``PROVIDERS`` to the class to instantiate.

    Args:
        base: Entry of ``PROVIDERS``
        use_mock: For swappable components, pick the mock implementation

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for implementation in implementations:
        if implementation.__is_mock__ == use_mock:
            return implementation

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} provider for component {base.__mock_component__!r}")


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "ClockProvider",
    "NotificationProvider",
    "PersistenceProvider",
    "ProdClockProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]
