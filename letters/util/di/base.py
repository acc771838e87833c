"""Base class for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components that tests can swap for in-memory or recording fakes
Component = Literal["clock", "notification", "persistence"]


class ProviderBase(Provider):
    """Dishka provider carrying component metadata.

    Attributes:
        __mock_component__: Name of the swappable component this provider
            belongs to; None for providers that are never swapped
        __is_mock__: True for test implementations
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
