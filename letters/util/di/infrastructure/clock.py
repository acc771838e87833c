"""Clock providers."""

from dishka import Scope, provide

from letters.domain.service import Clock, SystemClock
from letters.util.di.base import ProviderBase


class ClockProvider(ProviderBase):
    """Clock component base."""

    __mock_component__ = "clock"


class ProdClockProvider(ClockProvider):
    """Wall-clock UTC time."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_clock(self) -> Clock:
        return SystemClock()
