"""Mock clock providers for testing."""

from dishka import Scope, provide

from letters.domain.service import Clock, FixedClock
from letters.util.di.infrastructure.clock import ClockProvider


class MockClockProvider(ClockProvider):
    """Clock frozen at container creation; tests move it explicitly."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_clock(self) -> Clock:
        return FixedClock()
