"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class UnitOfWork(ABC):
    """Commits or discards the current request's writes.

    Use cases commit explicitly before talking to anything outside the
    database, so no transaction is held open across a network call. Nothing
    else commits: writes a use case leaves uncommitted are discarded.
    """

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass

    @asynccontextmanager
    async def rollback_on_error(self) -> AsyncIterator[None]:
        """Roll back uncommitted writes if the block raises or is cancelled."""
        try:
            yield
        except BaseException:
            await self.rollback()
            raise
