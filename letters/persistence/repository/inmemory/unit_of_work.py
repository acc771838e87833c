"""In-memory unit of work for testing."""

import asyncio
from typing import Any
from weakref import WeakKeyDictionary

from letters.domain.repository.unit_of_work import UnitOfWork

_MISSING = object()


class InMemoryJournal:
    """Undo log of uncommitted writes to in-memory repositories.

    Entries are kept per asyncio task, the way each request owns its own
    database session. There is no isolation: other tasks see uncommitted
    writes straight away.
    """

    def __init__(self) -> None:
        self._entries: WeakKeyDictionary[asyncio.Task, list[tuple[dict, Any, Any]]] = (
            WeakKeyDictionary()
        )

    def record(self, store: dict, key: Any) -> None:
        """Remember ``store[key]`` as it is before a write."""
        entries = self._entries.setdefault(asyncio.current_task(), [])
        entries.append((store, key, store.get(key, _MISSING)))

    def forget(self) -> None:
        """Keep the current task's writes."""
        self._entries.pop(asyncio.current_task(), None)

    def undo(self) -> int:
        """Put back everything the current task wrote since it last committed.

        Returns:
            Number of writes undone
        """
        entries = self._entries.pop(asyncio.current_task(), [])
        for store, key, previous in reversed(entries):
            if previous is _MISSING:
                store.pop(key, None)
            else:
                store[key] = previous
        return len(entries)


class InMemoryUnitOfWork(UnitOfWork):
    """Commits and rolls back through a shared journal, counting both."""

    def __init__(self, journal: InMemoryJournal | None = None) -> None:
        self.journal = journal or InMemoryJournal()
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.journal.forget()
        self.commits += 1

    async def rollback(self) -> None:
        self.journal.undo()
        self.rollbacks += 1
