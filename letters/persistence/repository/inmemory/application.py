"""In-memory application repository for testing."""

from typing import Optional

from letters.domain.model.application import Application
from letters.domain.repository.application import ApplicationRepository
from letters.domain.value import ApplicationId

from .unit_of_work import InMemoryJournal


class InMemoryApplicationRepository(ApplicationRepository):
    """In-memory implementation of ApplicationRepository for testing."""

    def __init__(self, journal: InMemoryJournal | None = None) -> None:
        self._applications: dict[ApplicationId, Application] = {}
        self._journal = journal or InMemoryJournal()

    async def find_by_id(self, application_id: ApplicationId) -> Optional[Application]:
        return self._applications.get(application_id)

    async def save(self, application: Application) -> Application:
        self._journal.record(self._applications, application.id)
        self._applications[application.id] = application
        return application
