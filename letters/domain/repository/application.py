"""Application repository interface."""

from abc import ABC, abstractmethod

from letters.domain.model.application import Application
from letters.domain.value import ApplicationId


class ApplicationRepository(ABC):
    """Repository for Application entity.

    The invitation workflow only reads applications; ``save`` serves the
    application-management flow and test fixtures.
    """

    @abstractmethod
    async def find_by_id(self, application_id: ApplicationId) -> Application | None:
        """Find an application by ID.

        Args:
            application_id: The application's unique identifier

        Returns:
            The application if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, application: Application) -> Application:
        """Save an application (create or update), including its university set."""
        pass
