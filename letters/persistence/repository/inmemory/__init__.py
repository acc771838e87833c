"""In-memory repository implementations for testing."""

from .application import InMemoryApplicationRepository
from .invitation import InMemoryInvitationRepository
from .recommender_profile import InMemoryRecommenderProfileRepository
from .unit_of_work import InMemoryJournal, InMemoryUnitOfWork

__all__ = [
    "InMemoryApplicationRepository",
    "InMemoryInvitationRepository",
    "InMemoryJournal",
    "InMemoryRecommenderProfileRepository",
    "InMemoryUnitOfWork",
]
