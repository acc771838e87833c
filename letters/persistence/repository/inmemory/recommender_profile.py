"""In-memory recommender profile repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from letters.domain.model.recommender_profile import RecommenderProfile
from letters.domain.repository.recommender_profile import (
    RecommenderProfileRepository,
)
from letters.domain.value import InvitationId, RecommenderProfileId

from .unit_of_work import InMemoryJournal


class InMemoryRecommenderProfileRepository(RecommenderProfileRepository):
    """In-memory implementation of RecommenderProfileRepository for testing."""

    def __init__(self, journal: InMemoryJournal | None = None) -> None:
        self._profiles: dict[RecommenderProfileId, RecommenderProfile] = {}
        self._journal = journal or InMemoryJournal()

    async def find_by_id(
        self, profile_id: RecommenderProfileId
    ) -> Optional[RecommenderProfile]:
        return self._profiles.get(profile_id)

    async def find_by_invitation_id(
        self, invitation_id: InvitationId
    ) -> Optional[RecommenderProfile]:
        for profile in self._profiles.values():
            if profile.invitation_id == invitation_id:
                return profile
        return None

    async def insert(self, profile: RecommenderProfile) -> RecommenderProfile:
        """Insert a new profile.

        Raises:
            IntegrityError: If the invitation already has a profile
        """
        if await self.find_by_invitation_id(profile.invitation_id):
            raise IntegrityError("Duplicate profile for invitation", None, Exception())
        self._journal.record(self._profiles, profile.id)
        self._profiles[profile.id] = profile
        return profile

    def count(self) -> int:
        return len(self._profiles)
