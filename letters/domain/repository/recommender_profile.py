"""Recommender profile repository interface."""

from abc import ABC, abstractmethod

from letters.domain.model.recommender_profile import RecommenderProfile
from letters.domain.value import InvitationId, RecommenderProfileId


class RecommenderProfileRepository(ABC):
    """Repository for RecommenderProfile entity."""

    @abstractmethod
    async def find_by_id(
        self, profile_id: RecommenderProfileId
    ) -> RecommenderProfile | None:
        """Find a profile by ID."""
        pass

    @abstractmethod
    async def find_by_invitation_id(
        self, invitation_id: InvitationId
    ) -> RecommenderProfile | None:
        """Find the profile created by confirming an invitation."""
        pass

    @abstractmethod
    async def insert(self, profile: RecommenderProfile) -> RecommenderProfile:
        """Insert a new profile.

        Raises:
            IntegrityError: If a profile already exists for the invitation
        """
        pass
