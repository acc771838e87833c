"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from letters.domain.model.invitation import Invitation
from letters.domain.value import (
    ApplicationId,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    RecommenderEmail,
)


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Defines the contract for invitation persistence operations.
    Implementations live in the infrastructure layer.

    Status is only ever written through ``insert``, ``compare_and_set`` and
    ``expire_overdue``. Each of these is atomic with respect to concurrent
    callers.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find an invitation by token.

        Used when a recommender opens an invitation link.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active(
        self, application_id: ApplicationId, email: RecommenderEmail
    ) -> Invitation | None:
        """Find the invited/confirmed invitation for an application and email.

        Args:
            application_id: Owning application
            email: Normalized recommender email

        Returns:
            The active invitation if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_application(
        self, application_id: ApplicationId
    ) -> list[Invitation]:
        """List every invitation of an application, newest first.

        Args:
            application_id: Owning application

        Returns:
            List of invitations (possibly empty)
        """
        pass

    @abstractmethod
    async def insert(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        The uniqueness check and the insert are a single atomic step.

        Args:
            invitation: The invitation to insert

        Returns:
            The inserted invitation

        Raises:
            IntegrityError: If an active invitation already exists for the
                same application and email, or the token is taken
        """
        pass

    @abstractmethod
    async def compare_and_set(
        self, invitation: Invitation, expected_status: InvitationStatus
    ) -> bool:
        """Write ``invitation`` only if the stored status is still ``expected_status``.

        Args:
            invitation: Updated invitation (same ID as the stored row)
            expected_status: Status the caller read before computing the update

        Returns:
            True if the row was updated, False if another writer got there first
            or the row no longer exists
        """
        pass

    @abstractmethod
    async def expire_overdue(self, now: datetime) -> int:
        """Mark every invited invitation whose expiry has passed as expired.

        Args:
            now: Authoritative server time

        Returns:
            Number of invitations expired
        """
        pass
