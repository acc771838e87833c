"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from letters.domain.model.invitation import Invitation
from letters.domain.repository.invitation import InvitationRepository
from letters.domain.value import (
    ApplicationId,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    RecommenderEmail,
)

from .unit_of_work import InMemoryJournal


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing.

    Each method completes without awaiting, so every call is atomic with
    respect to other coroutines on the loop.
    """

    def __init__(self, journal: InMemoryJournal | None = None) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}
        self._journal = journal or InMemoryJournal()

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        return self._invitations.get(invitation_id)

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        for invitation in self._invitations.values():
            if invitation.token == token:
                return invitation
        return None

    async def find_active(
        self, application_id: ApplicationId, email: RecommenderEmail
    ) -> Optional[Invitation]:
        return self._find_active(application_id, email)

    async def find_by_application(
        self, application_id: ApplicationId
    ) -> list[Invitation]:
        invitations = [
            i for i in self._invitations.values() if i.application_id == application_id
        ]
        return sorted(invitations, key=lambda i: i.invited_at, reverse=True)

    async def insert(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Raises:
            IntegrityError: If an active invitation exists for the pair or the
                token is taken
        """
        if invitation.id in self._invitations:
            raise IntegrityError("Duplicate invitation id", None, Exception())
        if any(i.token == invitation.token for i in self._invitations.values()):
            raise IntegrityError("Duplicate invitation token", None, Exception())
        if invitation.status.is_active and self._find_active(
            invitation.application_id, invitation.recommender_email
        ):
            raise IntegrityError("Duplicate active invitation", None, Exception())

        self._journal.record(self._invitations, invitation.id)
        self._invitations[invitation.id] = invitation
        return invitation

    async def compare_and_set(
        self, invitation: Invitation, expected_status: InvitationStatus
    ) -> bool:
        current = self._invitations.get(invitation.id)
        if current is None or current.status != expected_status:
            return False
        self._journal.record(self._invitations, invitation.id)
        self._invitations[invitation.id] = invitation
        return True

    async def expire_overdue(self, now: datetime) -> int:
        count = 0
        for invitation_id, invitation in list(self._invitations.items()):
            if (
                invitation.status == InvitationStatus.INVITED
                and invitation.invitation_expires_at < now
            ):
                self._journal.record(self._invitations, invitation_id)
                self._invitations[invitation_id] = invitation.model_copy(
                    update={"status": InvitationStatus.EXPIRED}
                )
                count += 1
        return count

    def _find_active(
        self, application_id: ApplicationId, email: RecommenderEmail
    ) -> Optional[Invitation]:
        for invitation in self._invitations.values():
            if (
                invitation.application_id == application_id
                and invitation.recommender_email == email
                and invitation.status.is_active
            ):
                return invitation
        return None
