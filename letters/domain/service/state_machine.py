"""Invitation lifecycle domain service."""

from datetime import timedelta
from uuid import uuid4

import logfire

from letters.domain.error import InvalidStateError, NotFoundError
from letters.domain.model.invitation import Invitation
from letters.domain.repository import InvitationRepository
from letters.domain.value import (
    ApplicationId,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    RecommenderEmail,
    RecommenderProfileId,
)

from .base import Service
from .clock import Clock


class InvitationStateMachine(Service):
    """Owns every status change of an invitation.

    ``invited`` may move to ``confirmed``, ``expired`` or ``deleted``; all
    three are terminal. Each change is a compare-and-set on the stored status,
    so of two concurrent transitions from ``invited`` exactly one wins and the
    other sees an InvalidStateError.
    """

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        clock: Clock,
        expiry_window: timedelta,
    ) -> None:
        """Initialize state machine.

        Args:
            invitation_repository: Invitation repository
            clock: Server clock
            expiry_window: How long an invitation stays confirmable after
                being sent or resent
        """
        self.invitation_repository = invitation_repository
        self.clock = clock
        self.expiry_window = expiry_window

    def open(
        self,
        application_id: ApplicationId,
        email: RecommenderEmail,
        token: InvitationToken,
        custom_message: str | None,
    ) -> Invitation:
        """Build a new invitation in its initial state (not yet persisted)."""
        now = self.clock.now()
        return Invitation(
            id=InvitationId(uuid4()),
            application_id=application_id,
            recommender_email=email,
            token=token,
            status=InvitationStatus.INVITED,
            custom_message=custom_message,
            invited_at=now,
            invitation_expires_at=now + self.expiry_window,
            last_sent_at=now,
        )

    async def refresh(self, invitation: Invitation) -> Invitation:
        """Persist lazy expiry.

        An ``invited`` invitation past its expiry is moved to ``expired``
        before anything else looks at it.

        Args:
            invitation: Invitation as read from the repository

        Returns:
            The invitation with its up-to-date status
        """
        if invitation.effective_status(self.clock.now()) == invitation.status:
            return invitation

        with logfire.span(
            "state_machine.refresh", invitation_id=str(invitation.id)
        ):
            try:
                expired = await self._transition(invitation, InvitationStatus.EXPIRED)
            except InvalidStateError:
                # Someone else moved it first; report what they wrote
                current = await self._reload(invitation.id)
                return current
            logfire.info("Invitation expired", invitation_id=str(invitation.id))
            return expired

    async def confirm(
        self, invitation: Invitation, profile_id: RecommenderProfileId
    ) -> Invitation:
        """Move an invitation to ``confirmed`` and link the new profile.

        Raises:
            InvalidStateError: If the invitation is not ``invited``, is overdue,
                or lost a race to another transition
        """
        self._ensure_confirmable(invitation, "confirmed")
        return await self._transition(
            invitation,
            InvitationStatus.CONFIRMED,
            confirmed_at=self.clock.now(),
            recommender_profile_id=profile_id,
        )

    async def resend(
        self, invitation: Invitation, custom_message: str | None = None
    ) -> Invitation:
        """Restart the confirmation window of a pending invitation.

        The token is kept, so links already in the recommender's inbox keep
        working. A new custom message replaces the old one; None keeps it.

        Raises:
            InvalidStateError: If the invitation is not ``invited`` or is overdue
        """
        invitation = await self.refresh(invitation)
        self._ensure_confirmable(invitation, "resent")

        now = self.clock.now()
        updated = invitation.model_copy(
            update={
                "invitation_expires_at": now + self.expiry_window,
                "last_sent_at": now,
                "resend_count": invitation.resend_count + 1,
                "custom_message": custom_message
                if custom_message is not None
                else invitation.custom_message,
            }
        )
        await self._write(invitation, updated)
        logfire.info(
            "Invitation resent",
            invitation_id=str(invitation.id),
            resend_count=updated.resend_count,
        )
        return updated

    async def delete(self, invitation: Invitation) -> Invitation:
        """Withdraw a pending invitation.

        Raises:
            InvalidStateError: If the invitation is not ``invited`` or is overdue
        """
        invitation = await self.refresh(invitation)
        self._ensure_confirmable(invitation, "deleted")
        deleted = await self._transition(invitation, InvitationStatus.DELETED)
        logfire.info("Invitation deleted", invitation_id=str(invitation.id))
        return deleted

    async def sweep_expired(self) -> int:
        """Expire every overdue invitation in one pass.

        Returns:
            Number of invitations moved to ``expired``
        """
        with logfire.span("state_machine.sweep_expired"):
            count = await self.invitation_repository.expire_overdue(self.clock.now())
            logfire.info("Overdue invitations expired", count=count)
            return count

    def _ensure_confirmable(self, invitation: Invitation, action: str) -> None:
        status = invitation.effective_status(self.clock.now())
        if status != InvitationStatus.INVITED:
            logfire.warn(
                "Invitation not pending",
                invitation_id=str(invitation.id),
                status=status.value,
                action=action,
            )
            raise InvalidStateError(
                f"Invitation is {status.value} and cannot be {action}",
                current_status=status.value,
            )

    async def _transition(
        self, invitation: Invitation, target: InvitationStatus, **changes
    ) -> Invitation:
        if not invitation.status.can_transition_to(target):
            raise InvalidStateError(
                f"Cannot move invitation from {invitation.status.value} "
                f"to {target.value}",
                current_status=invitation.status.value,
            )

        updated = invitation.model_copy(update={"status": target, **changes})
        await self._write(invitation, updated)
        return updated

    async def _write(self, current: Invitation, updated: Invitation) -> None:
        written = await self.invitation_repository.compare_and_set(
            updated, expected_status=current.status
        )
        if written:
            return

        latest = await self._reload(current.id)
        logfire.warn(
            "Invitation changed concurrently",
            invitation_id=str(current.id),
            expected=current.status.value,
            actual=latest.status.value,
        )
        raise InvalidStateError(
            f"Invitation is {latest.status.value}",
            current_status=latest.status.value,
        )

    async def _reload(self, invitation_id: InvitationId) -> Invitation:
        latest = await self.invitation_repository.find_by_id(invitation_id)
        if latest is None:
            raise NotFoundError("Invitation", str(invitation_id))
        return latest
