"""Duplicate invitation guard."""

import logfire
from sqlalchemy.exc import IntegrityError

from letters.domain.error import ConflictError
from letters.domain.model.invitation import Invitation
from letters.domain.repository import InvitationRepository

from .base import Service
from .state_machine import InvitationStateMachine


class DuplicateGuard(Service):
    """Keeps at most one invited/confirmed invitation per application and email.

    The database enforces the rule with a partial unique index, so the check
    and the insert are one atomic step. The read beforehand only clears out a
    stale invitation and gives a friendlier log line.
    """

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        state_machine: InvitationStateMachine,
    ) -> None:
        """Initialize duplicate guard.

        Args:
            invitation_repository: Invitation repository
            state_machine: Used to expire an overdue invitation for the same pair
        """
        self.invitation_repository = invitation_repository
        self.state_machine = state_machine

    async def reserve(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation unless an active one exists for the pair.

        Args:
            invitation: New invitation in status ``invited``

        Returns:
            The stored invitation

        Raises:
            ConflictError: If the recommender is already invited or confirmed
                for this application
        """
        with logfire.span(
            "duplicate_guard.reserve",
            application_id=str(invitation.application_id),
        ):
            existing = await self.invitation_repository.find_active(
                invitation.application_id, invitation.recommender_email
            )
            if existing is not None:
                # An overdue invitation no longer blocks a fresh one
                existing = await self.state_machine.refresh(existing)
                if existing.status.is_active:
                    logfire.warn(
                        "Recommender already invited",
                        application_id=str(invitation.application_id),
                        existing_id=str(existing.id),
                        status=existing.status.value,
                    )
                    raise ConflictError(
                        "This recommender has already been invited for this application"
                    )

            try:
                saved = await self.invitation_repository.insert(invitation)
            except IntegrityError:
                logfire.warn(
                    "Concurrent duplicate invitation rejected",
                    application_id=str(invitation.application_id),
                )
                raise ConflictError(
                    "This recommender has already been invited for this application"
                )

            logfire.info(
                "Invitation reserved",
                invitation_id=str(saved.id),
                application_id=str(saved.application_id),
            )
            return saved
