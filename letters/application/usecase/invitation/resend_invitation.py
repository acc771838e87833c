"""Resend invitation use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from letters.application.usecase.base import BaseUseCase
from letters.application.usecase.invitation.common import (
    clean_custom_message,
    invitation_payload,
    persist_expiry,
)
from letters.config import Settings
from letters.domain.repository import UnitOfWork
from letters.domain.service import (
    ApplicationService,
    InvitationStateMachine,
    NotificationService,
)
from letters.domain.value import (
    ApplicationId,
    InvitationId,
    NotificationKind,
    StudentId,
)


class ResendInvitationRequest(BaseModel):
    """Resend invitation request."""

    student_id: UUID  # From auth
    application_id: UUID
    invitation_id: UUID
    custom_message: str | None = None


class ResendInvitationResponse(BaseModel):
    """Resend invitation response."""

    message: str
    invitation_id: UUID
    invitation_expires_at: datetime
    resend_count: int


class ResendInvitationUseCase(BaseUseCase):
    """Use case for re-sending a pending invitation with a fresh window."""

    def __init__(
        self,
        application_service: ApplicationService,
        state_machine: InvitationStateMachine,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
        settings: Settings,
    ) -> None:
        self.application_service = application_service
        self.state_machine = state_machine
        self.notification_service = notification_service
        self.unit_of_work = unit_of_work
        self.settings = settings

    async def execute(
        self, request: ResendInvitationRequest
    ) -> ResendInvitationResponse:
        """Execute resend flow.

        Raises:
            NotFoundError: If the application or invitation is not visible
            ValidationError: If the new custom message is too long
            InvalidStateError: If the invitation is no longer pending
        """
        with logfire.span(
            "resend_invitation",
            application_id=str(request.application_id),
            invitation_id=str(request.invitation_id),
        ):
            application = await self.application_service.get_owned(
                ApplicationId(request.application_id), StudentId(request.student_id)
            )
            custom_message = clean_custom_message(
                self.settings, request.custom_message
            )
            invitation = await self.application_service.get_invitation(
                application, InvitationId(request.invitation_id)
            )
            invitation = await persist_expiry(
                self.state_machine, self.unit_of_work, invitation
            )

            async with self.unit_of_work.rollback_on_error():
                invitation = await self.state_machine.resend(
                    invitation, custom_message
                )
                await self.unit_of_work.commit()

            await self.notification_service.notify(
                NotificationKind.RESEND,
                invitation.recommender_email,
                invitation_payload(self.settings, application, invitation),
            )

            return ResendInvitationResponse(
                message="Invitation resent",
                invitation_id=invitation.id,
                invitation_expires_at=invitation.invitation_expires_at,
                resend_count=invitation.resend_count,
            )
