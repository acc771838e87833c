"""Delete invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from letters.application.usecase.base import BaseUseCase
from letters.application.usecase.invitation.common import persist_expiry
from letters.domain.repository import UnitOfWork
from letters.domain.service import ApplicationService, InvitationStateMachine
from letters.domain.value import ApplicationId, InvitationId, StudentId


class DeleteInvitationRequest(BaseModel):
    """Delete invitation request."""

    student_id: UUID  # From auth
    application_id: UUID
    invitation_id: UUID


class DeleteInvitationResponse(BaseModel):
    """Delete invitation response."""

    message: str
    invitation_id: UUID


class DeleteInvitationUseCase(BaseUseCase):
    """Use case for withdrawing a pending invitation.

    The row is kept with status ``deleted``; its token stops resolving.
    """

    def __init__(
        self,
        application_service: ApplicationService,
        state_machine: InvitationStateMachine,
        unit_of_work: UnitOfWork,
    ) -> None:
        self.application_service = application_service
        self.state_machine = state_machine
        self.unit_of_work = unit_of_work

    async def execute(
        self, request: DeleteInvitationRequest
    ) -> DeleteInvitationResponse:
        """Execute delete flow.

        Raises:
            NotFoundError: If the application or invitation is not visible
            InvalidStateError: If the invitation is confirmed or expired
        """
        with logfire.span(
            "delete_invitation",
            application_id=str(request.application_id),
            invitation_id=str(request.invitation_id),
        ):
            application = await self.application_service.get_owned(
                ApplicationId(request.application_id), StudentId(request.student_id)
            )
            invitation = await self.application_service.get_invitation(
                application, InvitationId(request.invitation_id)
            )
            invitation = await persist_expiry(
                self.state_machine, self.unit_of_work, invitation
            )

            async with self.unit_of_work.rollback_on_error():
                await self.state_machine.delete(invitation)
                await self.unit_of_work.commit()

            return DeleteInvitationResponse(
                message="Invitation deleted", invitation_id=invitation.id
            )
