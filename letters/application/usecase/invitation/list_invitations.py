"""List invitations use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from letters.application.usecase.base import BaseUseCase
from letters.application.usecase.invitation.common import InvitationItem
from letters.domain.service import ApplicationService, Clock
from letters.domain.value import ApplicationId, StudentId


class ListInvitationsRequest(BaseModel):
    """List invitations request."""

    student_id: UUID  # From auth
    application_id: UUID


class ListInvitationsResponse(BaseModel):
    """List invitations response."""

    invitations: list[InvitationItem]
    total: int


class ListInvitationsUseCase(BaseUseCase):
    """Use case for listing every invitation of a student's application."""

    def __init__(self, application_service: ApplicationService, clock: Clock) -> None:
        self.application_service = application_service
        self.clock = clock

    async def execute(self, request: ListInvitationsRequest) -> ListInvitationsResponse:
        """Execute list invitations flow.

        Overdue invitations are reported as expired without writing. Confirmed
        ones carry the recommender who accepted.

        Raises:
            NotFoundError: If the application is missing or not the student's
        """
        with logfire.span(
            "list_invitations",
            student_id=str(request.student_id),
            application_id=str(request.application_id),
        ):
            application = await self.application_service.get_owned(
                ApplicationId(request.application_id), StudentId(request.student_id)
            )
            invitations = await self.application_service.list_invitations(
                application
            )

            recommenders = await self.application_service.find_recommenders(
                invitations
            )

            now = self.clock.now()
            items = [
                InvitationItem.from_invitation(i, now, recommenders.get(i.id))
                for i in invitations
            ]
            return ListInvitationsResponse(invitations=items, total=len(items))
