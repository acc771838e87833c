"""Get invitation details use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from letters.application.usecase.base import BaseUseCase
from letters.domain.error import NotFoundError
from letters.domain.service import ApplicationService, Clock, TokenService
from letters.domain.value import InvitationStatus, ProgramType


class GetInvitationDetailsRequest(BaseModel):
    """Public lookup by invitation token."""

    token: str


class GetInvitationDetailsResponse(BaseModel):
    """What a recommender sees before confirming."""

    invitation_id: UUID
    recommender_email: str
    status: InvitationStatus
    custom_message: str | None = None
    invited_at: datetime
    invitation_expires_at: datetime
    confirmed_at: datetime | None = None
    student_name: str
    program_type: ProgramType
    application_term: str
    university_ids: list[UUID]


class GetInvitationDetailsUseCase(BaseUseCase):
    """Use case for showing an invitation to the recommender holding its link."""

    def __init__(
        self,
        token_service: TokenService,
        application_service: ApplicationService,
        clock: Clock,
    ) -> None:
        self.token_service = token_service
        self.application_service = application_service
        self.clock = clock

    async def execute(
        self, request: GetInvitationDetailsRequest
    ) -> GetInvitationDetailsResponse:
        """Execute invitation details flow.

        Args:
            request: Token lookup request

        Returns:
            Invitation and application summary

        Raises:
            NotFoundError: If the token is malformed, unknown, deleted or expired
        """
        invitation = await self.token_service.validate(request.token)

        with logfire.span("get_invitation_details", invitation_id=str(invitation.id)):
            status = invitation.effective_status(self.clock.now())
            if status == InvitationStatus.EXPIRED:
                logfire.warn(
                    "Expired invitation token opened",
                    invitation_id=str(invitation.id),
                    token=invitation.token.redacted,
                )
                raise NotFoundError("Invitation", "token")

            application = await self.application_service.get(
                invitation.application_id
            )

            return GetInvitationDetailsResponse(
                invitation_id=invitation.id,
                recommender_email=invitation.recommender_email.root,
                status=status,
                custom_message=invitation.custom_message,
                invited_at=invitation.invited_at,
                invitation_expires_at=invitation.invitation_expires_at,
                confirmed_at=invitation.confirmed_at,
                student_name=application.legal_name,
                program_type=application.program_type,
                application_term=application.application_term,
                university_ids=list(application.university_ids),
            )
