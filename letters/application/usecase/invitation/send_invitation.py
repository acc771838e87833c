"""Send invitation use case."""

import asyncio
from uuid import UUID

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from letters.application.usecase.base import BaseUseCase
from letters.application.usecase.invitation.common import (
    InvitationItem,
    clean_custom_message,
    invitation_payload,
    invitation_url,
)
from letters.config import Settings
from letters.domain.error import InvalidEmailError
from letters.domain.repository import UnitOfWork
from letters.domain.service import (
    ApplicationService,
    Clock,
    DuplicateGuard,
    InvitationStateMachine,
    NotificationService,
    TokenService,
)
from letters.domain.value import (
    ApplicationId,
    NotificationKind,
    RecommenderEmail,
    StudentId,
)


class SendInvitationRequest(BaseModel):
    """Request to invite a recommender."""

    student_id: UUID  # From auth
    application_id: UUID
    recommender_email: str
    custom_message: str | None = None


class SendInvitationResponse(BaseModel):
    """Response after creating an invitation."""

    invitation: InvitationItem
    invitation_url: str


class SendInvitationUseCase(BaseUseCase):
    """Use case for inviting a recommender to an application.

    The invitation is committed before any email goes out, so a relay outage
    never loses or blocks the invitation. The recommender gets the link and
    the student gets a notice that it was sent.
    """

    def __init__(
        self,
        application_service: ApplicationService,
        token_service: TokenService,
        state_machine: InvitationStateMachine,
        duplicate_guard: DuplicateGuard,
        notification_service: NotificationService,
        unit_of_work: UnitOfWork,
        clock: Clock,
        settings: Settings,
    ) -> None:
        """Initialize use case.

        Args:
            application_service: Application access service
            token_service: Invitation token service
            state_machine: Invitation lifecycle service
            duplicate_guard: Active-invitation uniqueness guard
            notification_service: Fire-and-forget notifications
            unit_of_work: Transaction boundary
            clock: Server clock
            settings: Application settings
        """
        self.application_service = application_service
        self.token_service = token_service
        self.state_machine = state_machine
        self.duplicate_guard = duplicate_guard
        self.notification_service = notification_service
        self.unit_of_work = unit_of_work
        self.clock = clock
        self.settings = settings

    async def execute(self, request: SendInvitationRequest) -> SendInvitationResponse:
        """Execute send invitation flow.

        Args:
            request: Send invitation request

        Returns:
            The new invitation and its link

        Raises:
            NotFoundError: If the application is missing or not the student's
            ValidationError: If the email or message is invalid
            ConflictError: If the recommender is already invited or confirmed
            TimeoutError: If the operation does not commit in time
        """
        student_id = StudentId(request.student_id)
        application_id = ApplicationId(request.application_id)

        with logfire.span(
            "send_invitation",
            student_id=str(student_id),
            application_id=str(application_id),
        ):
            async with (
                self.unit_of_work.rollback_on_error(),
                asyncio.timeout(self.settings.invitations.operation_timeout_seconds),
            ):
                application = await self.application_service.get_owned(
                    application_id, student_id
                )
                email = self._parse_email(request.recommender_email)
                custom_message = clean_custom_message(
                    self.settings, request.custom_message
                )

                invitation = self.state_machine.open(
                    application_id=application.id,
                    email=email,
                    token=self.token_service.issue(),
                    custom_message=custom_message,
                )
                invitation = await self.duplicate_guard.reserve(invitation)
                await self.unit_of_work.commit()

            logfire.info(
                "Invitation sent",
                invitation_id=str(invitation.id),
                application_id=str(application_id),
                token=invitation.token.redacted,
            )

            await self.notification_service.notify(
                NotificationKind.INVITATION,
                invitation.recommender_email,
                invitation_payload(self.settings, application, invitation),
            )
            await self.notification_service.notify(
                NotificationKind.INVITATION_SENT,
                application.student_id,
                {
                    **invitation_payload(self.settings, application, invitation),
                    "recommender_email": invitation.recommender_email.root,
                },
            )

            return SendInvitationResponse(
                invitation=InvitationItem.from_invitation(invitation, self.clock.now()),
                invitation_url=invitation_url(self.settings, invitation),
            )

    def _parse_email(self, raw: str) -> RecommenderEmail:
        try:
            return RecommenderEmail(raw)
        except PydanticValidationError:
            logfire.warn("Invalid recommender email")
            raise InvalidEmailError(
                "Invalid email address",
                errors=[{"field": "recommender_email", "message": "Invalid email"}],
            )
