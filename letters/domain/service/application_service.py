"""Application access domain service."""

import logfire

from letters.domain.error import NotFoundError
from letters.domain.model import Application, Invitation, RecommenderProfile
from letters.domain.repository import (
    ApplicationRepository,
    InvitationRepository,
    RecommenderProfileRepository,
)
from letters.domain.value import (
    ApplicationId,
    InvitationId,
    InvitationStatus,
    StudentId,
)

from .base import Service


class ApplicationService(Service):
    """Read access to applications and their invitations on behalf of owners.

    Anything the caller may not see is reported as not found, whether it is
    missing or belongs to someone else.
    """

    def __init__(
        self,
        application_repository: ApplicationRepository,
        invitation_repository: InvitationRepository,
        recommender_profile_repository: RecommenderProfileRepository,
    ) -> None:
        """Initialize application service.

        Args:
            application_repository: Application repository
            invitation_repository: Invitation repository
            recommender_profile_repository: Recommender profile repository
        """
        self.application_repository = application_repository
        self.invitation_repository = invitation_repository
        self.recommender_profile_repository = recommender_profile_repository

    async def get_owned(
        self, application_id: ApplicationId, student_id: StudentId
    ) -> Application:
        """Load an application the student owns.

        Args:
            application_id: Application to load
            student_id: Authenticated student

        Returns:
            The application

        Raises:
            NotFoundError: If the application does not exist or belongs to
                another student
        """
        with logfire.span(
            "application_service.get_owned",
            application_id=str(application_id),
            student_id=str(student_id),
        ):
            application = await self.application_repository.find_by_id(
                application_id
            )
            if application is None or not application.is_owned_by(student_id):
                logfire.warn(
                    "Application not visible to student",
                    application_id=str(application_id),
                    student_id=str(student_id),
                )
                raise NotFoundError("Application", str(application_id))
            return application

    async def get(self, application_id: ApplicationId) -> Application:
        """Load an application without an ownership check.

        Raises:
            NotFoundError: If the application does not exist
        """
        application = await self.application_repository.find_by_id(application_id)
        if application is None:
            logfire.error(
                "Invitation references missing application",
                application_id=str(application_id),
            )
            raise NotFoundError("Application", str(application_id))
        return application

    async def get_invitation(
        self, application: Application, invitation_id: InvitationId
    ) -> Invitation:
        """Load an invitation that belongs to the application.

        Deleted invitations are treated as gone.

        Raises:
            NotFoundError: If the invitation is missing, deleted or filed
                under another application
        """
        invitation = await self.invitation_repository.find_by_id(invitation_id)
        if (
            invitation is None
            or invitation.application_id != application.id
            or invitation.status == InvitationStatus.DELETED
        ):
            logfire.warn(
                "Invitation not found under application",
                application_id=str(application.id),
                invitation_id=str(invitation_id),
            )
            raise NotFoundError("Invitation", str(invitation_id))
        return invitation

    async def list_invitations(self, application: Application) -> list[Invitation]:
        """List the application's invitations, newest first."""
        with logfire.span(
            "application_service.list_invitations", application_id=str(application.id)
        ):
            invitations = await self.invitation_repository.find_by_application(
                application.id
            )
            logfire.info(
                "Invitations listed",
                application_id=str(application.id),
                count=len(invitations),
            )
            return invitations

    async def find_recommenders(
        self, invitations: list[Invitation]
    ) -> dict[InvitationId, RecommenderProfile]:
        """Profiles of the recommenders who confirmed, keyed by invitation ID."""
        profiles: dict[InvitationId, RecommenderProfile] = {}
        for invitation in invitations:
            if invitation.status != InvitationStatus.CONFIRMED:
                continue
            profile = await self.recommender_profile_repository.find_by_invitation_id(
                invitation.id
            )
            if profile is not None:
                profiles[invitation.id] = profile
        return profiles
