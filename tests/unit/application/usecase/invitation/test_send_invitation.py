"""Unit tests for SendInvitationUseCase."""

import asyncio
from uuid import uuid4

import pytest

from letters.application.usecase.invitation import (
    SendInvitationRequest,
    SendInvitationUseCase,
)
from letters.domain.error import (
    ConflictError,
    InvalidEmailError,
    NotFoundError,
    ValidationError,
)
from letters.domain.repository import (
    ApplicationRepository,
    InvitationRepository,
    UnitOfWork,
)
from letters.domain.service import DuplicateGuard, NotificationDispatcher
from letters.domain.value import InvitationStatus, NotificationKind
from tests.factories import make_application
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestSendInvitationUseCase:
    """Tests for SendInvitationUseCase."""

    async def _application(self, unit_env):
        application_repo = await unit_env.get(ApplicationRepository)
        return await application_repo.save(make_application())

    def _request(self, application, email="prof@university.edu", **kwargs):
        return SendInvitationRequest(
            student_id=application.student_id,
            application_id=application.id,
            recommender_email=email,
            **kwargs,
        )

    @pytest.mark.asyncio
    async def test_send_invitation_success(self, unit_env):
        """Should store, commit and then email the invitation."""
        # Arrange
        use_case = await unit_env.get(SendInvitationUseCase)
        dispatcher = await unit_env.get(NotificationDispatcher)
        unit_of_work = await unit_env.get(UnitOfWork)
        application = await self._application(unit_env)

        # Act
        response = await use_case.execute(
            self._request(
                application, "Prof@University.edu", custom_message="  Thank you!  "
            )
        )

        # Assert
        invitation = response.invitation
        assert invitation.status == InvitationStatus.INVITED
        assert invitation.recommender_email == "prof@university.edu"
        assert invitation.custom_message == "Thank you!"
        assert invitation.resend_count == 0
        assert response.invitation_url.startswith(
            "http://localhost:3000/invitations/"
        )
        assert unit_of_work.commits == 1

        sent = dispatcher.of_kind(NotificationKind.INVITATION)
        assert len(sent) == 1
        recipient, payload = sent[0]
        assert recipient == "prof@university.edu"
        assert payload["invitation_url"] == response.invitation_url
        assert payload["student_name"] == application.legal_name
        assert payload["university_count"] == 3

        notices = dispatcher.of_kind(NotificationKind.INVITATION_SENT)
        assert notices == [
            (
                f"student:{application.student_id}",
                {**payload, "recommender_email": "prof@university.edu"},
            )
        ]

    @pytest.mark.asyncio
    async def test_send_duplicate_rejected(self, unit_env):
        """Should reject a second invitation to the same recommender."""
        # Arrange
        use_case = await unit_env.get(SendInvitationUseCase)
        dispatcher = await unit_env.get(NotificationDispatcher)
        application = await self._application(unit_env)
        await use_case.execute(self._request(application))

        # Act & Assert
        with pytest.raises(ConflictError):
            await use_case.execute(self._request(application, "PROF@university.edu"))

        assert len(dispatcher.of_kind(NotificationKind.INVITATION)) == 1

    @pytest.mark.asyncio
    async def test_concurrent_duplicates_one_wins(self, unit_env):
        """Should let exactly one of many simultaneous invitations through."""
        # Arrange
        use_case = await unit_env.get(SendInvitationUseCase)
        invitation_repo = await unit_env.get(InvitationRepository)
        application = await self._application(unit_env)

        # Act
        results = await asyncio.gather(
            *(use_case.execute(self._request(application)) for _ in range(5)),
            return_exceptions=True,
        )

        # Assert
        successes = [r for r in results if not isinstance(r, Exception)]
        conflicts = [r for r in results if isinstance(r, ConflictError)]
        assert len(successes) == 1
        assert len(conflicts) == 4
        assert len(await invitation_repo.find_by_application(application.id)) == 1

    @pytest.mark.asyncio
    async def test_invalid_email_rejected(self, unit_env):
        """Should reject a malformed address with nothing stored."""
        # Arrange
        use_case = await unit_env.get(SendInvitationUseCase)
        invitation_repo = await unit_env.get(InvitationRepository)
        application = await self._application(unit_env)

        # Act & Assert
        with pytest.raises(InvalidEmailError):
            await use_case.execute(self._request(application, "not-an-email"))

        assert await invitation_repo.find_by_application(application.id) == []

    @pytest.mark.asyncio
    async def test_custom_message_too_long(self, unit_env):
        """Should reject an oversized custom message."""
        # Arrange
        use_case = await unit_env.get(SendInvitationUseCase)
        application = await self._application(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                self._request(application, custom_message="x" * 1001)
            )

        assert exc_info.value.errors[0]["field"] == "custom_message"

    @pytest.mark.asyncio
    async def test_other_students_application_not_found(self, unit_env):
        """Should not let a student invite onto someone else's application."""
        # Arrange
        use_case = await unit_env.get(SendInvitationUseCase)
        application = await self._application(unit_env)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                SendInvitationRequest(
                    student_id=uuid4(),
                    application_id=application.id,
                    recommender_email="prof@university.edu",
                )
            )

    @pytest.mark.asyncio
    async def test_notification_failure_does_not_fail_send(self, unit_env):
        """Should keep the invitation when the mail relay is down."""
        # Arrange
        use_case = await unit_env.get(SendInvitationUseCase)
        dispatcher = await unit_env.get(NotificationDispatcher)
        invitation_repo = await unit_env.get(InvitationRepository)
        application = await self._application(unit_env)
        dispatcher.fail = True

        # Act
        response = await use_case.execute(self._request(application))

        # Assert
        stored = await invitation_repo.find_by_id(response.invitation.invitation_id)
        assert stored is not None
        assert stored.status == InvitationStatus.INVITED

    @pytest.mark.asyncio
    async def test_timeout_before_commit(self, unit_env):
        """Should roll back the stored invitation when the commit is too late."""
        # Arrange
        use_case = await unit_env.get(SendInvitationUseCase)
        guard = await unit_env.get(DuplicateGuard)
        unit_of_work = await unit_env.get(UnitOfWork)
        invitation_repo = await unit_env.get(InvitationRepository)
        dispatcher = await unit_env.get(NotificationDispatcher)
        application = await self._application(unit_env)
        use_case.settings = use_case.settings.model_copy(
            update={
                "invitations": use_case.settings.invitations.model_copy(
                    update={"operation_timeout_seconds": 0.05}
                )
            }
        )

        reserve = guard.reserve

        async def stalled_reserve(invitation):
            reserved = await reserve(invitation)
            await asyncio.sleep(5)
            return reserved

        guard.reserve = stalled_reserve

        # Act & Assert
        with pytest.raises(TimeoutError):
            await use_case.execute(self._request(application))

        assert unit_of_work.commits == 0
        assert unit_of_work.rollbacks == 1
        assert await invitation_repo.find_by_application(application.id) == []
        assert dispatcher.sent == []
