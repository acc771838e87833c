"""Unit tests for ResendInvitationUseCase."""

from datetime import timedelta
from uuid import uuid4

import pytest

from letters.application.usecase.invitation import (
    ResendInvitationRequest,
    ResendInvitationUseCase,
)
from letters.domain.error import InvalidStateError, NotFoundError
from letters.domain.repository import InvitationRepository
from letters.domain.service import Clock, NotificationDispatcher
from letters.domain.value import InvitationStatus, NotificationKind
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestResendInvitationUseCase:
    """Tests for ResendInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_resend_restarts_window(self, unit_env, invite):
        """Should restart the window from now and email the same link."""
        # Arrange
        use_case = await unit_env.get(ResendInvitationUseCase)
        dispatcher = await unit_env.get(NotificationDispatcher)
        clock = await unit_env.get(Clock)
        application, sent = await invite()
        clock.advance(timedelta(days=6))

        # Act
        response = await use_case.execute(
            ResendInvitationRequest(
                student_id=application.student_id,
                application_id=application.id,
                invitation_id=sent.invitation.invitation_id,
            )
        )

        # Assert
        assert response.resend_count == 1
        assert response.invitation_expires_at == clock.now() + timedelta(days=7)

        resends = dispatcher.of_kind(NotificationKind.RESEND)
        assert len(resends) == 1
        _, payload = resends[0]
        assert payload["invitation_url"] == sent.invitation_url
        assert payload["custom_message"] == "Thank you for supporting my application"

    @pytest.mark.asyncio
    async def test_resend_with_new_message(self, unit_env, invite):
        """Should replace the custom message."""
        # Arrange
        use_case = await unit_env.get(ResendInvitationUseCase)
        invitation_repo = await unit_env.get(InvitationRepository)
        application, sent = await invite()

        # Act
        await use_case.execute(
            ResendInvitationRequest(
                student_id=application.student_id,
                application_id=application.id,
                invitation_id=sent.invitation.invitation_id,
                custom_message="Deadline is Friday",
            )
        )

        # Assert
        stored = await invitation_repo.find_by_id(sent.invitation.invitation_id)
        assert stored.custom_message == "Deadline is Friday"

    @pytest.mark.asyncio
    async def test_resend_expired_rejected(self, unit_env, invite):
        """Should refuse to resend once the invitation expired."""
        # Arrange
        use_case = await unit_env.get(ResendInvitationUseCase)
        invitation_repo = await unit_env.get(InvitationRepository)
        clock = await unit_env.get(Clock)
        application, sent = await invite()
        clock.advance(timedelta(days=8))

        # Act & Assert
        with pytest.raises(InvalidStateError):
            await use_case.execute(
                ResendInvitationRequest(
                    student_id=application.student_id,
                    application_id=application.id,
                    invitation_id=sent.invitation.invitation_id,
                )
            )

        stored = await invitation_repo.find_by_id(sent.invitation.invitation_id)
        assert stored.status == InvitationStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_resend_by_other_student_not_found(self, unit_env, invite):
        """Should hide another student's invitation."""
        # Arrange
        use_case = await unit_env.get(ResendInvitationUseCase)
        application, sent = await invite()

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                ResendInvitationRequest(
                    student_id=uuid4(),
                    application_id=application.id,
                    invitation_id=sent.invitation.invitation_id,
                )
            )
