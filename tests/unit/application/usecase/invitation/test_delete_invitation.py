"""Unit tests for DeleteInvitationUseCase."""

from datetime import timedelta

import pytest

from letters.application.usecase.invitation import (
    ConfirmInvitationRequest,
    ConfirmInvitationUseCase,
    DeleteInvitationRequest,
    DeleteInvitationUseCase,
    GetInvitationDetailsRequest,
    GetInvitationDetailsUseCase,
)
from letters.domain.error import InvalidStateError, NotFoundError
from letters.domain.repository import InvitationRepository, UnitOfWork
from letters.domain.service import Clock
from letters.domain.value import InvitationStatus
from tests.factories import VALID_PROFILE
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestDeleteInvitationUseCase:
    """Tests for DeleteInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_delete_pending(self, unit_env, invite):
        """Should soft delete and stop the token from resolving."""
        # Arrange
        use_case = await unit_env.get(DeleteInvitationUseCase)
        details = await unit_env.get(GetInvitationDetailsUseCase)
        invitation_repo = await unit_env.get(InvitationRepository)
        application, sent = await invite()
        request = DeleteInvitationRequest(
            student_id=application.student_id,
            application_id=application.id,
            invitation_id=sent.invitation.invitation_id,
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.invitation_id == sent.invitation.invitation_id
        stored = await invitation_repo.find_by_id(sent.invitation.invitation_id)
        assert stored.status == InvitationStatus.DELETED

        token = sent.invitation_url.rsplit("/", 1)[-1]
        with pytest.raises(NotFoundError):
            await details.execute(GetInvitationDetailsRequest(token=token))

        # Deleting again finds nothing
        with pytest.raises(NotFoundError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_delete_confirmed_rejected(self, unit_env, invite):
        """Should keep a confirmed invitation."""
        # Arrange
        use_case = await unit_env.get(DeleteInvitationUseCase)
        confirm = await unit_env.get(ConfirmInvitationUseCase)
        application, sent = await invite()
        await confirm.execute(
            ConfirmInvitationRequest(
                token=sent.invitation_url.rsplit("/", 1)[-1], fields=VALID_PROFILE
            )
        )

        # Act & Assert
        with pytest.raises(InvalidStateError):
            await use_case.execute(
                DeleteInvitationRequest(
                    student_id=application.student_id,
                    application_id=application.id,
                    invitation_id=sent.invitation.invitation_id,
                )
            )

    @pytest.mark.asyncio
    async def test_delete_expired_keeps_expiry(self, unit_env, invite):
        """Should refuse an expired invitation but still record the expiry."""
        # Arrange
        use_case = await unit_env.get(DeleteInvitationUseCase)
        invitation_repo = await unit_env.get(InvitationRepository)
        unit_of_work = await unit_env.get(UnitOfWork)
        clock = await unit_env.get(Clock)
        application, sent = await invite()
        clock.advance(timedelta(days=8))

        # Act & Assert
        with pytest.raises(InvalidStateError):
            await use_case.execute(
                DeleteInvitationRequest(
                    student_id=application.student_id,
                    application_id=application.id,
                    invitation_id=sent.invitation.invitation_id,
                )
            )

        assert unit_of_work.rollbacks == 1
        stored = await invitation_repo.find_by_id(sent.invitation.invitation_id)
        assert stored.status == InvitationStatus.EXPIRED
