"""Unit tests for GetInvitationDetailsUseCase."""

from datetime import timedelta

import pytest

from letters.application.usecase.invitation import (
    GetInvitationDetailsRequest,
    GetInvitationDetailsUseCase,
)
from letters.domain.error import NotFoundError
from letters.domain.service import Clock
from letters.domain.value import InvitationStatus
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetInvitationDetailsUseCase:
    """Tests for GetInvitationDetailsUseCase."""

    @pytest.mark.asyncio
    async def test_details_by_token(self, unit_env, invite):
        """Should show the invitation and the application it belongs to."""
        # Arrange
        use_case = await unit_env.get(GetInvitationDetailsUseCase)
        application, sent = await invite()
        token = sent.invitation_url.rsplit("/", 1)[-1]

        # Act
        response = await use_case.execute(GetInvitationDetailsRequest(token=token))

        # Assert
        assert response.invitation_id == sent.invitation.invitation_id
        assert response.status == InvitationStatus.INVITED
        assert response.student_name == application.legal_name
        assert response.program_type == application.program_type
        assert response.university_ids == list(application.university_ids)

    @pytest.mark.asyncio
    async def test_expired_token_not_found(self, unit_env, invite):
        """Should hide an expired invitation from its link."""
        # Arrange
        use_case = await unit_env.get(GetInvitationDetailsUseCase)
        clock = await unit_env.get(Clock)
        _, sent = await invite()
        clock.advance(timedelta(days=7, minutes=1))

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                GetInvitationDetailsRequest(
                    token=sent.invitation_url.rsplit("/", 1)[-1]
                )
            )
