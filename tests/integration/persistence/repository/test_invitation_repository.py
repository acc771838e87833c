"""Integration tests for PostgresInvitationRepository.

These tests verify the database constraints the invitation workflow relies
on: the partial unique index on active invitations and conditional status
updates.
"""

import os
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from letters.domain.model import Invitation
from letters.domain.repository import ApplicationRepository, InvitationRepository
from letters.domain.value import (
    InvitationId,
    InvitationStatus,
    InvitationToken,
    RecommenderEmail,
)
from tests.factories import make_application
from tests.harness import create_env_fixture

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not os.environ.get("RUN_INTEGRATION"),
        reason="needs a running, migrated PostgreSQL",
    ),
]

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


async def _application(integration_env):
    application_repo = await integration_env.get(ApplicationRepository)
    return await application_repo.save(make_application(university_count=2))


def _invitation(application, email="prof@university.edu") -> Invitation:
    now = datetime.now(UTC)
    return Invitation(
        id=InvitationId(uuid4()),
        application_id=application.id,
        recommender_email=RecommenderEmail(email),
        token=InvitationToken(uuid4().hex),
        invited_at=now,
        invitation_expires_at=now + timedelta(days=7),
        last_sent_at=now,
    )


class TestInvitationRepositoryIntegration:
    """Integration tests for PostgresInvitationRepository."""

    @pytest.mark.asyncio
    async def test_insert_and_find_by_token(self, integration_env):
        """Should round-trip value objects through the database."""
        # Arrange
        invitation_repo = await integration_env.get(InvitationRepository)
        application = await _application(integration_env)
        invitation = _invitation(application)

        # Act
        await invitation_repo.insert(invitation)
        found = await invitation_repo.find_by_token(invitation.token)

        # Assert
        assert found is not None
        assert found.id == invitation.id
        assert found.recommender_email == invitation.recommender_email
        assert found.status == InvitationStatus.INVITED

    @pytest.mark.asyncio
    async def test_unique_index_rejects_second_active(self, integration_env):
        """Should reject a second active invitation and keep the session usable."""
        # Arrange
        invitation_repo = await integration_env.get(InvitationRepository)
        application = await _application(integration_env)
        first = await invitation_repo.insert(_invitation(application))

        # Act & Assert
        with pytest.raises(IntegrityError):
            await invitation_repo.insert(_invitation(application))

        assert (await invitation_repo.find_by_id(first.id)) is not None

    @pytest.mark.asyncio
    async def test_compare_and_set_single_winner(self, integration_env):
        """Should apply only the first of two transitions from the same read."""
        # Arrange
        invitation_repo = await integration_env.get(InvitationRepository)
        application = await _application(integration_env)
        invitation = await invitation_repo.insert(_invitation(application))

        # Act
        deleted = await invitation_repo.compare_and_set(
            invitation.model_copy(update={"status": InvitationStatus.DELETED}),
            InvitationStatus.INVITED,
        )
        confirmed = await invitation_repo.compare_and_set(
            invitation.model_copy(update={"status": InvitationStatus.CONFIRMED}),
            InvitationStatus.INVITED,
        )

        # Assert
        assert deleted is True
        assert confirmed is False
        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.DELETED

    @pytest.mark.asyncio
    async def test_expire_overdue(self, integration_env):
        """Should expire invitations whose window has passed."""
        # Arrange
        invitation_repo = await integration_env.get(InvitationRepository)
        application = await _application(integration_env)
        invitation = await invitation_repo.insert(_invitation(application))

        # Act
        count = await invitation_repo.expire_overdue(
            invitation.invitation_expires_at + timedelta(seconds=1)
        )

        # Assert
        assert count >= 1
        stored = await invitation_repo.find_by_id(invitation.id)
        assert stored.status == InvitationStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_application_universities_round_trip(self, integration_env):
        """Should keep the university order of an application."""
        # Arrange
        application_repo = await integration_env.get(ApplicationRepository)
        application = await _application(integration_env)

        # Act
        found = await application_repo.find_by_id(application.id)

        # Assert
        assert found.university_ids == application.university_ids
