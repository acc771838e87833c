"""Unit tests for the in-memory unit of work."""

import asyncio
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from letters.domain.model import Invitation
from letters.domain.value import (
    ApplicationId,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    RecommenderEmail,
)
from letters.persistence.repository.inmemory import (
    InMemoryInvitationRepository,
    InMemoryJournal,
    InMemoryUnitOfWork,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _invitation(email="prof@university.edu"):
    return Invitation(
        id=InvitationId(uuid4()),
        application_id=ApplicationId(uuid4()),
        recommender_email=RecommenderEmail(email),
        token=InvitationToken(uuid4().hex),
        invited_at=NOW,
        invitation_expires_at=NOW + timedelta(days=7),
        last_sent_at=NOW,
    )


@pytest.fixture
def journal():
    return InMemoryJournal()


class TestInMemoryUnitOfWork:
    """Commit keeps writes, rollback undoes the ones since the last commit."""

    @pytest.mark.asyncio
    async def test_rollback_undoes_uncommitted_writes(self, journal):
        """Should restore the status and drop the insert made after commit."""
        # Arrange
        repo = InMemoryInvitationRepository(journal)
        unit_of_work = InMemoryUnitOfWork(journal)
        kept = await repo.insert(_invitation())
        await unit_of_work.commit()

        await repo.compare_and_set(
            kept.model_copy(update={"status": InvitationStatus.CONFIRMED}),
            expected_status=InvitationStatus.INVITED,
        )
        dropped = await repo.insert(_invitation("other@university.edu"))

        # Act
        await unit_of_work.rollback()

        # Assert
        assert (await repo.find_by_id(kept.id)).status == InvitationStatus.INVITED
        assert await repo.find_by_id(dropped.id) is None
        assert unit_of_work.rollbacks == 1

    @pytest.mark.asyncio
    async def test_rollback_after_commit_is_noop(self, journal):
        """Should keep everything already committed."""
        # Arrange
        repo = InMemoryInvitationRepository(journal)
        unit_of_work = InMemoryUnitOfWork(journal)
        invitation = await repo.insert(_invitation())
        await unit_of_work.commit()

        # Act
        await unit_of_work.rollback()

        # Assert
        assert await repo.find_by_id(invitation.id) == invitation

    @pytest.mark.asyncio
    async def test_rollback_leaves_other_tasks_alone(self, journal):
        """Should only undo writes made by the rolling-back task."""
        # Arrange
        repo = InMemoryInvitationRepository(journal)
        unit_of_work = InMemoryUnitOfWork(journal)
        mine = await repo.insert(_invitation())
        theirs = await asyncio.create_task(
            repo.insert(_invitation("other@university.edu"))
        )

        # Act
        await unit_of_work.rollback()

        # Assert
        assert await repo.find_by_id(mine.id) is None
        assert await repo.find_by_id(theirs.id) == theirs

    @pytest.mark.asyncio
    async def test_rollback_on_error_reraises(self, journal):
        """Should roll back and let the error through."""
        # Arrange
        repo = InMemoryInvitationRepository(journal)
        unit_of_work = InMemoryUnitOfWork(journal)
        invitation = _invitation()

        # Act & Assert
        with pytest.raises(RuntimeError):
            async with unit_of_work.rollback_on_error():
                await repo.insert(invitation)
                raise RuntimeError("boom")

        assert unit_of_work.rollbacks == 1
        assert await repo.find_by_id(invitation.id) is None
