"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from letters.domain.model import Invitation
from letters.domain.repository import InvitationRepository
from letters.domain.value import (
    ACTIVE_STATUSES,
    ApplicationId,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    RecommenderEmail,
)
from letters.persistence.mappers import invitation_to_dict, row_to_invitation
from letters.persistence.tables import invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository.

    Uniqueness of active invitations is enforced by the partial unique index
    ``idx_invitations_unique_active_email``.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        stmt = select(invitations_table).where(invitations_table.c.token == token.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_active(
        self, application_id: ApplicationId, email: RecommenderEmail
    ) -> Optional[Invitation]:
        """Find the invited/confirmed invitation for an application and email.

        Matches the expression used by the unique index so the lookup is
        index-backed.
        """
        stmt = select(invitations_table).where(
            and_(
                invitations_table.c.application_id == application_id,
                func.lower(invitations_table.c.recommender_email) == email.root,
                invitations_table.c.status.in_([s.value for s in ACTIVE_STATUSES]),
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_application(
        self, application_id: ApplicationId
    ) -> list[Invitation]:
        stmt = (
            select(invitations_table)
            .where(invitations_table.c.application_id == application_id)
            .order_by(
                invitations_table.c.invited_at.desc(), invitations_table.c.id.desc()
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def insert(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Runs inside a savepoint so a unique violation leaves the surrounding
        transaction usable.

        Raises:
            IntegrityError: If the active-email index or token constraint fires
        """
        async with self.session.begin_nested():
            stmt = insert(invitations_table).values(**invitation_to_dict(invitation))
            await self.session.execute(stmt)
        return invitation

    async def compare_and_set(
        self, invitation: Invitation, expected_status: InvitationStatus
    ) -> bool:
        values = invitation_to_dict(invitation)
        values.pop("id")
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.id == invitation.id,
                    invitations_table.c.status == expected_status.value,
                )
            )
            .values(**values)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def expire_overdue(self, now: datetime) -> int:
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.status == InvitationStatus.INVITED.value,
                    invitations_table.c.invitation_expires_at < now,
                )
            )
            .values(status=InvitationStatus.EXPIRED.value)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
