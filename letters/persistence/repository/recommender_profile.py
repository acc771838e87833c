"""PostgreSQL implementation of RecommenderProfile repository."""

from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from letters.domain.model import RecommenderProfile
from letters.domain.repository import RecommenderProfileRepository
from letters.domain.value import InvitationId, RecommenderProfileId
from letters.persistence.mappers import (
    recommender_profile_to_dict,
    row_to_recommender_profile,
)
from letters.persistence.tables import recommender_profiles_table


class PostgresRecommenderProfileRepository(RecommenderProfileRepository):
    """PostgreSQL implementation of RecommenderProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(
        self, profile_id: RecommenderProfileId
    ) -> Optional[RecommenderProfile]:
        stmt = select(recommender_profiles_table).where(
            recommender_profiles_table.c.id == profile_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_recommender_profile(dict(row)) if row else None

    async def find_by_invitation_id(
        self, invitation_id: InvitationId
    ) -> Optional[RecommenderProfile]:
        stmt = select(recommender_profiles_table).where(
            recommender_profiles_table.c.invitation_id == invitation_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_recommender_profile(dict(row)) if row else None

    async def insert(self, profile: RecommenderProfile) -> RecommenderProfile:
        """Insert a new profile.

        Raises:
            IntegrityError: If the invitation already has a profile
        """
        stmt = insert(recommender_profiles_table).values(
            **recommender_profile_to_dict(profile)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return profile
