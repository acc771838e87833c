"""PostgreSQL implementation of Application repository."""

from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from letters.domain.model import Application
from letters.domain.repository import ApplicationRepository
from letters.domain.value import ApplicationId
from letters.persistence.mappers import application_to_dict, row_to_application
from letters.persistence.tables import (
    application_universities_table,
    applications_table,
)


class PostgresApplicationRepository(ApplicationRepository):
    """PostgreSQL implementation of ApplicationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, application_id: ApplicationId) -> Optional[Application]:
        """Find an application by ID, with its universities in order."""
        stmt = select(applications_table).where(
            applications_table.c.id == application_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None

        universities_stmt = (
            select(application_universities_table.c.university_id)
            .where(application_universities_table.c.application_id == application_id)
            .order_by(application_universities_table.c.position)
        )
        universities = await self.session.execute(universities_stmt)
        return row_to_application(dict(row), universities.scalars().all())

    async def save(self, application: Application) -> Application:
        """Save an application (create or update).

        The university set is replaced wholesale.
        """
        application_dict = application_to_dict(application)

        existing = await self.session.execute(
            select(applications_table.c.id).where(
                applications_table.c.id == application.id
            )
        )
        if existing.first():
            stmt = (
                update(applications_table)
                .where(applications_table.c.id == application.id)
                .values(**application_dict)
            )
        else:
            stmt = insert(applications_table).values(**application_dict)
        await self.session.execute(stmt)

        await self.session.execute(
            delete(application_universities_table).where(
                application_universities_table.c.application_id == application.id
            )
        )
        if application.university_ids:
            await self.session.execute(
                insert(application_universities_table),
                [
                    {
                        "application_id": application.id,
                        "university_id": university_id,
                        "position": position,
                    }
                    for position, university_id in enumerate(application.university_ids)
                ],
            )

        await self.session.flush()
        return application
