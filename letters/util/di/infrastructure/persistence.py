"""Persistence providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from letters.config import Settings
from letters.domain.repository import (
    ApplicationRepository,
    InvitationRepository,
    RecommenderProfileRepository,
    UnitOfWork,
)
from letters.persistence.database import (
    create_engine,
    create_session_factory,
    request_session,
)
from letters.persistence.repository import (
    PostgresApplicationRepository,
    PostgresInvitationRepository,
    PostgresRecommenderProfileRepository,
    SqlAlchemyUnitOfWork,
)
from letters.util.di.base import ProviderBase
from letters.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL-backed repositories sharing one session per request."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        async with request_session(session_factory) as session:
            yield session

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        return SqlAlchemyUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_application_repository(
        self, session: AsyncSession
    ) -> ApplicationRepository:
        return PostgresApplicationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(self, session: AsyncSession) -> InvitationRepository:
        return PostgresInvitationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_recommender_profile_repository(
        self, session: AsyncSession
    ) -> RecommenderProfileRepository:
        return PostgresRecommenderProfileRepository(session)
