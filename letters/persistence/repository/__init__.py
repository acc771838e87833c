"""PostgreSQL repository implementations."""

from letters.persistence.repository.application import PostgresApplicationRepository
from letters.persistence.repository.invitation import PostgresInvitationRepository
from letters.persistence.repository.recommender_profile import (
    PostgresRecommenderProfileRepository,
)
from letters.persistence.repository.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "PostgresApplicationRepository",
    "PostgresInvitationRepository",
    "PostgresRecommenderProfileRepository",
    "SqlAlchemyUnitOfWork",
]
