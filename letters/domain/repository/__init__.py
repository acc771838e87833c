"""Repository interfaces for the letters domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from letters.domain.repository.application import ApplicationRepository
from letters.domain.repository.invitation import InvitationRepository
from letters.domain.repository.recommender_profile import (
    RecommenderProfileRepository,
)
from letters.domain.repository.unit_of_work import UnitOfWork

__all__ = [
    "ApplicationRepository",
    "InvitationRepository",
    "RecommenderProfileRepository",
    "UnitOfWork",
]
