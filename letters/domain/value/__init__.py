"""Domain value objects for letters."""

from letters.domain.value.identifiers import (
    ApplicationId,
    InvitationId,
    RecommenderProfileId,
    StudentId,
    UniversityId,
)
from letters.domain.value.types import (
    ACTIVE_STATUSES,
    InvitationStatus,
    InvitationToken,
    NotificationKind,
    ProgramType,
    RecommenderEmail,
)

__all__ = [
    # Identifiers
    "ApplicationId",
    "InvitationId",
    "RecommenderProfileId",
    "StudentId",
    "UniversityId",
    # Types
    "ACTIVE_STATUSES",
    "InvitationStatus",
    "InvitationToken",
    "NotificationKind",
    "ProgramType",
    "RecommenderEmail",
]
