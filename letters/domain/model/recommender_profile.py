"""Recommender profile entity."""

from datetime import datetime
from typing import Optional

from letters.domain.model.common import DomainModel
from letters.domain.value import (
    ApplicationId,
    InvitationId,
    RecommenderEmail,
    RecommenderProfileId,
    UniversityId,
)


class RecommenderProfile(DomainModel):
    """Recommender identity created when an invitation is confirmed.

    ``university_ids`` is a snapshot of the application's targets at
    confirmation time. Later edits to the application do not change the
    universities this recommender submits to.
    """

    id: RecommenderProfileId
    invitation_id: InvitationId
    application_id: ApplicationId
    email: RecommenderEmail
    first_name: str
    last_name: str
    title: str
    organization: str
    relationship_duration: str
    relationship_type: str
    mobile_phone: Optional[str] = None
    password_hash: str
    university_ids: tuple[UniversityId, ...] = ()
    confirmed_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
