"""Invitation entity.

An invitation is a student's request to one recommender, addressed by
professional email, to confirm a profile and write a letter for every
university on the application.
"""

from datetime import datetime
from typing import Optional

from letters.domain.model.common import DomainModel
from letters.domain.value import (
    ApplicationId,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    RecommenderEmail,
    RecommenderProfileId,
)


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - At most one invited/confirmed invitation per (application, email)
    - Only ``invited`` invitations can be confirmed, resent or deleted
    - Expiry is judged against ``invitation_expires_at`` on the server clock
    - The profile back-reference is set only when confirmed
    """

    id: InvitationId
    application_id: ApplicationId
    recommender_email: RecommenderEmail
    token: InvitationToken
    status: InvitationStatus = InvitationStatus.INVITED
    custom_message: Optional[str] = None
    invited_at: datetime
    invitation_expires_at: datetime
    last_sent_at: datetime
    resend_count: int = 0
    confirmed_at: Optional[datetime] = None
    recommender_profile_id: Optional[RecommenderProfileId] = None

    def is_overdue(self, now: datetime) -> bool:
        """True once the confirmation window has passed."""
        return now > self.invitation_expires_at

    def effective_status(self, now: datetime) -> InvitationStatus:
        """Status as any caller should see it right now.

        An ``invited`` row past its expiry reads as ``expired`` even before
        the state change is persisted.
        """
        if self.status == InvitationStatus.INVITED and self.is_overdue(now):
            return InvitationStatus.EXPIRED
        return self.status
