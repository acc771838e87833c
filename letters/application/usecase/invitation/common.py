"""Shared models and helpers for invitation use cases."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from letters.config import Settings
from letters.domain.error import ValidationError
from letters.domain.model import Application, Invitation, RecommenderProfile
from letters.domain.repository import UnitOfWork
from letters.domain.service import InvitationStateMachine
from letters.domain.value import InvitationStatus


class RecommenderSummary(BaseModel):
    """Who confirmed an invitation, as the student sees them."""

    profile_id: UUID
    first_name: str
    last_name: str
    title: str
    organization: str
    relationship_duration: str
    relationship_type: str
    mobile_phone: str | None = None

    @classmethod
    def from_profile(cls, profile: RecommenderProfile) -> "RecommenderSummary":
        return cls(
            profile_id=profile.id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            title=profile.title,
            organization=profile.organization,
            relationship_duration=profile.relationship_duration,
            relationship_type=profile.relationship_type,
            mobile_phone=profile.mobile_phone,
        )


class InvitationItem(BaseModel):
    """Invitation as shown to the owning student."""

    invitation_id: UUID
    application_id: UUID
    recommender_email: str
    status: InvitationStatus
    custom_message: str | None = None
    invited_at: datetime
    invitation_expires_at: datetime
    last_sent_at: datetime
    resend_count: int
    confirmed_at: datetime | None = None
    recommender_profile_id: UUID | None = None
    recommender: RecommenderSummary | None = None

    @classmethod
    def from_invitation(
        cls,
        invitation: Invitation,
        now: datetime,
        profile: RecommenderProfile | None = None,
    ) -> "InvitationItem":
        """Build the item, reporting an overdue invitation as expired.

        ``profile`` is the recommender who confirmed, if any.
        """
        return cls(
            invitation_id=invitation.id,
            application_id=invitation.application_id,
            recommender_email=invitation.recommender_email.root,
            status=invitation.effective_status(now),
            custom_message=invitation.custom_message,
            invited_at=invitation.invited_at,
            invitation_expires_at=invitation.invitation_expires_at,
            last_sent_at=invitation.last_sent_at,
            resend_count=invitation.resend_count,
            confirmed_at=invitation.confirmed_at,
            recommender_profile_id=invitation.recommender_profile_id,
            recommender=RecommenderSummary.from_profile(profile) if profile else None,
        )


def invitation_url(settings: Settings, invitation: Invitation) -> str:
    """Link the recommender follows to review and confirm."""
    return f"{settings.frontend_url}/invitations/{invitation.token.root}"


def invitation_payload(
    settings: Settings, application: Application, invitation: Invitation
) -> dict:
    """Template data for invitation and resend emails."""
    return {
        "invitation_url": invitation_url(settings, invitation),
        "student_name": application.legal_name,
        "program_type": application.program_type.value,
        "application_term": application.application_term,
        "university_count": len(application.university_ids),
        "custom_message": invitation.custom_message,
        "expires_at": invitation.invitation_expires_at.isoformat(),
    }


def clean_custom_message(settings: Settings, message: str | None) -> str | None:
    """Trim the student's note; blank becomes None.

    Raises:
        ValidationError: If the note exceeds the configured length
    """
    if message is None:
        return None
    message = message.strip()
    limit = settings.invitations.custom_message_max_length
    if len(message) > limit:
        raise ValidationError(
            "Custom message too long",
            errors=[
                {
                    "field": "custom_message",
                    "message": f"Must be at most {limit} characters",
                }
            ],
        )
    return message or None


async def persist_expiry(
    state_machine: InvitationStateMachine,
    unit_of_work: UnitOfWork,
    invitation: Invitation,
) -> Invitation:
    """Apply lazy expiry and commit it on its own.

    The expiry stays recorded even when the rest of the request fails and
    rolls back.
    """
    refreshed = await state_machine.refresh(invitation)
    if refreshed is not invitation:
        await unit_of_work.commit()
    return refreshed
