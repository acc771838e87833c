"""Domain value objects for letters.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator, validate_email

from letters.domain.value.common import RootValueObject


class InvitationStatus(str, Enum):
    """Lifecycle status of a recommender invitation.

    ``invited`` is the only non-terminal state. The transition table below is
    the single source of truth for which moves are legal.
    """

    INVITED = "invited"
    CONFIRMED = "confirmed"
    EXPIRED = "expired"
    DELETED = "deleted"

    @property
    def is_active(self) -> bool:
        """Active invitations count against the one-per-email rule."""
        return self in ACTIVE_STATUSES

    @property
    def is_terminal(self) -> bool:
        return not TRANSITIONS[self]

    def can_transition_to(self, target: "InvitationStatus") -> bool:
        return target in TRANSITIONS[self]


TRANSITIONS: dict[InvitationStatus, frozenset[InvitationStatus]] = {
    InvitationStatus.INVITED: frozenset(
        {
            InvitationStatus.CONFIRMED,
            InvitationStatus.EXPIRED,
            InvitationStatus.DELETED,
        }
    ),
    InvitationStatus.CONFIRMED: frozenset(),
    InvitationStatus.EXPIRED: frozenset(),
    InvitationStatus.DELETED: frozenset(),
}

ACTIVE_STATUSES: frozenset[InvitationStatus] = frozenset(
    {InvitationStatus.INVITED, InvitationStatus.CONFIRMED}
)


class ProgramType(str, Enum):
    """Kind of program the student is applying to."""

    UNDERGRADUATE = "undergraduate"
    GRADUATE = "graduate"
    MBA = "mba"
    LLM = "llm"
    MEDICAL = "medical"
    PHD = "phd"


class NotificationKind(str, Enum):
    """Notifications the invitation workflow asks the dispatcher to deliver."""

    INVITATION = "invitation"
    INVITATION_SENT = "invitation_sent"  # To the student
    RESEND = "resend"
    CONFIRMATION = "confirmation"


TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]{16,255}$")


class InvitationToken(RootValueObject[str]):
    """Opaque URL-safe invitation token.

    Carries no claims: all authority comes from the invitation row it
    indexes.
    """

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        if not TOKEN_PATTERN.match(v):
            raise ValueError("Token must be 16-255 URL-safe characters")
        return v

    @property
    def redacted(self) -> str:
        """Prefix safe to put in logs."""
        return self.root[:8] + "..."


class RecommenderEmail(RootValueObject[str]):
    """Recommender's professional email, trimmed and lower-cased.

    Two emails differing only in case or surrounding whitespace are the same
    recommender.
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        if len(v) > 255:
            raise ValueError("Email must be at most 255 characters")
        _, email = validate_email(v)
        return email.lower()
