"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from letters.domain.model import Application, Invitation, RecommenderProfile
from letters.domain.value import (
    ApplicationId,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    ProgramType,
    RecommenderEmail,
    RecommenderProfileId,
    StudentId,
    UniversityId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_application(
    row: Dict[str, Any], university_ids: Iterable[Any] = ()
) -> Application:
    """Convert database row to Application domain model.

    Args:
        row: Database row as dict
        university_ids: Target universities, already in position order

    Returns:
        Application domain model
    """
    return Application(
        id=ApplicationId(_uuid(row["id"])),
        student_id=StudentId(_uuid(row["student_id"])),
        legal_name=row["legal_name"],
        program_type=ProgramType(row["program_type"]),
        application_term=row["application_term"],
        university_ids=tuple(UniversityId(_uuid(u)) for u in university_ids),
        created_at=row["created_at"],
    )


def application_to_dict(application: Application) -> Dict[str, Any]:
    """Convert Application domain model to database dict.

    The university set is stored separately and is not part of the result.
    """
    data = application.model_dump(exclude={"university_ids"})
    data["program_type"] = application.program_type.value
    return data


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        application_id=ApplicationId(_uuid(row["application_id"])),
        recommender_email=RecommenderEmail(row["recommender_email"]),
        token=InvitationToken(row["token"]),
        status=InvitationStatus(row["status"]),
        custom_message=row.get("custom_message"),
        invited_at=row["invited_at"],
        invitation_expires_at=row["invitation_expires_at"],
        last_sent_at=row["last_sent_at"],
        resend_count=row.get("resend_count", 0),
        confirmed_at=row.get("confirmed_at"),
        recommender_profile_id=RecommenderProfileId(
            _uuid(row["recommender_profile_id"])
        )
        if row.get("recommender_profile_id")
        else None,
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict.

    Args:
        invitation: Invitation domain model

    Returns:
        Dict suitable for database insertion/update
    """
    # Email and token wrappers dump to their plain string
    data = invitation.model_dump()
    data["status"] = invitation.status.value
    return data


def row_to_recommender_profile(row: Dict[str, Any]) -> RecommenderProfile:
    """Convert database row to RecommenderProfile domain model."""
    return RecommenderProfile(
        id=RecommenderProfileId(_uuid(row["id"])),
        invitation_id=InvitationId(_uuid(row["invitation_id"])),
        application_id=ApplicationId(_uuid(row["application_id"])),
        email=RecommenderEmail(row["email"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        title=row["title"],
        organization=row["organization"],
        relationship_duration=row["relationship_duration"],
        relationship_type=row["relationship_type"],
        mobile_phone=row.get("mobile_phone"),
        password_hash=row["password_hash"],
        university_ids=tuple(
            UniversityId(_uuid(u)) for u in row.get("university_ids") or ()
        ),
        confirmed_at=row["confirmed_at"],
    )


def recommender_profile_to_dict(profile: RecommenderProfile) -> Dict[str, Any]:
    """Convert RecommenderProfile domain model to database dict."""
    data = profile.model_dump()
    data["university_ids"] = list(profile.university_ids)
    return data
