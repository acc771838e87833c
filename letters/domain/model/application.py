"""Application entity.

An application is one student's request cycle: the program they are applying
to and the universities that should receive every recommendation.
"""

from datetime import datetime

from pydantic import Field, field_validator

from letters.domain.model.common import DomainModel
from letters.domain.value import ApplicationId, ProgramType, StudentId, UniversityId

MAX_UNIVERSITIES = 20


class Application(DomainModel):
    """Application entity.

    The invitation workflow only reads applications. Mutation belongs to the
    owning student's application-management flow.
    """

    id: ApplicationId
    student_id: StudentId
    legal_name: str = Field(min_length=1, max_length=255)
    program_type: ProgramType
    application_term: str = Field(min_length=1, max_length=50)
    university_ids: tuple[UniversityId, ...] = ()
    created_at: datetime

    @field_validator("university_ids")
    @classmethod
    def validate_university_ids(
        cls, v: tuple[UniversityId, ...]
    ) -> tuple[UniversityId, ...]:
        """Drop duplicates (keeping first occurrence) and cap the set size."""
        unique = tuple(dict.fromkeys(v))
        if len(unique) > MAX_UNIVERSITIES:
            raise ValueError(
                f"An application can target at most {MAX_UNIVERSITIES} universities"
            )
        return unique

    def is_owned_by(self, student_id: StudentId) -> bool:
        return self.student_id == student_id
