"""Strongly typed identifiers for the letters domain.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

StudentId = NewType("StudentId", UUID)
ApplicationId = NewType("ApplicationId", UUID)
UniversityId = NewType("UniversityId", UUID)
InvitationId = NewType("InvitationId", UUID)
RecommenderProfileId = NewType("RecommenderProfileId", UUID)
