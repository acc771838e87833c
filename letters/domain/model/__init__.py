"""Domain model entities for letters."""

from letters.domain.model.application import Application
from letters.domain.model.invitation import Invitation
from letters.domain.model.recommender_profile import RecommenderProfile

__all__ = [
    "Application",
    "Invitation",
    "RecommenderProfile",
]
