"""
Contact scoring package.

Provides the profile-snapshot scorer (default) and the activity-based
variant, selected through ``ScoringModel``.
"""

from .activity import ActivityScoringService, activity_scoring_service
from .selector import ScoringModel, score_contacts
from .service import TIERS, ContactScoringService, contact_scoring_service

__all__ = [
    "ActivityScoringService",
    "ContactScoringService",
    "ScoringModel",
    "TIERS",
    "activity_scoring_service",
    "contact_scoring_service",
    "score_contacts",
]
