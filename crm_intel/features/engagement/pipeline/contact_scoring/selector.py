"""
Scoring model selection.

The profile-snapshot model is the default; the activity model needs the
event feed and is picked explicitly.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from enum import Enum

from crm_intel.features.engagement.domain import ActivityEvent, Contact, require_collection

from .activity import ActivityScoredContact, activity_scoring_service
from .service import ScoredContact, contact_scoring_service


class ScoringModel(str, Enum):
    PROFILE = "profile"
    ACTIVITY = "activity"


def score_contacts(
    contacts: Iterable[Contact],
    events: Iterable[ActivityEvent] = (),
    model: ScoringModel = ScoringModel.PROFILE,
    limit: int | None = None,
    now: datetime | None = None,
) -> list[ScoredContact] | list[ActivityScoredContact]:
    """Score contacts with the chosen model. ``limit`` truncates the input first."""
    model = ScoringModel(model)
    if model is ScoringModel.ACTIVITY:
        snapshot = require_collection(contacts, "contacts")
        if limit is not None:
            snapshot = snapshot[:limit]
        return activity_scoring_service.score_contacts(snapshot, events, now=now)
    return contact_scoring_service.score_contacts(contacts, limit=limit, now=now)
