"""
Domain subpackage for the engagement intelligence feature.
"""

from .errors import SnapshotContractError, require_collection
from .models import (
    ActivityEvent,
    Campaign,
    CampaignStats,
    Contact,
    ContactList,
    EngagementSnapshot,
)

__all__ = [
    "ActivityEvent",
    "Campaign",
    "CampaignStats",
    "Contact",
    "ContactList",
    "EngagementSnapshot",
    "SnapshotContractError",
    "require_collection",
]
