"""
Domain models for the engagement intelligence feature.

These dataclasses describe the cached platform entities the scorers read.
They are owned by the ingestion layer; the engine never mutates them.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from crm_intel.features.engagement.pipeline.recency import as_utc


@dataclass(slots=True)
class Contact:
    """A cached platform contact (one per email per tenant)."""

    contact_id: str
    email: str
    list_ids: frozenset[str] = frozenset()
    attributes: Mapping[str, str | None] = field(default_factory=dict)
    email_blacklisted: bool = False
    sms_blacklisted: bool = False
    modified_at: datetime | None = None
    created_at: datetime | None = None


@dataclass(slots=True)
class ContactList:
    """A cached platform list. Members are resolved through Contact.list_ids."""

    list_id: str
    name: str
    total_subscribers: int = 0


@dataclass(slots=True)
class CampaignStats:
    sent: int = 0
    delivered: int = 0
    unique_opens: int = 0
    unique_clicks: int = 0
    hard_bounces: int = 0
    soft_bounces: int = 0
    unsubscribes: int = 0
    spam_reports: int = 0


@dataclass(slots=True)
class Campaign:
    """A cached campaign. Rates are percentages precomputed at ingestion."""

    campaign_id: str
    name: str
    subject: str | None = None
    status: str = "draft"
    sent_date: datetime | None = None
    stats: CampaignStats = field(default_factory=CampaignStats)
    open_rate: float = 0.0
    click_rate: float = 0.0
    bounce_rate: float = 0.0


@dataclass(slots=True)
class ActivityEvent:
    """One (contact, campaign) engagement row appended by the webhook feed."""

    campaign_id: str
    campaign_name: str | None = None
    contact_email: str | None = None
    opened_at: datetime | None = None
    clicked_at: datetime | None = None

    @property
    def last_engaged_at(self) -> datetime | None:
        if self.opened_at and self.clicked_at:
            return max(self.opened_at, self.clicked_at, key=as_utc)
        return self.opened_at or self.clicked_at


@dataclass(slots=True)
class EngagementSnapshot:
    """Everything the dashboard report needs for one tenant."""

    contacts: list[Contact] = field(default_factory=list)
    lists: list[ContactList] = field(default_factory=list)
    campaigns: list[Campaign] = field(default_factory=list)
    events: list[ActivityEvent] = field(default_factory=list)
