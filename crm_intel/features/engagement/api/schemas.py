"""
Request models for the engagement analytics routes.

Callers post whole, already-deserialised snapshots; these models validate
the shape and convert into the domain dataclasses the pipeline reads.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from crm_intel.features.engagement.domain import (
    ActivityEvent,
    Campaign,
    CampaignStats,
    Contact,
    ContactList,
    EngagementSnapshot,
)

# Platform ids arrive as ints or strings depending on the endpoint that cached them
PlatformId = Annotated[str, BeforeValidator(lambda v: str(v) if isinstance(v, int) else v)]


class ContactIn(BaseModel):
    contact_id: PlatformId
    email: str
    list_ids: list[PlatformId] = Field(default_factory=list)
    attributes: dict[str, Any] = Field(default_factory=dict)
    email_blacklisted: bool = False
    sms_blacklisted: bool = False
    modified_at: datetime | None = None
    created_at: datetime | None = None

    def to_domain(self) -> Contact:
        return Contact(
            contact_id=self.contact_id,
            email=self.email,
            list_ids=frozenset(self.list_ids),
            attributes=dict(self.attributes),
            email_blacklisted=self.email_blacklisted,
            sms_blacklisted=self.sms_blacklisted,
            modified_at=self.modified_at,
            created_at=self.created_at,
        )


class ContactListIn(BaseModel):
    list_id: PlatformId
    name: str
    total_subscribers: int = Field(0, ge=0)

    def to_domain(self) -> ContactList:
        return ContactList(
            list_id=self.list_id, name=self.name, total_subscribers=self.total_subscribers
        )


class CampaignStatsIn(BaseModel):
    sent: int = Field(0, ge=0)
    delivered: int = Field(0, ge=0)
    unique_opens: int = Field(0, ge=0)
    unique_clicks: int = Field(0, ge=0)
    hard_bounces: int = Field(0, ge=0)
    soft_bounces: int = Field(0, ge=0)
    unsubscribes: int = Field(0, ge=0)
    spam_reports: int = Field(0, ge=0)


class CampaignIn(BaseModel):
    campaign_id: PlatformId
    name: str
    subject: str | None = None
    status: str = "draft"
    sent_date: datetime | None = None
    stats: CampaignStatsIn = Field(default_factory=CampaignStatsIn)
    open_rate: float = 0.0
    click_rate: float = 0.0
    bounce_rate: float = 0.0

    def to_domain(self) -> Campaign:
        return Campaign(
            campaign_id=self.campaign_id,
            name=self.name,
            subject=self.subject,
            status=self.status,
            sent_date=self.sent_date,
            stats=CampaignStats(**self.stats.model_dump()),
            open_rate=self.open_rate,
            click_rate=self.click_rate,
            bounce_rate=self.bounce_rate,
        )


class ActivityEventIn(BaseModel):
    campaign_id: PlatformId
    campaign_name: str | None = None
    contact_email: str | None = None
    opened_at: datetime | None = None
    clicked_at: datetime | None = None

    def to_domain(self) -> ActivityEvent:
        return ActivityEvent(
            campaign_id=self.campaign_id,
            campaign_name=self.campaign_name,
            contact_email=self.contact_email,
            opened_at=self.opened_at,
            clicked_at=self.clicked_at,
        )


class ContactsRequest(BaseModel):
    contacts: list[ContactIn]

    def domain_contacts(self) -> list[Contact]:
        return [c.to_domain() for c in self.contacts]


class ScoredContactsRequest(ContactsRequest):
    events: list[ActivityEventIn] = Field(default_factory=list)


class ListHealthRequest(BaseModel):
    lists: list[ContactListIn]
    contacts: list[ContactIn] = Field(default_factory=list)


class CampaignBenchmarkRequest(BaseModel):
    campaigns: list[CampaignIn]


class TimeOfDayRequest(BaseModel):
    events: list[ActivityEventIn]


class ActivityScoringRequest(BaseModel):
    contacts: list[ContactIn]
    events: list[ActivityEventIn] = Field(default_factory=list)


class DashboardRequest(BaseModel):
    contacts: list[ContactIn] = Field(default_factory=list)
    lists: list[ContactListIn] = Field(default_factory=list)
    campaigns: list[CampaignIn] = Field(default_factory=list)
    events: list[ActivityEventIn] = Field(default_factory=list)

    def to_snapshot(self) -> EngagementSnapshot:
        return EngagementSnapshot(
            contacts=[c.to_domain() for c in self.contacts],
            lists=[item.to_domain() for item in self.lists],
            campaigns=[c.to_domain() for c in self.campaigns],
            events=[e.to_domain() for e in self.events],
        )
