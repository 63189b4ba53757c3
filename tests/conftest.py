from datetime import UTC, datetime, timedelta

import pytest

from crm_intel.features.engagement.domain import (
    ActivityEvent,
    Campaign,
    CampaignStats,
    Contact,
)

# A Wednesday afternoon; every unit test evaluates against this instant.
FIXED_NOW = datetime(2024, 6, 12, 15, 30, tzinfo=UTC)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def make_contact(now):
    counter = {"next": 1}

    def _make(days_ago: float | None = 10, **overrides) -> Contact:
        contact_id = str(counter["next"])
        counter["next"] += 1
        fields = {
            "contact_id": contact_id,
            "email": f"contact{contact_id}@example.com",
            "list_ids": frozenset({"1"}),
            "attributes": {},
            "email_blacklisted": False,
            "modified_at": None if days_ago is None else now - timedelta(days=days_ago),
            "created_at": now - timedelta(days=400),
        }
        fields.update(overrides)
        return Contact(**fields)

    return _make


@pytest.fixture
def make_campaign():
    counter = {"next": 1}

    def _make(
        open_rate: float = 20.0,
        click_rate: float = 2.0,
        bounce_rate: float = 1.0,
        status: str = "sent",
        **stats,
    ) -> Campaign:
        campaign_id = str(counter["next"])
        counter["next"] += 1
        stats_fields = {"sent": 1000, "delivered": 990}
        stats_fields.update(stats)
        return Campaign(
            campaign_id=campaign_id,
            name=f"Campaign {campaign_id}",
            subject=f"Subject {campaign_id}",
            status=status,
            sent_date=FIXED_NOW - timedelta(days=int(campaign_id)),
            stats=CampaignStats(**stats_fields),
            open_rate=open_rate,
            click_rate=click_rate,
            bounce_rate=bounce_rate,
        )

    return _make


@pytest.fixture
def make_event():
    def _make(
        opened_at: datetime | None = None,
        clicked_at: datetime | None = None,
        contact_email: str | None = "contact@example.com",
        campaign_id: str = "c-1",
    ) -> ActivityEvent:
        return ActivityEvent(
            campaign_id=campaign_id,
            campaign_name="Spring launch",
            contact_email=contact_email,
            opened_at=opened_at,
            clicked_at=clicked_at,
        )

    return _make
