"""
Activity-based contact scoring.

Alternate model driven by counted open/click events from the webhook feed
instead of the profile snapshot. Only meaningful once activity events are
being ingested, so the profile model stays the default.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from crm_intel.features.engagement.domain import (
    ActivityEvent,
    Contact,
    require_collection,
)
from crm_intel.features.engagement.pipeline.recency import as_utc, days_since
from crm_intel.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

ACTIVITY_TIERS = ("Champion", "Loyal", "Potential", "At-Risk", "Dormant")


@dataclass(slots=True)
class ActivitySummary:
    contact_email: str
    opens_30d: int = 0
    clicks_30d: int = 0
    last_activity_at: datetime | None = None


@dataclass(slots=True)
class ActivityScoredContact:
    contact_id: str
    email: str
    score: int
    tier: str
    opens: int
    clicks: int


def _key(email: str | None) -> str:
    return (email or "").strip().lower()


class ActivityScoringService:
    WINDOW_DAYS = 30
    RECENT_DAYS = 7

    def summarize(
        self, events: Iterable[ActivityEvent], now: datetime | None = None
    ) -> dict[str, ActivitySummary]:
        """Roll events up per contact email (lower-cased)."""
        snapshot = require_collection(events, "events")
        reference = now or datetime.now(UTC)
        window_start = reference - timedelta(days=self.WINDOW_DAYS)

        summaries: dict[str, ActivitySummary] = {}
        for event in snapshot:
            key = _key(event.contact_email)
            if not key:
                continue
            summary = summaries.setdefault(key, ActivitySummary(contact_email=key))
            if event.opened_at and as_utc(event.opened_at) >= as_utc(window_start):
                summary.opens_30d += 1
            if event.clicked_at and as_utc(event.clicked_at) >= as_utc(window_start):
                summary.clicks_30d += 1
            engaged_at = event.last_engaged_at
            if engaged_at and (
                summary.last_activity_at is None
                or as_utc(engaged_at) > as_utc(summary.last_activity_at)
            ):
                summary.last_activity_at = engaged_at
        return summaries

    def score_activity(self, summary: ActivitySummary | None, now: datetime | None = None) -> int:
        if summary is None:
            summary = ActivitySummary(contact_email="")

        score = 50
        score += min(20, summary.opens_30d * 2)
        score += min(25, summary.clicks_30d * 5)

        inactive_days = days_since(summary.last_activity_at, now)
        if summary.last_activity_at is not None and inactive_days <= self.RECENT_DAYS:
            score += 10

        if inactive_days > 90:
            score -= 30
        elif inactive_days > 60:
            score -= 20
        elif inactive_days > 30:
            score -= 10

        return max(0, min(100, round(score)))

    @staticmethod
    def activity_tier(score: int) -> str:
        if score >= 80:
            return "Champion"
        if score >= 60:
            return "Loyal"
        if score >= 40:
            return "Potential"
        if score >= 20:
            return "At-Risk"
        return "Dormant"

    def score_contacts(
        self,
        contacts: Iterable[Contact],
        events: Iterable[ActivityEvent],
        now: datetime | None = None,
    ) -> list[ActivityScoredContact]:
        """Score every contact, including those with no events at all."""
        snapshot = require_collection(contacts, "contacts")
        summaries = self.summarize(events, now)

        results = []
        for contact in snapshot:
            summary = summaries.get(_key(contact.email))
            score = self.score_activity(summary, now)
            results.append(
                ActivityScoredContact(
                    contact_id=contact.contact_id,
                    email=contact.email,
                    score=score,
                    tier=self.activity_tier(score),
                    opens=summary.opens_30d if summary else 0,
                    clicks=summary.clicks_30d if summary else 0,
                )
            )

        logger.debug("Activity scores computed", contacts=len(results), active=len(summaries))
        return results

    def tier_distribution(self, scored: Iterable[ActivityScoredContact]) -> dict[str, int]:
        counts = {tier: 0 for tier in ACTIVITY_TIERS}
        for contact in scored:
            counts[contact.tier] += 1
        return counts


activity_scoring_service = ActivityScoringService()
