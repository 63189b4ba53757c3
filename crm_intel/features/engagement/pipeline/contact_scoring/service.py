"""
Contact scoring service - profile-snapshot engagement scores and tiers.

Scores are estimates built only from what the platform's contact export
carries (modification date, list membership, profile fields, blacklist
flag). No open/click events are needed; see ``activity.py`` for the
event-driven model.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from crm_intel.features.engagement.domain import Contact, require_collection
from crm_intel.features.engagement.pipeline.recency import days_since, round_half_up
from crm_intel.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

TIER_CHAMPION = "Champion"
TIER_WARM = "Warm"
TIER_COLD = "Cold"
TIERS = (TIER_CHAMPION, TIER_WARM, TIER_COLD)

DEFAULT_TIER_COLOR = "#6b7280"
TIER_COLORS = {
    TIER_CHAMPION: "#10b981",
    TIER_WARM: "#f59e0b",
    TIER_COLD: DEFAULT_TIER_COLOR,
}


@dataclass(slots=True)
class ContactScore:
    score: int
    tier: str


@dataclass(slots=True)
class ScoredContact:
    contact_id: str
    email: str
    score: int
    tier: str
    tier_color: str
    is_blacklisted: bool
    list_count: int
    days_since_modified: int
    modified_at: datetime | None
    created_at: datetime | None


@dataclass(slots=True)
class RankedContact:
    rank: int
    email: str
    score: int
    tier: str
    list_count: int
    days_since_modified: int


@dataclass(slots=True)
class ContactScoringOverview:
    total_contacts: int
    avg_score: int
    tiers: dict[str, int]
    tiers_percent: dict[str, float]
    blacklisted_count: int
    blacklisted_percent: float
    top_contacts: list[RankedContact]


@dataclass(slots=True)
class ContactPage:
    contacts: list[ScoredContact]
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


def _percent(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return round_half_up(part / whole * 100, 1)


class ContactScoringService:
    BASE_SCORE = 50
    DELIVERABLE_BONUS = 20
    TOP_CONTACTS_LIMIT = 20

    def score_contact(self, contact: Contact, now: datetime | None = None) -> ContactScore:
        """
        Score a single contact on a 0-100 scale.

        Blacklisted contacts short-circuit to 0 (Cold) before any other
        factor is looked at.
        """
        if contact.email_blacklisted:
            return ContactScore(score=0, tier=TIER_COLD)

        score = self.BASE_SCORE
        score += self._recency(days_since(contact.modified_at, now))
        score += self.DELIVERABLE_BONUS
        score += self._list_membership(self._list_count(contact))
        score += self._profile_completeness(self._filled_attributes(contact))

        final = max(0, min(100, round(score)))
        return ContactScore(score=final, tier=self.engagement_tier(final))

    @staticmethod
    def engagement_tier(score: int) -> str:
        if score >= 80:
            return TIER_CHAMPION
        if score >= 40:
            return TIER_WARM
        return TIER_COLD

    @staticmethod
    def tier_color(tier: str) -> str:
        return TIER_COLORS.get(tier, DEFAULT_TIER_COLOR)

    def _recency(self, days: int) -> int:
        if days <= 30:
            return 20
        if days <= 90:
            return 10
        if days > 180:
            return -10
        return 0

    def _list_membership(self, list_count: int) -> int:
        if list_count >= 3:
            return 10
        if list_count == 2:
            return 5
        return 0

    def _profile_completeness(self, filled: int) -> int:
        if filled >= 3:
            return 10
        if filled >= 1:
            return 5
        return 0

    @staticmethod
    def _list_count(contact: Contact) -> int:
        return len(contact.list_ids or ())

    @staticmethod
    def _filled_attributes(contact: Contact) -> int:
        attributes = contact.attributes or {}
        return sum(
            1 for value in attributes.values() if value is not None and str(value).strip() != ""
        )

    # ------------------------------------------------------------------
    # Batch operations used by the dashboard routes
    # ------------------------------------------------------------------

    def score_contacts(
        self,
        contacts: Iterable[Contact],
        limit: int | None = None,
        now: datetime | None = None,
    ) -> list[ScoredContact]:
        """Score every contact, keeping input order. ``limit`` truncates the input first."""
        snapshot = require_collection(contacts, "contacts")
        if limit is not None:
            snapshot = snapshot[:limit]
        return [self._to_scored(contact, now) for contact in snapshot]

    def scoring_overview(
        self,
        contacts: Iterable[Contact],
        top_limit: int = TOP_CONTACTS_LIMIT,
        now: datetime | None = None,
    ) -> ContactScoringOverview:
        """
        Summarise tier distribution and list the best non-blacklisted contacts.
        """
        scored = self.score_contacts(contacts, now=now)
        total = len(scored)

        tiers = {tier.lower(): 0 for tier in TIERS}
        for contact in scored:
            tiers[contact.tier.lower()] += 1

        avg_score = round_half_up(sum(c.score for c in scored) / total) if total > 0 else 0
        blacklisted_count = sum(1 for c in scored if c.is_blacklisted)

        ranked = sorted(
            (c for c in scored if not c.is_blacklisted),
            key=lambda c: c.score,
            reverse=True,
        )
        top_contacts = [
            RankedContact(
                rank=index + 1,
                email=c.email,
                score=c.score,
                tier=c.tier,
                list_count=c.list_count,
                days_since_modified=c.days_since_modified,
            )
            for index, c in enumerate(ranked[:top_limit])
        ]

        logger.info(
            "Contact scoring overview computed",
            total_contacts=total,
            avg_score=avg_score,
            champions=tiers["champion"],
            blacklisted=blacklisted_count,
        )

        return ContactScoringOverview(
            total_contacts=total,
            avg_score=avg_score,
            tiers=tiers,
            tiers_percent={name: _percent(count, total) for name, count in tiers.items()},
            blacklisted_count=blacklisted_count,
            blacklisted_percent=_percent(blacklisted_count, total),
            top_contacts=top_contacts,
        )

    def filter_contacts(
        self,
        contacts: Iterable[Contact],
        search: str = "",
        tier: str | None = None,
        now: datetime | None = None,
    ) -> list[ScoredContact]:
        """
        Score contacts matching ``search`` (email substring, case-insensitive),
        ordered by email, optionally narrowed to one tier.
        """
        if tier and tier not in TIERS:
            raise ValueError(f"Unknown tier {tier!r}; expected one of {', '.join(TIERS)}")

        snapshot = require_collection(contacts, "contacts")
        needle = (search or "").strip().lower()
        matching = [c for c in snapshot if needle in (c.email or "").lower()]
        matching.sort(key=lambda c: (c.email or "").lower())

        scored = [self._to_scored(contact, now) for contact in matching]
        if tier:
            scored = [c for c in scored if c.tier == tier]
        return scored

    def search_contacts(
        self,
        contacts: Iterable[Contact],
        search: str = "",
        tier: str | None = None,
        page: int = 1,
        limit: int = 25,
        now: datetime | None = None,
    ) -> ContactPage:
        if page < 1:
            raise ValueError("page must be >= 1")
        if limit < 1:
            raise ValueError("limit must be >= 1")

        filtered = self.filter_contacts(contacts, search=search, tier=tier, now=now)
        total = len(filtered)
        total_pages = math.ceil(total / limit)
        offset = (page - 1) * limit

        return ContactPage(
            contacts=filtered[offset : offset + limit],
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )

    def _to_scored(self, contact: Contact, now: datetime | None) -> ScoredContact:
        result = self.score_contact(contact, now)
        return ScoredContact(
            contact_id=contact.contact_id,
            email=contact.email,
            score=result.score,
            tier=result.tier,
            tier_color=self.tier_color(result.tier),
            is_blacklisted=bool(contact.email_blacklisted),
            list_count=self._list_count(contact),
            days_since_modified=days_since(contact.modified_at, now),
            modified_at=contact.modified_at,
            created_at=contact.created_at,
        )


contact_scoring_service = ContactScoringService()
