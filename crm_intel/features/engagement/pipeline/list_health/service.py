"""
List health service - 0-100 health scores and A-F grades per list.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from crm_intel.features.engagement.domain import Contact, ContactList, require_collection
from crm_intel.features.engagement.pipeline.recency import (
    MISSING_TIMESTAMP_DAYS,
    days_since,
    round_half_up,
)
from crm_intel.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class ListHealth:
    list_id: str
    list_name: str
    health_score: int
    grade: str
    total_subscribers: int
    member_count: int
    active_count: int
    blacklisted_count: int
    blacklist_rate: float
    avg_days_since_modified: int


class ListHealthService:
    BASE_SCORE = 50

    def score_list(
        self,
        contact_list: ContactList,
        member_contacts: Iterable[Contact],
        now: datetime | None = None,
    ) -> ListHealth:
        """
        Score one list from the contacts currently belonging to it.

        The size factor reads the platform's subscriber count, not the
        number of cached members passed in.
        """
        members = require_collection(member_contacts, "member_contacts")
        total = len(members)
        blacklisted = sum(1 for c in members if c.email_blacklisted)
        active = total - blacklisted

        avg_days = (
            sum(days_since(c.modified_at, now) for c in members) / total
            if total > 0
            else MISSING_TIMESTAMP_DAYS
        )
        blacklist_rate = blacklisted / total if total > 0 else 0.0

        score = self.BASE_SCORE
        score += self._size(contact_list.total_subscribers or 0)
        score += self._blacklist(blacklist_rate)
        score += self._recency(avg_days)
        final = max(0, min(100, round(score)))

        return ListHealth(
            list_id=contact_list.list_id,
            list_name=contact_list.name,
            health_score=final,
            grade=self.health_grade(final),
            total_subscribers=contact_list.total_subscribers or 0,
            member_count=total,
            active_count=active,
            blacklisted_count=blacklisted,
            blacklist_rate=blacklist_rate,
            avg_days_since_modified=round_half_up(avg_days),
        )

    @staticmethod
    def health_grade(score: int) -> str:
        if score >= 90:
            return "A"
        if score >= 80:
            return "B"
        if score >= 70:
            return "C"
        if score >= 60:
            return "D"
        return "F"

    def _size(self, subscribers: int) -> int:
        if subscribers >= 1000:
            return 15
        if subscribers >= 500:
            return 10
        if subscribers >= 100:
            return 5
        return 0

    def _blacklist(self, rate: float) -> int:
        if rate <= 0.01:
            return 20
        if rate <= 0.05:
            return 10
        if rate > 0.10:
            return -20
        # 5-10% is neutral
        return 0

    def _recency(self, avg_days: float) -> int:
        if avg_days <= 30:
            return 15
        if avg_days <= 90:
            return 10
        if avg_days > 180:
            return -15
        return 0

    def score_lists(
        self,
        lists: Iterable[ContactList],
        contacts: Iterable[Contact],
        now: datetime | None = None,
    ) -> list[ListHealth]:
        """
        Score every list against the tenant's contacts.

        Sorted by health score descending, then list id for stable output.
        """
        list_snapshot = require_collection(lists, "lists")
        contact_snapshot = require_collection(contacts, "contacts")

        members_by_list: defaultdict[str, list[Contact]] = defaultdict(list)
        for contact in contact_snapshot:
            for list_id in set(contact.list_ids or ()):
                members_by_list[str(list_id)].append(contact)

        results = [
            self.score_list(contact_list, members_by_list.get(str(contact_list.list_id), []), now)
            for contact_list in list_snapshot
        ]
        results.sort(key=lambda item: (-item.health_score, str(item.list_id)))

        logger.info(
            "List health scores computed",
            list_count=len(results),
            failing=sum(1 for r in results if r.grade == "F"),
        )
        return results


list_health_service = ListHealthService()
