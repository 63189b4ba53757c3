"""
Contact export service - scored contacts as CSV for the dashboard download.

The export mirrors the paginated contact view (same search and tier
filters) but returns every matching row.
"""

import csv
import io
from collections.abc import Iterable
from datetime import datetime

from crm_intel.features.engagement.domain import Contact
from crm_intel.features.engagement.pipeline.contact_scoring import contact_scoring_service
from crm_intel.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

CSV_COLUMNS = [
    "contact_id",
    "email",
    "score",
    "tier",
    "is_blacklisted",
    "list_count",
    "days_since_modified",
    "modified_at",
    "created_at",
]


def _iso(value: datetime | None) -> str:
    return value.isoformat() if value else ""


class ContactExportService:
    def export_scored_contacts_csv(
        self,
        contacts: Iterable[Contact],
        search: str = "",
        tier: str | None = None,
        now: datetime | None = None,
    ) -> str:
        """Render matching scored contacts as CSV text with a header row."""
        scored = contact_scoring_service.filter_contacts(contacts, search=search, tier=tier, now=now)

        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for contact in scored:
            writer.writerow(
                {
                    "contact_id": contact.contact_id,
                    "email": contact.email,
                    "score": contact.score,
                    "tier": contact.tier,
                    "is_blacklisted": "yes" if contact.is_blacklisted else "no",
                    "list_count": contact.list_count,
                    "days_since_modified": contact.days_since_modified,
                    "modified_at": _iso(contact.modified_at),
                    "created_at": _iso(contact.created_at),
                }
            )

        logger.info("Scored contacts exported", rows=len(scored), tier=tier or "all")
        return buffer.getvalue()


contact_export_service = ContactExportService()
