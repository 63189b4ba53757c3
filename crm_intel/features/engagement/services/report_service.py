"""
Engagement dashboard report.

Runs the four analytics sections over one tenant snapshot. Each section
is computed on its own worker thread and fails on its own: a broken
section is logged and reported as ``{"error": ...}`` while the rest of
the dashboard still renders.

Usage:
    from crm_intel.features.engagement.services.report_service import engagement_report_service

    report = await engagement_report_service.build_dashboard(snapshot)
    # Returns: { "contact_scoring": {...}, "list_health": [...], ... }
"""

import asyncio
from collections.abc import Callable
from dataclasses import asdict
from datetime import UTC, datetime
from typing import Any

from crm_intel.config import settings
from crm_intel.features.engagement.domain import EngagementSnapshot, require_collection
from crm_intel.features.engagement.pipeline.benchmarks import campaign_benchmark_service
from crm_intel.features.engagement.pipeline.contact_scoring import contact_scoring_service
from crm_intel.features.engagement.pipeline.heatmap import send_time_heatmap_service
from crm_intel.features.engagement.pipeline.list_health import list_health_service
from crm_intel.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class EngagementReportService:
    async def build_dashboard(
        self,
        snapshot: EngagementSnapshot,
        lookback_days: int | None = None,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """
        Compute every dashboard section for one snapshot.

        Args:
            snapshot: Entity collections supplied by the ingestion layer
            lookback_days: Heatmap window, defaults to HEATMAP_LOOKBACK_DAYS
            now: Evaluation time shared by every section

        Returns:
            dict keyed by section name, plus a "metadata" block
        """
        reference = now or datetime.now(UTC)
        days = settings.HEATMAP_LOOKBACK_DAYS if lookback_days is None else lookback_days

        # Freeze the inputs so worker threads never observe a list being appended to
        snapshot = EngagementSnapshot(
            contacts=self._freeze(snapshot.contacts, "contacts"),
            lists=self._freeze(snapshot.lists, "lists"),
            campaigns=self._freeze(snapshot.campaigns, "campaigns"),
            events=self._freeze(snapshot.events, "events"),
        )

        tasks: dict[str, Callable[[], Any]] = {
            "contact_scoring": lambda: asdict(
                contact_scoring_service.scoring_overview(
                    snapshot.contacts, top_limit=settings.TOP_CONTACTS_LIMIT, now=reference
                )
            ),
            "list_health": lambda: [
                asdict(item)
                for item in list_health_service.score_lists(
                    snapshot.lists, snapshot.contacts, now=reference
                )
            ],
            "campaign_benchmarks": lambda: asdict(
                campaign_benchmark_service.benchmark(
                    snapshot.campaigns, performer_count=settings.BENCHMARK_PERFORMER_COUNT
                )
            ),
            "time_of_day": lambda: send_time_heatmap_service.analyze(
                snapshot.events, lookback_days=days, now=reference
            ).to_dict(),
        }

        results = await asyncio.gather(
            *(asyncio.to_thread(task) for task in tasks.values()),
            return_exceptions=True,
        )

        report: dict[str, Any] = {
            "metadata": {
                "generated_at": reference.isoformat(),
                "days_analyzed": days,
                "failed_sections": [],
            }
        }
        for name, result in zip(tasks, results):
            if isinstance(result, Exception):
                logger.error(
                    "Dashboard section failed",
                    section=name,
                    error=str(result),
                    error_type=type(result).__name__,
                )
                report[name] = {"error": str(result)}
                report["metadata"]["failed_sections"].append(name)
            else:
                report[name] = result

        logger.info(
            "Engagement dashboard built",
            sections=len(tasks),
            failed=len(report["metadata"]["failed_sections"]),
        )
        return report

    @staticmethod
    def _freeze(collection: Any, name: str) -> Any:
        # Contract violations are left for the owning section to report
        try:
            return require_collection(collection, name)
        except TypeError:
            return collection


engagement_report_service = EngagementReportService()
