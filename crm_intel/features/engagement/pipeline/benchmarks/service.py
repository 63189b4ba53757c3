"""
Campaign benchmark service - global averages, top/bottom performers and
comparison against static industry figures.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from crm_intel.features.engagement.domain import Campaign, require_collection
from crm_intel.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

# Conservative cross-industry averages (percentages); never derived from input.
INDUSTRY_OPEN_RATE = 21.5
INDUSTRY_CLICK_RATE = 2.3
INDUSTRY_BOUNCE_RATE = 0.7
INDUSTRY_UNSUBSCRIBE_RATE = 0.25
INDUSTRY_SOURCE = "Industry Average 2024"


@dataclass(slots=True)
class RateAverages:
    open_rate: float = 0.0
    click_rate: float = 0.0
    bounce_rate: float = 0.0
    unsubscribe_rate: float = 0.0


@dataclass(slots=True)
class IndustryBenchmarks:
    open_rate: float = INDUSTRY_OPEN_RATE
    click_rate: float = INDUSTRY_CLICK_RATE
    bounce_rate: float = INDUSTRY_BOUNCE_RATE
    unsubscribe_rate: float = INDUSTRY_UNSUBSCRIBE_RATE
    source: str = INDUSTRY_SOURCE


@dataclass(slots=True)
class RankedCampaign:
    rank: int
    campaign_id: str
    campaign_name: str
    subject: str | None
    sent_date: datetime | None
    open_rate: float
    click_rate: float
    bounce_rate: float
    engagement_score: float
    total_sent: int
    unique_opens: int
    unique_clicks: int


@dataclass(slots=True)
class PerformanceDelta:
    vs_industry_open: float = 0.0
    vs_industry_click: float = 0.0


@dataclass(slots=True)
class CampaignBenchmarks:
    total_campaigns: int
    averages: RateAverages
    industry_benchmarks: IndustryBenchmarks
    top_performers: list[RankedCampaign] = field(default_factory=list)
    bottom_performers: list[RankedCampaign] = field(default_factory=list)
    performance_delta: PerformanceDelta = field(default_factory=PerformanceDelta)


def _rate(numerator: int, denominator: int) -> float:
    if denominator <= 0:
        return 0.0
    return round(numerator / denominator * 100, 2)


class CampaignBenchmarkService:
    PERFORMER_COUNT = 5
    OPEN_WEIGHT = 0.4
    CLICK_WEIGHT = 0.5
    BOUNCE_WEIGHT = 0.1

    @staticmethod
    def industry_benchmarks() -> IndustryBenchmarks:
        return IndustryBenchmarks()

    @staticmethod
    def is_eligible(campaign: Campaign) -> bool:
        return campaign.status == "sent" and (campaign.stats.sent or 0) > 0

    def engagement_score(self, campaign: Campaign) -> float:
        """Weighted open/click/bounce blend from the campaign's own rates, floored at 0."""
        raw = (
            (campaign.open_rate or 0.0) * self.OPEN_WEIGHT
            + (campaign.click_rate or 0.0) * self.CLICK_WEIGHT
            - (campaign.bounce_rate or 0.0) * self.BOUNCE_WEIGHT
        )
        return round(max(0.0, raw), 2)

    def benchmark(
        self, campaigns: Iterable[Campaign], performer_count: int = PERFORMER_COUNT
    ) -> CampaignBenchmarks:
        """
        Aggregate sent campaigns and rank them by engagement score.

        Args:
            campaigns: Cached campaigns for one tenant, any status
            performer_count: Size of the top and bottom slices

        Returns:
            CampaignBenchmarks; a zero-valued result when nothing qualifies
        """
        snapshot = require_collection(campaigns, "campaigns")
        eligible = [c for c in snapshot if self.is_eligible(c)]

        if not eligible:
            logger.info("No sent campaigns to benchmark", received=len(snapshot))
            return CampaignBenchmarks(
                total_campaigns=0,
                averages=RateAverages(),
                industry_benchmarks=self.industry_benchmarks(),
            )

        total_sent = sum(c.stats.sent for c in eligible)
        total_delivered = sum(c.stats.delivered for c in eligible)
        total_opens = sum(c.stats.unique_opens for c in eligible)
        total_clicks = sum(c.stats.unique_clicks for c in eligible)
        total_bounces = sum(c.stats.hard_bounces + c.stats.soft_bounces for c in eligible)
        total_unsubscribes = sum(c.stats.unsubscribes for c in eligible)

        averages = RateAverages(
            open_rate=_rate(total_opens, total_delivered),
            click_rate=_rate(total_clicks, total_delivered),
            bounce_rate=_rate(total_bounces, total_sent),
            unsubscribe_rate=_rate(total_unsubscribes, total_delivered),
        )

        scored = [(self.engagement_score(c), c) for c in eligible]
        # sorted() is stable, so equal scores keep the caller's order
        ranked = sorted(scored, key=lambda pair: pair[0], reverse=True)
        total = len(ranked)

        top_performers = [
            self._ranked(index + 1, score, campaign)
            for index, (score, campaign) in enumerate(ranked[:performer_count])
        ]
        bottom_start = max(0, total - performer_count)
        bottom_performers = [
            self._ranked(bottom_start + index + 1, score, campaign)
            for index, (score, campaign) in enumerate(ranked[bottom_start:])
        ]

        industry = self.industry_benchmarks()
        delta = PerformanceDelta(
            vs_industry_open=round(averages.open_rate - industry.open_rate, 2),
            vs_industry_click=round(averages.click_rate - industry.click_rate, 2),
        )

        logger.info(
            "Campaign benchmarks computed",
            total_campaigns=total,
            avg_open_rate=averages.open_rate,
            avg_click_rate=averages.click_rate,
        )

        return CampaignBenchmarks(
            total_campaigns=total,
            averages=averages,
            industry_benchmarks=industry,
            top_performers=top_performers,
            bottom_performers=bottom_performers,
            performance_delta=delta,
        )

    @staticmethod
    def _ranked(rank: int, score: float, campaign: Campaign) -> RankedCampaign:
        return RankedCampaign(
            rank=rank,
            campaign_id=campaign.campaign_id,
            campaign_name=campaign.name,
            subject=campaign.subject,
            sent_date=campaign.sent_date,
            open_rate=round(campaign.open_rate or 0.0, 2),
            click_rate=round(campaign.click_rate or 0.0, 2),
            bounce_rate=round(campaign.bounce_rate or 0.0, 2),
            engagement_score=score,
            total_sent=campaign.stats.sent,
            unique_opens=campaign.stats.unique_opens,
            unique_clicks=campaign.stats.unique_clicks,
        )


campaign_benchmark_service = CampaignBenchmarkService()
