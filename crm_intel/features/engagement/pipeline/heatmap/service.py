"""
Send-time heatmap service.

Bins open and click timestamps into a 7x24 grid (day 1 = Sunday) and
picks the single best slot to send. Timestamps are binned exactly as
stored; no timezone conversion happens here.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from datetime import UTC, datetime, timedelta

from crm_intel.features.engagement.domain import ActivityEvent, require_collection
from crm_intel.features.engagement.pipeline.recency import as_utc
from crm_intel.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
DAYS = range(1, 8)
HOURS = range(24)


@dataclass(slots=True)
class HeatmapCell:
    opens: int = 0
    clicks: int = 0

    @property
    def total(self) -> int:
        return self.opens + self.clicks


@dataclass(slots=True)
class BestSendTime:
    day: str
    day_number: int
    hour: int
    hour_formatted: str
    engagement_count: int


@dataclass(slots=True)
class SendTimeAnalysis:
    heatmap: dict[int, dict[int, HeatmapCell]]
    max_value: int
    best_time: BestSendTime
    total_engagements: int
    days_analyzed: int
    skipped_events: int = 0

    def as_grid(self) -> dict[int, dict[int, dict[str, int]]]:
        """Plain nested dicts, with each cell's total spelled out."""
        return {
            day: {
                hour: {"opens": cell.opens, "clicks": cell.clicks, "total": cell.total}
                for hour, cell in hours.items()
            }
            for day, hours in self.heatmap.items()
        }

    def to_dict(self) -> dict:
        return {
            "heatmap": self.as_grid(),
            "max_value": self.max_value,
            "best_time": asdict(self.best_time),
            "total_engagements": self.total_engagements,
            "days_analyzed": self.days_analyzed,
            "skipped_events": self.skipped_events,
        }


def day_of_week(timestamp: datetime) -> int:
    """1 = Sunday ... 7 = Saturday."""
    return timestamp.isoweekday() % 7 + 1


def format_hour(hour: int) -> str:
    period = "PM" if hour >= 12 else "AM"
    if hour == 0:
        hour12 = 12
    elif hour > 12:
        hour12 = hour - 12
    else:
        hour12 = hour
    return f"{hour12}:00 {period}"


class SendTimeHeatmapService:
    DEFAULT_LOOKBACK_DAYS = 90

    def analyze(
        self,
        events: Iterable[ActivityEvent],
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
        now: datetime | None = None,
    ) -> SendTimeAnalysis:
        """
        Build the engagement heatmap for the trailing ``lookback_days``.

        Opens and clicks are windowed independently, so one event can land
        in two different cells when its open and click times differ.
        """
        if lookback_days < 0:
            raise ValueError("lookback_days must be >= 0")

        snapshot = require_collection(events, "events")
        reference = as_utc(now) if now is not None else datetime.now(UTC)
        window_start = reference - timedelta(days=lookback_days)

        heatmap = {day: {hour: HeatmapCell() for hour in HOURS} for day in DAYS}
        skipped = 0

        for event in snapshot:
            counted = False
            if self._in_window(event.opened_at, window_start):
                heatmap[day_of_week(event.opened_at)][event.opened_at.hour].opens += 1
                counted = True
            if self._in_window(event.clicked_at, window_start):
                heatmap[day_of_week(event.clicked_at)][event.clicked_at.hour].clicks += 1
                counted = True
            if not counted:
                skipped += 1

        max_value = 0
        total_engagements = 0
        best_day, best_hour, best_value = 1, 0, 0
        # Fixed scan order: earliest day then earliest hour wins a tie
        for day in DAYS:
            for hour in HOURS:
                total = heatmap[day][hour].total
                total_engagements += total
                if total > max_value:
                    max_value = total
                if total > best_value:
                    best_day, best_hour, best_value = day, hour, total

        best_time = BestSendTime(
            day=DAY_NAMES[best_day - 1],
            day_number=best_day,
            hour=best_hour,
            hour_formatted=format_hour(best_hour),
            engagement_count=best_value,
        )

        logger.info(
            "Send-time heatmap computed",
            days_analyzed=lookback_days,
            total_engagements=total_engagements,
            best_day=best_time.day,
            best_hour=best_hour,
            skipped_events=skipped,
        )

        return SendTimeAnalysis(
            heatmap=heatmap,
            max_value=max_value,
            best_time=best_time,
            total_engagements=total_engagements,
            days_analyzed=lookback_days,
            skipped_events=skipped,
        )

    @staticmethod
    def _in_window(timestamp: datetime | None, window_start: datetime) -> bool:
        return timestamp is not None and as_utc(timestamp) >= window_start


send_time_heatmap_service = SendTimeHeatmapService()
