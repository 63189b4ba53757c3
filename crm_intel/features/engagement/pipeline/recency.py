"""
Recency and rounding helpers shared by every scorer.
"""

from datetime import UTC, datetime
from decimal import ROUND_FLOOR, Decimal

MISSING_TIMESTAMP_DAYS = 999
SECONDS_PER_DAY = 86400


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def days_since(timestamp: datetime | None, now: datetime | None = None) -> int:
    """
    Whole days elapsed between ``timestamp`` and ``now``.

    A missing timestamp counts as 999 days so it lands in the stalest band
    of every threshold. Future timestamps come back negative; callers see
    them as more recent than "now" and nothing clamps them.
    """
    if timestamp is None:
        return MISSING_TIMESTAMP_DAYS
    reference = as_utc(now) if now is not None else datetime.now(UTC)
    elapsed = (reference - as_utc(timestamp)).total_seconds()
    return int(elapsed / SECONDS_PER_DAY)


def round_half_up(value: float, digits: int = 0) -> int | float:
    """
    Round with halves going toward +infinity (62.5 -> 63, -2.5 -> -2),
    unlike the built-in round(), which rounds halves to even.

    Returns an int when ``digits`` is 0.
    """
    scale = Decimal(10) ** digits
    shifted = Decimal(str(value)) * scale + Decimal("0.5")
    rounded = shifted.to_integral_value(rounding=ROUND_FLOOR) / scale
    return int(rounded) if digits == 0 else float(rounded)
