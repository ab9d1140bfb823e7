"""
Time-varying demand model.

Formula
-------
Demand = Base_Demand x Peak_Multiplier

* **Base_Demand**: the stop's weekend count on Saturday / Sunday, its
  weekday count otherwise.
* **Peak_Multiplier**: 1.5 inside the morning (08-10 h) or evening
  (17-20 h) rush, both ends inclusive; 1.0 otherwise.

Complexity: O(1) per stop.
"""

from __future__ import annotations

from datetime import datetime, tzinfo

from .entities import Stop, TimeContext

PEAK_MULTIPLIER = 1.5

# Inclusive (first_hour, last_hour) windows
PEAK_WINDOWS: tuple[tuple[int, int], ...] = ((8, 10), (17, 20))

SATURDAY = 5  # datetime.weekday(): Monday == 0


def is_peak_hour(hour: int) -> bool:
    return any(start <= hour <= end for start, end in PEAK_WINDOWS)


def demand_at(stop: Stop, ctx: TimeContext) -> float:
    """Expected demand at *stop* for the given weekday/hour context."""
    base = stop.demand.weekend if ctx.is_weekend else stop.demand.weekday
    multiplier = PEAK_MULTIPLIER if is_peak_hour(ctx.hour_of_day) else 1.0
    return base * multiplier


def time_context(timestamp: datetime, tz: tzinfo) -> TimeContext:
    """
    Resolve *timestamp* to a weekday/hour context in zone *tz*.

    Offset-aware timestamps are converted to *tz*; naive ones are read
    as wall-clock time already expressed in *tz*.
    """
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(tz)
    return TimeContext(
        is_weekend=timestamp.weekday() >= SATURDAY,
        hour_of_day=timestamp.hour,
    )
