"""
Next-Stop Scoring Engine
========================

Formula
-------
Score = N(Demand) + N(1 / (Supply + 1)) + N(1 / (Distance_m + 1))

* **Demand**  -- time-varying demand (see :mod:`src.domain.demand`).
* **Supply**  -- resources already waiting at the stop; fewer is better.
* **Distance** -- Haversine meters from the driver; closer is better.
* **N(v)**    -- min-max normalisation over the whole catalog for this
  request: ``(v - min) / (max - min)``, or ``1`` when every stop ties.

The three factors carry equal, fixed weights, so a score lies in
``[0, 3]``.  The ``+ 1`` offsets keep the inverses finite when a stop has
no supply or the driver is standing on it.

Selection
---------
Stops are scanned in catalog order with a strict ``>`` comparison, so on
equal scores the stop listed first wins.

Complexity
----------
Let N = stops in the catalog.

* Stats pass:     O(N)
* Scoring pass:   O(N)
* Ranking:        O(N log N)
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone, tzinfo
from typing import Sequence

from .demand import demand_at, time_context
from .distance import haversine_m
from .entities import (
    GeoPoint,
    NoSuitableStop,
    ScoredStop,
    StatBounds,
    Stop,
    TimeContext,
)

logger = logging.getLogger(__name__)


def normalize(value: float, lo: float, hi: float) -> float:
    """Min-max scale *value* into [0, 1]; a degenerate range maps to 1."""
    if hi == lo:
        return 1.0
    return (value - lo) / (hi - lo)


def _raw_factors(
    stop: Stop, driver: GeoPoint, ctx: TimeContext
) -> tuple[float, float, float, float]:
    """Return ``(demand, inverse_supply, inverse_distance, distance_m)``."""
    distance = haversine_m(driver, stop.location)
    return (
        demand_at(stop, ctx),
        1 / (stop.supply + 1),
        1 / (distance + 1),
        distance,
    )


# ── Stat aggregation ──────────────────────────────────────────────────


def compute_stats(
    catalog: Sequence[Stop], driver: GeoPoint, ctx: TimeContext
) -> StatBounds:
    """
    One pass over *catalog* collecting the min / max of every raw factor.

    The bounds are only meaningful for the same *driver* and *ctx* later
    passed to :func:`score`.
    """
    if not catalog:
        raise NoSuitableStop("no stops configured")

    min_d = min_s = min_p = math.inf
    max_d = max_s = max_p = -math.inf
    for stop in catalog:
        demand, inv_supply, inv_distance, _ = _raw_factors(stop, driver, ctx)
        min_d, max_d = min(min_d, demand), max(max_d, demand)
        min_s, max_s = min(min_s, inv_supply), max(max_s, inv_supply)
        min_p, max_p = min(min_p, inv_distance), max(max_p, inv_distance)

    return StatBounds(
        min_demand=min_d,
        max_demand=max_d,
        min_inverse_supply=min_s,
        max_inverse_supply=max_s,
        min_inverse_distance=min_p,
        max_inverse_distance=max_p,
    )


# ── Scoring ───────────────────────────────────────────────────────────


def _scored(
    stop: Stop, driver: GeoPoint, ctx: TimeContext, stats: StatBounds
) -> ScoredStop:
    demand, inv_supply, inv_distance, distance = _raw_factors(stop, driver, ctx)
    total = (
        normalize(demand, stats.min_demand, stats.max_demand)
        + normalize(inv_supply, stats.min_inverse_supply, stats.max_inverse_supply)
        + normalize(
            inv_distance, stats.min_inverse_distance, stats.max_inverse_distance
        )
    )
    return ScoredStop(
        stop=stop,
        score=total,
        demand=demand,
        inverse_supply=inv_supply,
        inverse_distance=inv_distance,
        distance_m=distance,
    )


def score(
    stop: Stop, driver: GeoPoint, ctx: TimeContext, stats: StatBounds
) -> float:
    """Composite score of *stop* in ``[0, 3]``; higher is better."""
    return _scored(stop, driver, ctx, stats).score


def rank_stops(
    catalog: Sequence[Stop], driver: GeoPoint, ctx: TimeContext
) -> list[ScoredStop]:
    """All stops with their score breakdown, best first.

    The sort is stable, so equal scores keep catalog order and the head
    of the list is the stop :func:`select_best_stop` returns.  NaN
    scores sort last; if every score is NaN, :class:`NoSuitableStop`
    is raised as the selector does.
    """
    stats = compute_stats(catalog, driver, ctx)
    scored = [_scored(stop, driver, ctx, stats) for stop in catalog]
    if all(math.isnan(s.score) for s in scored):
        raise NoSuitableStop("no stop produced a comparable score")
    return sorted(
        scored,
        key=lambda s: (not math.isnan(s.score), s.score),
        reverse=True,
    )


# ── Selection ─────────────────────────────────────────────────────────


def select_best_stop(
    catalog: Sequence[Stop],
    driver: GeoPoint,
    timestamp: datetime,
    tz: tzinfo = timezone.utc,
) -> Stop:
    """
    Pick the highest-scoring stop for a driver at *driver* at *timestamp*.

    Raises :class:`NoSuitableStop` if the catalog is empty or no stop
    produced a comparable score.
    """
    ctx = time_context(timestamp, tz)
    stats = compute_stats(catalog, driver, ctx)

    best: Stop | None = None
    best_score = -math.inf
    for stop in catalog:
        s = _scored(stop, driver, ctx, stats)
        logger.debug(
            "Stop %s (%s): score=%.4f demand=%.1f inv_supply=%.4f distance=%.0fm",
            stop.id, stop.name, s.score, s.demand, s.inverse_supply, s.distance_m,
        )
        if s.score > best_score:
            best, best_score = stop, s.score

    if best is None:
        raise NoSuitableStop("no stop produced a comparable score")
    return best


# ── Engine facade ─────────────────────────────────────────────────────


class ScoringEngine:
    """High-level API used by the HTTP layer.

    Holds only the read-only catalog and the zone used to resolve
    timestamps; safe to share across concurrent requests.
    """

    def __init__(self, catalog: Sequence[Stop], tz: tzinfo = timezone.utc):
        self.catalog = tuple(catalog)
        self.tz = tz

    def best_stop(self, driver: GeoPoint, timestamp: datetime) -> Stop:
        return select_best_stop(self.catalog, driver, timestamp, self.tz)

    def ranking(self, driver: GeoPoint, timestamp: datetime) -> list[ScoredStop]:
        return rank_stops(self.catalog, driver, time_context(timestamp, self.tz))
