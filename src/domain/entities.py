"""
Domain entities for the next-stop recommender.

Every type here is a frozen dataclass: the stop catalog is built once at
start-up and shared read-only by all requests, and the per-request values
(``TimeContext``, ``StatBounds``, ``ScoredStop``) are never mutated after
construction.
"""

from __future__ import annotations

from dataclasses import dataclass


class NoSuitableStop(Exception):
    """Raised when the engine cannot pick a stop (e.g. empty catalog)."""


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class DemandProfile:
    """Base demand counts for a stop, before the peak-hour multiplier."""

    weekday: float
    weekend: float


@dataclass(frozen=True)
class TimeContext:
    is_weekend: bool
    hour_of_day: int


# ── Entities ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Stop:
    id: int
    name: str
    location: GeoPoint
    demand: DemandProfile
    supply: float = 0.0


# ── Request-scoped aggregates ─────────────────────────────────────────


@dataclass(frozen=True)
class StatBounds:
    """Min / max of each raw scoring factor across one catalog snapshot."""

    min_demand: float
    max_demand: float
    min_inverse_supply: float
    max_inverse_supply: float
    min_inverse_distance: float
    max_inverse_distance: float


@dataclass(frozen=True)
class ScoredStop:
    stop: Stop
    score: float
    demand: float
    inverse_supply: float
    inverse_distance: float
    distance_m: float
