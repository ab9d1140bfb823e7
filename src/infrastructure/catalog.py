"""
Stop catalog loading.

The catalog is read once when the application is created, validated, and
frozen into a ``tuple[Stop, ...]`` that every request shares read-only.

Source
------
* ``CATALOG_PATH`` unset  -- the built-in ``SAMPLE_STOPS`` (10 stops
  around Bengaluru).
* ``CATALOG_PATH`` set    -- a JSON array of objects shaped like the
  entries of ``SAMPLE_STOPS``.

Validation
----------
A malformed stop aborts start-up with :class:`CatalogError` rather than
corrupting every ranking later: ids must be unique, numbers finite,
demand and supply non-negative, coordinates inside their ranges.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from pydantic import BaseModel, Field, StrictInt, TypeAdapter, ValidationError

from src.domain.entities import DemandProfile, GeoPoint, Stop

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when the stop catalog cannot be loaded or is malformed."""


SAMPLE_STOPS: list[dict[str, Any]] = [
    {"id": 1, "name": "Stop A", "latitude": 12.9716, "longitude": 77.5946, "weekday": 50, "weekend": 80, "supply": 5},
    {"id": 2, "name": "Stop B", "latitude": 12.9352, "longitude": 77.6245, "weekday": 70, "weekend": 100, "supply": 2},
    {"id": 3, "name": "Stop C", "latitude": 12.9141, "longitude": 77.6109, "weekday": 60, "weekend": 90, "supply": 4},
    {"id": 4, "name": "Stop D", "latitude": 12.9784, "longitude": 77.6408, "weekday": 80, "weekend": 110, "supply": 3},
    {"id": 5, "name": "Stop E", "latitude": 12.9857, "longitude": 77.6058, "weekday": 55, "weekend": 75, "supply": 6},
    {"id": 6, "name": "Stop F", "latitude": 12.9304, "longitude": 77.6783, "weekday": 65, "weekend": 95, "supply": 1},
    {"id": 7, "name": "Stop G", "latitude": 12.9250, "longitude": 77.5897, "weekday": 40, "weekend": 60, "supply": 7},
    {"id": 8, "name": "Stop H", "latitude": 12.9279, "longitude": 77.6271, "weekday": 75, "weekend": 120, "supply": 2},
    {"id": 9, "name": "Stop I", "latitude": 12.9568, "longitude": 77.7011, "weekday": 90, "weekend": 130, "supply": 4},
    {"id": 10, "name": "Stop J", "latitude": 12.9165, "longitude": 77.6001, "weekday": 45, "weekend": 70, "supply": 5},
]


# ── Schema ────────────────────────────────────────────────────────────


class StopRecord(BaseModel):
    """One catalog entry as stored in the JSON file."""

    id: StrictInt
    name: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False, strict=True)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False, strict=True)
    weekday: float = Field(..., ge=0, allow_inf_nan=False, strict=True)
    weekend: float = Field(..., ge=0, allow_inf_nan=False, strict=True)
    supply: float = Field(..., ge=0, allow_inf_nan=False, strict=True)

    def to_stop(self) -> Stop:
        return Stop(
            id=self.id,
            name=self.name,
            location=GeoPoint(latitude=self.latitude, longitude=self.longitude),
            demand=DemandProfile(weekday=self.weekday, weekend=self.weekend),
            supply=self.supply,
        )


_records = TypeAdapter(list[StopRecord])


# ── Loading ───────────────────────────────────────────────────────────


def build_catalog(records: Iterable[StopRecord]) -> tuple[Stop, ...]:
    """Freeze validated *records* into a catalog, keeping their order."""
    stops: list[Stop] = []
    seen: set[int] = set()
    for record in records:
        if record.id in seen:
            raise CatalogError(f"Duplicate stop id {record.id}")
        seen.add(record.id)
        stops.append(record.to_stop())
    return tuple(stops)


def parse_catalog(entries: Any) -> tuple[Stop, ...]:
    """Validate plain Python data (a list of mappings) into a catalog."""
    try:
        records = _records.validate_python(entries)
    except ValidationError as exc:
        raise CatalogError(f"Invalid stop catalog: {exc}") from exc
    return build_catalog(records)


def load_catalog(path: Optional[str] = None) -> tuple[Stop, ...]:
    """Load the catalog from *path*, or the built-in sample when ``None``."""
    if path is None:
        catalog = parse_catalog(SAMPLE_STOPS)
        source = "built-in sample"
    else:
        try:
            raw = Path(path).read_bytes()
        except OSError as exc:
            raise CatalogError(f"Cannot read stop catalog {path}: {exc}") from exc
        try:
            records = _records.validate_json(raw)
        except ValidationError as exc:
            raise CatalogError(f"Invalid stop catalog {path}: {exc}") from exc
        catalog = build_catalog(records)
        source = path

    if not catalog:
        logger.warning("Stop catalog from %s is empty; every request will 404", source)
    else:
        logger.info("Loaded %d stops from %s", len(catalog), source)
    return catalog
