"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.domain.entities import GeoPoint, ScoredStop, Stop


# ── Requests ──────────────────────────────────────────────────────────


class LocationIn(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    def to_point(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


class NextStopRequest(BaseModel):
    current_location: LocationIn = Field(..., alias="currentLocation")
    current_time: datetime = Field(
        ...,
        alias="currentTime",
        description="ISO-8601 timestamp; a naive value is read in the server's configured zone.",
    )

    model_config = {"populate_by_name": True}

    @field_validator("current_time", mode="before")
    @classmethod
    def timestamp_is_string(cls, value):
        # Numbers would otherwise be read as Unix epochs
        if not isinstance(value, str):
            raise ValueError("currentTime must be a timestamp string")
        return value


# ── Responses ─────────────────────────────────────────────────────────


class LocationOut(BaseModel):
    latitude: float
    longitude: float


class StopSummary(BaseModel):
    id: int
    name: str
    location: LocationOut

    @classmethod
    def from_stop(cls, stop: Stop) -> "StopSummary":
        return cls(
            id=stop.id,
            name=stop.name,
            location=LocationOut(
                latitude=stop.location.latitude,
                longitude=stop.location.longitude,
            ),
        )


class NextStopResponse(BaseModel):
    next_stop: StopSummary = Field(..., alias="nextStop")

    model_config = {"populate_by_name": True}


class StopResponse(StopSummary):
    weekday_demand: float
    weekend_demand: float
    supply: float

    @classmethod
    def from_stop(cls, stop: Stop) -> "StopResponse":
        return cls(
            id=stop.id,
            name=stop.name,
            location=LocationOut(
                latitude=stop.location.latitude,
                longitude=stop.location.longitude,
            ),
            weekday_demand=stop.demand.weekday,
            weekend_demand=stop.demand.weekend,
            supply=stop.supply,
        )


class ScoredStopResponse(BaseModel):
    stop: StopSummary
    score: float
    demand: float
    inverse_supply: float
    inverse_distance: float
    distance_m: float

    @classmethod
    def from_scored(cls, scored: ScoredStop) -> "ScoredStopResponse":
        return cls(
            stop=StopSummary.from_stop(scored.stop),
            score=scored.score,
            demand=scored.demand,
            inverse_supply=scored.inverse_supply,
            inverse_distance=scored.inverse_distance,
            distance_m=scored.distance_m,
        )


class HealthResponse(BaseModel):
    status: str = "ok"
    stops: int = 0


class ErrorResponse(BaseModel):
    error: str
