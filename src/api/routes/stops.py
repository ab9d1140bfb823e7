"""
Stop endpoints
==============

POST /api/v1/next-stop -- best next stop for a driver location and time
GET  /api/v1/stops     -- the configured stop catalog, in order
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.dependencies import get_engine
from src.api.middleware import current_rate_limit, limiter
from src.api.schemas import (
    ErrorResponse,
    NextStopRequest,
    NextStopResponse,
    StopResponse,
    StopSummary,
)
from src.domain.entities import NoSuitableStop
from src.domain.scoring import ScoringEngine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stops"])


@router.post(
    "/next-stop",
    response_model=NextStopResponse,
    summary="Recommend the next stop",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid location or time."},
        404: {"model": ErrorResponse, "description": "No suitable stop found."},
    },
)
@limiter.limit(current_rate_limit)
async def next_stop(
    request: Request,
    body: NextStopRequest,
    engine: ScoringEngine = Depends(get_engine),
):
    driver = body.current_location.to_point()
    try:
        best = engine.best_stop(driver, body.current_time)
    except NoSuitableStop as exc:
        logger.warning("No suitable stop for %s at %s: %s", driver, body.current_time, exc)
        raise HTTPException(status_code=404, detail="No suitable stop found.")

    logger.info("Next stop for %s at %s: %s (id=%d)",
                driver, body.current_time.isoformat(), best.name, best.id)
    return NextStopResponse(next_stop=StopSummary.from_stop(best))


@router.get(
    "/stops",
    response_model=list[StopResponse],
    summary="List the stop catalog",
)
@limiter.limit(current_rate_limit)
async def list_stops(
    request: Request,
    engine: ScoringEngine = Depends(get_engine),
):
    return [StopResponse.from_stop(stop) for stop in engine.catalog]
