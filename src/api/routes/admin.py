"""
Admin / observability endpoints
===============================

POST /api/v1/admin/scores -- full per-stop score breakdown for a request
GET  /api/v1/admin/health -- simple health check
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.dependencies import get_engine
from src.api.middleware import current_rate_limit, limiter
from src.api.schemas import HealthResponse, NextStopRequest, ScoredStopResponse
from src.domain.entities import NoSuitableStop
from src.domain.scoring import ScoringEngine

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post(
    "/scores",
    response_model=list[ScoredStopResponse],
    summary="Score every stop, best first",
)
@limiter.limit(current_rate_limit)
async def get_scores(
    request: Request,
    body: NextStopRequest,
    engine: ScoringEngine = Depends(get_engine),
):
    try:
        ranking = engine.ranking(body.current_location.to_point(), body.current_time)
    except NoSuitableStop:
        raise HTTPException(status_code=404, detail="No suitable stop found.")
    return [ScoredStopResponse.from_scored(s) for s in ranking]


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health(engine: ScoringEngine = Depends(get_engine)):
    return HealthResponse(stops=len(engine.catalog))
