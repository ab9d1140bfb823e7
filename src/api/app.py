"""
FastAPI application factory.

* Loads and validates the stop catalog once; requests share it read-only.
* Registers routes for stops and admin.
* Maps request validation failures to 400 with a field-specific message
  and renders every error body as ``{"error": ...}``.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.middleware import limiter
from src.api.routes import admin, stops
from src.config import settings
from src.domain.entities import Stop
from src.domain.scoring import ScoringEngine
from src.infrastructure.catalog import load_catalog

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

INVALID_LOCATION = "Invalid location. Provide latitude and longitude."
INVALID_TIME = "Invalid time. Provide a valid timestamp."


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report a bad location first, then a bad timestamp, as HTTP 400."""
    locs = [err.get("loc", ()) for err in exc.errors()]
    if any("currentLocation" in loc for loc in locs):
        message = INVALID_LOCATION
    elif any("currentTime" in loc for loc in locs):
        message = INVALID_TIME
    else:
        # Missing or non-object body: nothing usable, location is checked first
        message = INVALID_LOCATION
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render every HTTP error as ``{"error": <message>}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def create_app(catalog: Optional[Sequence[Stop]] = None) -> FastAPI:
    """Build the app; *catalog* overrides the configured stop source."""
    if catalog is None:
        catalog = load_catalog(settings.catalog_path)

    app = FastAPI(
        title="Next-Stop Recommendation API",
        description=(
            "Recommends the best next stop for a driver by scoring every "
            "stop on time-varying demand, supply scarcity and proximity."
        ),
        version="1.0.0",
    )
    app.state.engine = ScoringEngine(catalog, ZoneInfo(settings.timezone))

    # Rate limiter
    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)

    # Routers
    app.include_router(stops.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
