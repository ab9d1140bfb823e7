"""FastAPI dependency injection helpers."""

from fastapi import Request

from src.domain.scoring import ScoringEngine


def get_engine(request: Request) -> ScoringEngine:
    """Return the engine built over the catalog loaded at start-up."""
    return request.app.state.engine
