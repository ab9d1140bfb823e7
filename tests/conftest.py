"""
Shared test fixtures.

The API fixture builds the app around an explicit catalog so tests never
depend on ``CATALOG_PATH`` in the environment.
"""

from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.api.middleware import limiter
from src.domain.entities import DemandProfile, GeoPoint, Stop
from src.infrastructure.catalog import load_catalog

# Stop A of the sample catalog
STOP_A = GeoPoint(12.9716, 77.5946)

# Monday 2024-01-15 / Saturday 2024-01-13
WEEKDAY_9AM = datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)
WEEKDAY_NOON = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
WEEKEND_9AM = datetime(2024, 1, 13, 9, 0, tzinfo=timezone.utc)


def make_stop(
    stop_id: int,
    lat: float = 12.95,
    lng: float = 77.60,
    weekday: float = 50,
    weekend: float = 80,
    supply: float = 3,
) -> Stop:
    return Stop(
        id=stop_id,
        name=f"Stop {stop_id}",
        location=GeoPoint(lat, lng),
        demand=DemandProfile(weekday=weekday, weekend=weekend),
        supply=supply,
    )


@pytest.fixture
def sample_catalog() -> tuple[Stop, ...]:
    return load_catalog()


@pytest_asyncio.fixture
async def client(sample_catalog) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient over an app serving the built-in sample catalog."""
    from src.api.app import create_app

    app = create_app(catalog=sample_catalog)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def empty_client() -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient over an app with no stops configured."""
    from src.api.app import create_app

    app = create_app(catalog=())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(autouse=True)
def fresh_limiter():
    """Empty rate-limit counters per test; restore the enabled flag after."""
    enabled = limiter.enabled
    limiter.reset()
    yield
    limiter.enabled = enabled
