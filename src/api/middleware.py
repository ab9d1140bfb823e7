"""Per-client rate limiting shared by every router."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from src.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)


def current_rate_limit() -> str:
    """Limit string read per request, so a settings change applies at once."""
    return settings.rate_limit
