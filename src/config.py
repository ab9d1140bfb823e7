"""Centralised application settings loaded from environment / .env file."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False
    log_level: str = "INFO"

    # Stop catalog
    catalog_path: Optional[str] = None  # JSON file; None -> built-in sample
    timezone: str = "UTC"  # IANA zone for resolving hour / weekday

    # Rate limiting
    rate_limit: str = "100/minute"
    rate_limit_enabled: bool = True

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
