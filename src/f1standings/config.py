"""
Service configuration using Pydantic Settings.
Every value can be overridden with an ``F1STANDINGS_`` environment variable.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from f1standings.constants import DEFAULT_BASE_URL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="F1STANDINGS_")

    # API
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    season: int = 2025

    # Remote access discipline (seconds)
    cache_ttl: float = 30 * 60
    max_attempts: int = 3
    backoff_base: float = 0.5
    rate_limit_delay: float = 1.0
    request_delay: float = 0.5

    # Aggregation
    refresh_interval: float = 30 * 60

    log_dir: Path = Path("logs")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()
