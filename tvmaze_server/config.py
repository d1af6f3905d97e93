"""Configuration management for the TVMaze MCP server."""

from functools import lru_cache

from pydantic import PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server settings loaded from TVMAZE_* environment variables."""

    base_url: str = "https://api.tvmaze.com"
    request_timeout: PositiveFloat = 10.0  # Per-request timeout in seconds
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="TVMAZE_")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
