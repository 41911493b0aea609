"""
Configuration and settings for the Calabozos backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from upstream.dnd_api import DEFAULT_BASE_URL, REQUEST_TIMEOUT


class Settings(BaseSettings):
    """Environment-backed settings, read from CALABOZOS_* variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CALABOZOS_",
        extra="ignore",
    )

    app_env: str = Field(default="dev")
    api_prefix: str = Field(default="/api/calabozos")

    # Bearer token guarding the API prefix; unset leaves it open (dev only).
    api_token: Optional[str] = Field(default=None)

    # Database (Postgres expected, any SQLAlchemy URL works)
    database_url: Optional[str] = Field(default=None)
    use_in_memory_backends: bool = Field(default=False)

    # Upstream D&D 5e API
    dnd_api_base_url: str = Field(default=DEFAULT_BASE_URL)
    dnd_api_timeout_seconds: float = Field(default=REQUEST_TIMEOUT, gt=0)

    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
