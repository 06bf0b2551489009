"""Runtime settings loaded from the environment."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from ``CLU_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CLU_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    CONFIG_PATH: str = Field(
        default=".clconfig.json", description="Path of the changelog configuration file"
    )
    LOG_LEVEL: str = Field(default="WARNING", description="Log level for the clu logger")


@lru_cache
def get_settings() -> Settings:
    """Return memoized settings."""
    return Settings()
