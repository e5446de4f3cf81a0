from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings, read from ``PERIODGRID_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PERIODGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO")
    log_file: str | None = None
    loaded_block_id_prefix: str = Field(default="db-")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
