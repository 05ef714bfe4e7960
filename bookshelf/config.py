# bookshelf/config.py
"""Application settings loaded from the environment.

Values come from ``BOOKSHELF_``-prefixed environment variables or a
local ``.env`` file. Empty variables are ignored so that an unset value
in ``.env`` falls back to the default below.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BOOKSHELF_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # "development" exposes tracebacks in error bodies
    environment: Literal["development", "production", "test"] = Field(
        default="development"
    )
    log_level: str = Field(default="INFO")

    app_title: str = Field(default="In-N-Out-Books")
    seed_sample_books: bool = Field(default=True)

    # When set, "12abc" is rejected instead of being read as 12.
    strict_ids: bool = Field(default=False)

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000)

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    logger.debug("Loaded settings for environment %s", settings.environment)
    return settings
