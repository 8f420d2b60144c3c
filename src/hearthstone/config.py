"""
Hearthstone - Configuration and settings.

Settings are read from the environment and an optional .env file.
Remote sync is only enabled when both Supabase fields are present.
"""

import logging
import sys
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    hearthstone_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Local persistence (JsonFileStore root)
    data_dir: str = ".hearthstone"

    # Supabase (optional - local-only when missing)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    # Engine tuning
    expiry_window_days: int = 5
    invite_expiry_days: int = 7
    recipe_cache_minutes: int = 60

    @property
    def is_development(self) -> bool:
        return self.hearthstone_env == "development"

    @property
    def is_production(self) -> bool:
        return self.hearthstone_env == "production"

    @property
    def sync_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Quiet down noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
