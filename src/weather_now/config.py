"""
Application settings.

Values come from ``WEATHER_NOW_*`` environment variables or a ``.env`` file::

    WEATHER_NOW_LOCATION_PROVIDER=fixed
    WEATHER_NOW_FIXED_LAT=52.52
    WEATHER_NOW_FIXED_LON=13.405
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the CLI, the location pipeline and the site build."""

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_NOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "weather-now"
    app_env: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    # Where "my location" comes from. "none" means the host has no location capability.
    location_provider: Literal["ip", "fixed", "denied", "none"] = "ip"
    fixed_lat: float | None = Field(default=None, ge=-90, le=90)
    fixed_lon: float | None = Field(default=None, ge=-180, le=180)
    location_timeout_ms: int = Field(default=10_000, gt=0)
    location_max_age_ms: int = Field(default=60_000, ge=0)
    high_accuracy: bool = True

    forecast_days: int = Field(default=7, ge=1, le=16)

    site_dir: Path = Path("site")
    api_port: int = Field(default=8000, ge=1, le=65535)

    @model_validator(mode="after")
    def validate_fixed_location(self) -> Settings:
        if self.location_provider == "fixed" and (self.fixed_lat is None or self.fixed_lon is None):
            raise ValueError("fixed_lat and fixed_lon are required when location_provider is 'fixed'")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
