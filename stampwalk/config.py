"""Typed settings for the StampWalk app, read from ``STAMPWALK_*`` environment variables."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from stampwalk.models import Coordinate


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STAMPWALK_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Stamp collection
    collection_radius_m: float = 50.0
    stamp_goal: int = 12

    # Fallback position (town centre) when no location fix is available
    default_latitude: float = 33.5904
    default_longitude: float = 130.4017

    # How long a location fix stays valid (seconds)
    location_max_age_s: int = 300

    # Catalog
    catalog_path: Optional[str] = None

    # Geocoding
    geocoder_user_agent: str = "stampwalk_app"

    log_level: str = "INFO"

    @property
    def default_location(self) -> Coordinate:
        return Coordinate(self.default_latitude, self.default_longitude)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
