"""Configuration settings for the workout tracker."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import Position


DEFAULT_DATA_DIR = Path.home() / ".workout-tracker"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Storage
    storage_backend: Literal["file", "sqlite", "memory"] = "file"
    data_dir: Path = DEFAULT_DATA_DIR
    storage_key: str = "workouts"

    # Map
    map_zoom_level: int = 13
    home_latitude: Optional[float] = None
    home_longitude: Optional[float] = None

    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="WORKOUT_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def storage_path(self) -> Path:
        """File (or directory) the configured backend writes to."""
        if self.storage_backend == "sqlite":
            return self.data_dir / "workouts.db"
        return self.data_dir

    @property
    def home_position(self) -> Optional[Position]:
        if self.home_latitude is None or self.home_longitude is None:
            return None
        return Position(self.home_latitude, self.home_longitude)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
