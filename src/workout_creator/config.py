"""Application settings loaded from the environment.

Values can be set with ``WORKOUT_CREATOR_*`` environment variables or a
``.env`` file in the working directory, e.g.::

    WORKOUT_CREATOR_DATA_DIR=/tmp/workouts
    WORKOUT_CREATOR_CLEAR_INACTIVE_FIELDS=true
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent / "data"

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Runtime configuration for the store, the codec and logging."""

    model_config = SettingsConfigDict(
        env_prefix="WORKOUT_CREATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(default=DATA_DIR, description="Directory holding the database")
    db_name: str = Field(default="workouts.db", description="SQLite file name")
    log_level: str = Field(default="INFO")
    log_file: str | None = Field(default=None, description="Optional rotating log file")
    clear_inactive_fields: bool = Field(
        default=False,
        description=(
            "Reset the method fields the active training method does not use "
            "when a new method is encoded. Off keeps the last values around so "
            "switching back restores them."
        ),
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()
