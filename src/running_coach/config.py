"""Configuration settings for the running coach analytics."""

from pathlib import Path
from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

from .metrics.fitness import CTL_DAYS


# __file__ = src/running_coach/config.py
PACKAGE_ROOT = Path(__file__).parent  # src/running_coach/
PROJECT_ROOT = PACKAGE_ROOT.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every field can be set with a ``RUNNING_COACH_`` prefixed variable,
    e.g. ``RUNNING_COACH_LOOKBACK_DAYS=90``.
    """

    # Analysis windows
    lookback_days: int = 60  # CTL needs 42 days plus margin
    insight_window_days: int = 14

    # Data source
    data_source: Literal["sqlite", "supabase"] = "sqlite"
    training_db_path: Path | None = None
    supabase_url: str = ""
    supabase_service_key: str = ""

    # Logging
    log_level: str = "INFO"

    def model_post_init(self, __context) -> None:
        """Set default database path after initialization."""
        if self.training_db_path is None:
            self.training_db_path = PROJECT_ROOT / "training.db"

    @field_validator("lookback_days")
    @classmethod
    def validate_lookback_days(cls, v: int) -> int:
        """The fetch window must cover the full CTL window."""
        if v < CTL_DAYS:
            raise ValueError(f"lookback_days must be at least {CTL_DAYS}")
        return v

    @field_validator("insight_window_days")
    @classmethod
    def validate_insight_window(cls, v: int) -> int:
        if v < 1:
            raise ValueError("insight_window_days must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_insight_window_within_lookback(self) -> "Settings":
        """Insights are computed from the lookback fetch, so the window must fit inside it."""
        if self.insight_window_days > self.lookback_days:
            raise ValueError("insight_window_days must not exceed lookback_days")
        return self

    class Config:
        env_prefix = "RUNNING_COACH_"
        env_file = str(PROJECT_ROOT / ".env")
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
