"""Tests for settings loading and validation."""

import pytest
from pydantic import ValidationError

from running_coach.config import PROJECT_ROOT, Settings, get_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.lookback_days == 60
        assert settings.insight_window_days == 14
        assert settings.data_source == "sqlite"
        assert settings.training_db_path == PROJECT_ROOT / "training.db"

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("RUNNING_COACH_LOOKBACK_DAYS", "90")
        monkeypatch.setenv("RUNNING_COACH_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.lookback_days == 90
        assert settings.log_level == "DEBUG"

    def test_lookback_must_cover_ctl_window(self):
        with pytest.raises(ValidationError):
            Settings(lookback_days=30)

    def test_insight_window_positive(self):
        with pytest.raises(ValidationError):
            Settings(insight_window_days=0)

    def test_insight_window_must_fit_lookback(self):
        with pytest.raises(ValidationError, match="must not exceed lookback_days"):
            Settings(lookback_days=60, insight_window_days=61)

    def test_insight_window_equal_to_lookback(self):
        settings = Settings(lookback_days=60, insight_window_days=60)
        assert settings.insight_window_days == settings.lookback_days

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_unknown_data_source(self):
        with pytest.raises(ValidationError):
            Settings(data_source="postgres")


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()
