"""Shared fixtures for running coach tests."""

from datetime import date

import pytest

from running_coach.config import get_settings
from running_coach.models.workouts import WorkoutRecord


# Sunday
REFERENCE_DATE = date(2026, 3, 15)


@pytest.fixture
def reference_date():
    return REFERENCE_DATE


@pytest.fixture
def make_workout():
    """Factory for completed runs; fields default to a 10km easy run."""

    def _make(day, **overrides):
        fields = {
            "date": day,
            "distance_km": 10.0,
            "actual_time": None,
            "perceived_effort": None,
            "workout_kind": "Easy Run",
        }
        fields.update(overrides)
        return WorkoutRecord(**fields)

    return _make


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Keep cached settings and RUNNING_COACH_ variables out of other tests."""
    for name in (
        "RUNNING_COACH_LOOKBACK_DAYS",
        "RUNNING_COACH_INSIGHT_WINDOW_DAYS",
        "RUNNING_COACH_DATA_SOURCE",
        "RUNNING_COACH_TRAINING_DB_PATH",
        "RUNNING_COACH_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
