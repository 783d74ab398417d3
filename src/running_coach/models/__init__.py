"""Data models for workouts and coaching insights."""

from .workouts import AthleteProfile, PersonalBest, RunType, WorkoutRecord
from .insights import (
    PRIORITY_ORDER,
    Insight,
    InsightCategory,
    InsightPriority,
    InsightType,
)

__all__ = [
    "AthleteProfile",
    "PersonalBest",
    "RunType",
    "WorkoutRecord",
    "PRIORITY_ORDER",
    "Insight",
    "InsightCategory",
    "InsightPriority",
    "InsightType",
]
