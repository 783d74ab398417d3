"""
Analysis module for training history.

Provides the rule-based coaching insights and training phase detection.
"""

from .insights import (
    INSIGHT_RULES,
    InsightContext,
    generate_insights,
    longest_high_effort_streak,
    sort_insights,
    weekly_mileage,
)
from .phases import (
    Phase,
    PhaseWorkoutGuide,
    PlannedRun,
    TrainingPhase,
    TrainingPlan,
    detect_training_phase,
    get_phase_workout_recommendations,
)

__all__ = [
    # Insights
    "INSIGHT_RULES",
    "InsightContext",
    "generate_insights",
    "longest_high_effort_streak",
    "sort_insights",
    "weekly_mileage",
    # Phases
    "Phase",
    "PhaseWorkoutGuide",
    "PlannedRun",
    "TrainingPhase",
    "TrainingPlan",
    "detect_training_phase",
    "get_phase_workout_recommendations",
]
