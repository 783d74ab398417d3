"""
Training phase detection for structured plans.

Works out where the athlete is in a plan (base, build, peak, taper) from
the plan length, the current week and the recent mix of run types, and
provides phase-specific guidance for the coaching context.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence


QUALITY_RUN_TYPES = {"Tempo Run", "Quality Run", "Intervals"}


class Phase(str, Enum):
    """Training plan phases."""
    BASE = "base"
    BUILD = "build"
    PEAK = "peak"
    TAPER = "taper"
    RECOVERY = "recovery"
    UNKNOWN = "unknown"


@dataclass
class TrainingPlan:
    """The parts of a training plan phase detection needs."""
    weeks: int
    name: Optional[str] = None


@dataclass
class PlannedRun:
    """A run scheduled in the plan."""
    week_number: int
    run_type: str
    planned_distance: Optional[float] = None


@dataclass
class TrainingPhase:
    """Where the athlete is in their plan."""
    phase: Phase
    week_in_phase: int
    total_weeks_in_phase: int
    description: str
    focus: str
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "week_in_phase": self.week_in_phase,
            "total_weeks_in_phase": self.total_weeks_in_phase,
            "description": self.description,
            "focus": self.focus,
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class PhaseWorkoutGuide:
    """Weekly structure guidance for a phase."""
    easy_run_percent: int
    quality_runs_per_week: int
    long_run_distance: str
    intensity_focus: str


def detect_training_phase(
    plan: Optional[TrainingPlan],
    current_week: int,
    runs: Sequence[PlannedRun],
) -> TrainingPhase:
    """
    Detect the current training phase.

    Rules, first match wins:
    - No plan: unknown
    - 2 or fewer weeks remaining: taper
    - 4 or fewer weeks remaining with 2+ quality runs in the last
      three plan weeks: peak
    - First 40% of the plan: base
    - Otherwise: build

    Args:
        plan: Active training plan, or None
        current_week: 1-based week number within the plan
        runs: Runs scheduled in the plan

    Returns:
        TrainingPhase with guidance for the detected phase
    """
    if plan is None:
        return TrainingPhase(
            phase=Phase.UNKNOWN,
            week_in_phase=0,
            total_weeks_in_phase=0,
            description="No active training plan",
            focus="General fitness",
            recommendations=["Create a structured training plan to optimize your progress"],
        )

    total_weeks = plan.weeks
    weeks_remaining = total_weeks - current_week + 1

    recent_runs = [
        r for r in runs
        if current_week - 2 <= r.week_number <= current_week
    ]
    quality_run_count = sum(1 for r in recent_runs if r.run_type in QUALITY_RUN_TYPES)

    base_weeks = math.ceil(total_weeks * 0.4)
    build_weeks = math.ceil(total_weeks * 0.35)

    if weeks_remaining <= 2:
        return TrainingPhase(
            phase=Phase.TAPER,
            week_in_phase=3 - weeks_remaining,
            total_weeks_in_phase=2,
            description="Taper - Race preparation phase",
            focus="Reduce volume, maintain intensity, maximize recovery",
            recommendations=[
                "Reduce weekly mileage by 40-60%",
                "Keep 1-2 short quality sessions to maintain sharpness",
                "Prioritize sleep and recovery",
                "Practice race-day nutrition and pacing",
                "Trust your training - avoid last-minute hard workouts",
            ],
        )

    if weeks_remaining <= 4 and quality_run_count >= 2:
        return TrainingPhase(
            phase=Phase.PEAK,
            week_in_phase=5 - weeks_remaining,
            total_weeks_in_phase=3,
            description="Peak - Race-specific training",
            focus="Race-pace work, lactate threshold, speed endurance",
            recommendations=[
                "Include race-pace intervals in workouts",
                "Practice goal race pace in tempo runs",
                "Maintain high intensity but watch for overtraining",
                "Include race-specific workouts (e.g., marathon pace runs)",
                "Monitor recovery carefully - TSB should stay above -20",
            ],
        )

    if current_week <= total_weeks * 0.4:
        return TrainingPhase(
            phase=Phase.BASE,
            week_in_phase=current_week,
            total_weeks_in_phase=base_weeks,
            description="Base Building - Aerobic foundation",
            focus="Build aerobic base, increase weekly mileage gradually",
            recommendations=[
                "Focus on easy runs in Zone 2 (60-70% max HR)",
                "Increase weekly mileage by no more than 10%",
                "Include 1 long run per week",
                "Limit quality work to 1 session per week",
                "Build consistency - aim for 4-5 runs per week",
                "Focus on time on feet rather than pace",
            ],
        )

    if current_week <= total_weeks * 0.75:
        return TrainingPhase(
            phase=Phase.BUILD,
            week_in_phase=current_week - base_weeks,
            total_weeks_in_phase=build_weeks,
            description="Build - Strength and speed development",
            focus="Increase intensity, develop lactate threshold, build strength",
            recommendations=[
                "Include 2 quality sessions per week (tempo, intervals, hills)",
                "Maintain or slightly increase weekly mileage",
                "Focus on tempo runs at lactate threshold pace",
                "Add hill repeats for strength",
                "Include recovery runs between hard efforts",
                "Monitor fatigue - take rest days as needed",
            ],
        )

    # Late plan without enough quality work to count as peak
    return TrainingPhase(
        phase=Phase.BUILD,
        week_in_phase=current_week - base_weeks,
        total_weeks_in_phase=build_weeks,
        description="Build - Strength and speed development",
        focus="Increase intensity, develop lactate threshold",
        recommendations=[
            "Include 2 quality sessions per week",
            "Balance hard efforts with recovery",
            "Monitor training load carefully",
        ],
    )


_PHASE_GUIDES = {
    Phase.BASE: PhaseWorkoutGuide(
        easy_run_percent=85,
        quality_runs_per_week=1,
        long_run_distance="20-25% of weekly mileage",
        intensity_focus="Zone 2 aerobic work, occasional tempo",
    ),
    Phase.BUILD: PhaseWorkoutGuide(
        easy_run_percent=75,
        quality_runs_per_week=2,
        long_run_distance="25-30% of weekly mileage",
        intensity_focus="Tempo runs, hill repeats, threshold work",
    ),
    Phase.PEAK: PhaseWorkoutGuide(
        easy_run_percent=70,
        quality_runs_per_week=2,
        long_run_distance="30% of weekly mileage with race-pace segments",
        intensity_focus="Race-pace intervals, VO2max work, speed endurance",
    ),
    Phase.TAPER: PhaseWorkoutGuide(
        easy_run_percent=90,
        quality_runs_per_week=1,
        long_run_distance="Reduce to 50-60% of peak long run",
        intensity_focus="Short race-pace efforts to maintain sharpness",
    ),
}

_DEFAULT_GUIDE = PhaseWorkoutGuide(
    easy_run_percent=80,
    quality_runs_per_week=1,
    long_run_distance="20-25% of weekly mileage",
    intensity_focus="Balanced training",
)


def get_phase_workout_recommendations(phase: TrainingPhase) -> PhaseWorkoutGuide:
    """Weekly structure guidance for the detected phase."""
    return _PHASE_GUIDES.get(phase.phase, _DEFAULT_GUIDE)
