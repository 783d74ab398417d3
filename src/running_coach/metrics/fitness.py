"""Fitness-Fatigue model calculations (CTL, ATL, TSB, form)."""

import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, TYPE_CHECKING

from .load import calculate_tss

if TYPE_CHECKING:
    from ..models.workouts import WorkoutRecord


CTL_DAYS = 42  # Chronic window and time constant
ATL_DAYS = 7  # Acute window and time constant


@dataclass(frozen=True)
class FormStatus:
    """Qualitative form label derived from TSB."""

    status: str
    description: str
    color: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "status": self.status,
            "description": self.description,
            "color": self.color,
        }


@dataclass(frozen=True)
class FitnessState:
    """CTL, ATL, TSB and form as of a single reference date."""

    date: date
    ctl: float  # Chronic Training Load (fitness)
    atl: float  # Acute Training Load (fatigue)
    tsb: float  # Training Stress Balance (form) = CTL - ATL
    form: FormStatus

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date.isoformat(),
            "ctl": round(self.ctl, 1),
            "atl": round(self.atl, 1),
            "tsb": round(self.tsb, 1),
            "form_status": self.form.to_dict(),
        }


def build_daily_tss(
    workouts: Iterable["WorkoutRecord"],
    user_max_hr: Optional[int] = None,
) -> Dict[date, float]:
    """
    Sum TSS per calendar day.

    Args:
        workouts: Completed runs, in any order
        user_max_hr: Athlete's max HR for the HR-based TSS estimate

    Returns:
        Mapping of date to total TSS, one entry per day with a run
    """
    daily: Dict[date, float] = defaultdict(float)
    for workout in workouts:
        daily[workout.date] += calculate_tss(workout, user_max_hr)
    return dict(daily)


def calculate_weighted_load(
    daily_tss: Dict[date, float],
    target_date: date,
    window: int,
    time_constant: int,
) -> float:
    """
    Exponentially weighted load over the days ending at target_date.

    Day i back from target_date (i = 0 is target_date itself) is weighted
    by e^(-i / time_constant). The weighted sum is divided by the window
    length, not by the sum of the weights.

    Args:
        daily_tss: Date to total TSS mapping; missing days count as 0
        target_date: Last (most recent) day of the window
        window: Number of days to include
        time_constant: Decay constant in days

    Returns:
        Weighted load for the window
    """
    total = 0.0
    for i in range(window):
        day = target_date - timedelta(days=i)
        total += daily_tss.get(day, 0.0) * math.exp(-i / time_constant)
    return total / window


def calculate_ctl(daily_tss: Dict[date, float], target_date: date) -> float:
    """Chronic Training Load: 42-day weighted load (fitness)."""
    return calculate_weighted_load(daily_tss, target_date, CTL_DAYS, CTL_DAYS)


def calculate_atl(daily_tss: Dict[date, float], target_date: date) -> float:
    """Acute Training Load: 7-day weighted load (fatigue)."""
    return calculate_weighted_load(daily_tss, target_date, ATL_DAYS, ATL_DAYS)


def calculate_tsb(ctl: float, atl: float) -> float:
    """Training Stress Balance: CTL - ATL."""
    return ctl - atl


def get_form_status(tsb: float) -> FormStatus:
    """
    Classify form from TSB.

    - TSB > 25: Very fresh, possibly losing fitness
    - TSB 10 to 25: Fresh, good for racing
    - TSB -10 to 10: Neutral, normal training
    - TSB -30 to -10: Fatigued, building fitness
    - TSB <= -30: Very fatigued, overtraining risk

    Args:
        tsb: Training Stress Balance

    Returns:
        FormStatus with label, description and display color
    """
    if tsb > 25:
        return FormStatus(
            status="Very Fresh",
            description="Well rested, possibly losing fitness. Good time for a race or hard workout.",
            color="green",
        )
    elif tsb > 10:
        return FormStatus(
            status="Fresh",
            description="Good form for racing or quality workouts.",
            color="lightgreen",
        )
    elif tsb > -10:
        return FormStatus(
            status="Neutral",
            description="Normal training state. Balance of fitness and fatigue.",
            color="yellow",
        )
    elif tsb > -30:
        return FormStatus(
            status="Fatigued",
            description="Building fitness but accumulating fatigue. Monitor recovery.",
            color="orange",
        )
    else:
        return FormStatus(
            status="Very Fatigued",
            description="High overtraining risk. Prioritize recovery.",
            color="red",
        )


def fitness_state_from_daily_tss(
    daily_tss: Dict[date, float],
    reference_date: date,
) -> FitnessState:
    """Compute the fitness state for one day from a prebuilt daily TSS map."""
    ctl = calculate_ctl(daily_tss, reference_date)
    atl = calculate_atl(daily_tss, reference_date)
    tsb = calculate_tsb(ctl, atl)
    return FitnessState(
        date=reference_date,
        ctl=ctl,
        atl=atl,
        tsb=tsb,
        form=get_form_status(tsb),
    )


def calculate_fitness_state(
    workouts: Iterable["WorkoutRecord"],
    reference_date: date,
    user_max_hr: Optional[int] = None,
) -> FitnessState:
    """
    CTL, ATL, TSB and form for an athlete as of reference_date.

    Args:
        workouts: Completed runs covering at least the 42 days before
            reference_date; later runs are ignored by the windows
        reference_date: Day to evaluate
        user_max_hr: Athlete's max HR for the HR-based TSS estimate

    Returns:
        FitnessState for reference_date
    """
    daily_tss = build_daily_tss(workouts, user_max_hr)
    return fitness_state_from_daily_tss(daily_tss, reference_date)


def calculate_fitness_history(
    workouts: Iterable["WorkoutRecord"],
    start_date: date,
    end_date: date,
    user_max_hr: Optional[int] = None,
) -> List[FitnessState]:
    """
    Daily fitness states for every day from start_date to end_date.

    The daily TSS map is built once and reused for every day.

    Returns:
        One FitnessState per day, oldest first; empty if start > end
    """
    if start_date > end_date:
        return []

    daily_tss = build_daily_tss(workouts, user_max_hr)
    days = (end_date - start_date).days + 1
    return [
        fitness_state_from_daily_tss(daily_tss, start_date + timedelta(days=offset))
        for offset in range(days)
    ]
