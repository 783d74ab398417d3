"""Training Stress Score (TSS) estimation for runs."""

import math
from typing import Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..models.workouts import WorkoutRecord


# Intensity factor per run kind for the distance-based estimate
INTENSITY_FACTORS: Dict[str, float] = {
    "Easy Run": 0.6,
    "Long Run": 0.7,
    "Tempo Run": 0.85,
    "Quality Run": 0.95,
}
DEFAULT_INTENSITY_FACTOR = 0.7


def parse_duration(value: Optional[str]) -> Optional[float]:
    """
    Parse a colon-delimited duration into seconds.

    Accepts "H:MM:SS" (three parts) or "MM:SS" (two parts). An empty part
    counts as zero, so "1::00" is one hour. Any other shape, or a part
    that is not a number, yields None.

    Args:
        value: Duration string, e.g. "01:05:30" or "45:10"

    Returns:
        Total seconds, or None if the value is empty or malformed
    """
    if not value:
        return None

    try:
        parts = [float(part) if part.strip() else 0.0 for part in value.strip().split(":")]
    except ValueError:
        return None
    if not all(math.isfinite(part) for part in parts):
        return None

    if len(parts) == 3:
        return parts[0] * 3600 + parts[1] * 60 + parts[2]
    if len(parts) == 2:
        return parts[0] * 60 + parts[1]
    return None


def duration_hours(value: Optional[str]) -> float:
    """Duration in hours, 0.0 when the string cannot be parsed."""
    seconds = parse_duration(value)
    if seconds is None:
        return 0.0
    return seconds / 3600


def get_intensity_factor(workout_kind: Optional[str]) -> float:
    """Intensity factor for a run kind, 0.7 for unknown kinds."""
    return INTENSITY_FACTORS.get(workout_kind or "", DEFAULT_INTENSITY_FACTOR)


def calculate_rpe_tss(hours: float, rpe: int) -> float:
    """RPE-based estimate: hours * RPE * 10."""
    return hours * rpe * 10


def calculate_distance_tss(distance_km: float, workout_kind: Optional[str]) -> float:
    """Distance-based estimate: km * intensity factor * 10."""
    return distance_km * get_intensity_factor(workout_kind) * 10


def calculate_hr_tss(hours: float, avg_hr: int, max_hr: int) -> float:
    """Heart-rate-based estimate: hours * (avg HR / max HR) * 100."""
    return hours * (avg_hr / max_hr) * 100


def calculate_tss(workout: "WorkoutRecord", user_max_hr: Optional[int] = None) -> float:
    """
    Training Stress Score for a single run.

    Averages up to three independent estimates, using only those the
    workout has data for:
    1. RPE-based: needs RPE and a duration string
    2. Distance-based: needs distance (intensity factor from run kind)
    3. HR-based: needs average HR, the athlete's max HR and a duration string

    A duration string that does not parse counts as zero hours; the
    RPE and HR estimates still run and contribute 0 to the average.

    Args:
        workout: The completed run
        user_max_hr: Athlete's max heart rate from their profile

    Returns:
        Average of the available estimates, 0.0 if none apply
    """
    scores: List[float] = []

    if workout.perceived_effort and workout.actual_time:
        hours = duration_hours(workout.actual_time)
        scores.append(calculate_rpe_tss(hours, workout.perceived_effort))

    if workout.distance_km:
        scores.append(calculate_distance_tss(workout.distance_km, workout.workout_kind))

    if workout.average_hr and user_max_hr and workout.actual_time:
        hours = duration_hours(workout.actual_time)
        scores.append(calculate_hr_tss(hours, workout.average_hr, user_max_hr))

    if not scores:
        return 0.0
    return sum(scores) / len(scores)
