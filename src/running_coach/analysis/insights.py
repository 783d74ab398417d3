"""
Proactive coaching insights from recent training.

Each rule looks at the last two weeks of runs plus the current fitness
metrics and returns at most one Insight:
- Overtraining risk (TSB)
- Consecutive high-intensity runs
- Rapid weekly mileage increase (injury risk)
- Recent personal bests
- Low training consistency
- Peak form (fresh and fit)

Rules are independent; several can fire for the same history.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..models.insights import (
    PRIORITY_ORDER,
    Insight,
    InsightCategory,
    InsightPriority,
    InsightType,
)
from ..models.workouts import PersonalBest, WorkoutRecord


HIGH_EFFORT_RPE = 8
HIGH_EFFORT_STREAK = 3
MILEAGE_INCREASE_LIMIT_PCT = 20.0
MIN_TRAINING_DAYS = 4
MIN_WORKOUTS = 5


@dataclass(frozen=True)
class InsightContext:
    """Inputs shared by every insight rule."""

    workouts: Sequence[WorkoutRecord]  # chronological, insight window only
    tsb: float
    ctl: float
    atl: float
    recent_personal_bests: Sequence[PersonalBest] = field(default_factory=tuple)


InsightRule = Callable[[InsightContext], Optional[Insight]]


def week_start(day: date) -> date:
    """Sunday that starts the week containing day."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def longest_high_effort_streak(
    workouts: Sequence[WorkoutRecord],
    threshold: int = HIGH_EFFORT_RPE,
) -> int:
    """Longest run of consecutive workouts with RPE >= threshold."""
    longest = 0
    current = 0
    for workout in workouts:
        if workout.perceived_effort and workout.perceived_effort >= threshold:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def weekly_mileage(workouts: Sequence[WorkoutRecord]) -> List[float]:
    """
    Total distance per Sunday-start calendar week, oldest week first.

    Runs without a distance are ignored, so a week only appears if it
    has at least one run with distance.
    """
    totals: Dict[date, float] = {}
    for workout in workouts:
        if workout.distance_km:
            key = week_start(workout.date)
            totals[key] = totals.get(key, 0.0) + workout.distance_km
    return [totals[key] for key in sorted(totals)]


def check_overtraining(ctx: InsightContext) -> Optional[Insight]:
    """Flag very negative TSB."""
    if ctx.tsb < -30:
        return Insight(
            type=InsightType.DANGER,
            category=InsightCategory.OVERTRAINING,
            title="High Overtraining Risk Detected",
            description=(
                f"Your Training Stress Balance (TSB) is {ctx.tsb:.1f}, indicating very high "
                "fatigue levels. You've been training hard without adequate recovery."
            ),
            recommendation=(
                "Take 2-3 easy days or a complete rest day. Reduce training volume by 30-40% "
                "this week. Focus on sleep, nutrition, and hydration."
            ),
            priority=InsightPriority.HIGH,
        )
    if ctx.tsb < -20:
        return Insight(
            type=InsightType.WARNING,
            category=InsightCategory.OVERTRAINING,
            title="Elevated Fatigue Levels",
            description=(
                f"Your TSB is {ctx.tsb:.1f}, showing significant accumulated fatigue. While "
                "building fitness, you need to monitor recovery closely."
            ),
            recommendation=(
                "Include at least one easy recovery run this week. Ensure 8+ hours of sleep. "
                "Consider a rest day if feeling unusually tired."
            ),
            priority=InsightPriority.MEDIUM,
        )
    return None


def check_high_intensity_streak(ctx: InsightContext) -> Optional[Insight]:
    """Flag three or more hard runs in a row."""
    high_effort = [
        w for w in ctx.workouts
        if w.perceived_effort and w.perceived_effort >= HIGH_EFFORT_RPE
    ]
    if len(high_effort) < HIGH_EFFORT_STREAK:
        return None

    streak = longest_high_effort_streak(ctx.workouts)
    if streak < HIGH_EFFORT_STREAK:
        return None

    return Insight(
        type=InsightType.WARNING,
        category=InsightCategory.RECOVERY,
        title="Consecutive High-Intensity Runs Detected",
        description=(
            f"You've completed {streak} consecutive runs with RPE ≥ {HIGH_EFFORT_RPE}. "
            "This pattern increases injury risk and can lead to burnout."
        ),
        recommendation=(
            "Schedule at least 2 easy runs (RPE 4-6) before your next hard workout. "
            "Follow the hard-easy principle."
        ),
        priority=InsightPriority.HIGH,
    )


def mileage_change(workouts: Sequence[WorkoutRecord]) -> Optional[Tuple[float, float, float]]:
    """
    Week-over-week mileage change for the two most recent weeks.

    Returns:
        (previous_week_km, last_week_km, increase_percent), or None when
        fewer than two weeks have distance data
    """
    weeks = weekly_mileage(workouts)
    if len(weeks) < 2:
        return None
    previous_week, last_week = weeks[-2], weeks[-1]
    increase_percent = (last_week - previous_week) / previous_week * 100
    return previous_week, last_week, increase_percent


def check_mileage_increase(ctx: InsightContext) -> Optional[Insight]:
    """Flag weekly mileage jumps above 20%."""
    change = mileage_change(ctx.workouts)
    if change is None:
        return None

    previous_week, last_week, increase_percent = change
    if increase_percent <= MILEAGE_INCREASE_LIMIT_PCT:
        return None

    return Insight(
        type=InsightType.WARNING,
        category=InsightCategory.INJURY_RISK,
        title="Rapid Mileage Increase Detected",
        description=(
            f"Your weekly mileage increased by {increase_percent:.0f}% "
            f"(from {previous_week:.1f}km to {last_week:.1f}km). The 10% rule suggests "
            "limiting increases to 10% per week."
        ),
        recommendation=(
            "Reduce mileage this week to allow your body to adapt. Increase gradually by "
            "no more than 10% per week."
        ),
        priority=InsightPriority.HIGH,
    )


def check_personal_bests(ctx: InsightContext) -> Optional[Insight]:
    """Celebrate personal bests set inside the window."""
    count = len(ctx.recent_personal_bests)
    if count == 0:
        return None

    return Insight(
        type=InsightType.SUCCESS,
        category=InsightCategory.PERFORMANCE,
        title="New Personal Best Achieved!",
        description=(
            f"Congratulations! You set {count} new personal best(s) in the last 2 weeks. "
            "Your training is paying off!"
        ),
        recommendation=(
            "Great work! Consider a recovery week to consolidate these gains before "
            "pushing for more improvements."
        ),
        priority=InsightPriority.LOW,
    )


def check_consistency(ctx: InsightContext) -> Optional[Insight]:
    """Flag too few training days and too few runs."""
    training_days = len({w.date for w in ctx.workouts})
    if training_days >= MIN_TRAINING_DAYS or len(ctx.workouts) >= MIN_WORKOUTS:
        return None

    return Insight(
        type=InsightType.INFO,
        category=InsightCategory.CONSISTENCY,
        title="Low Training Consistency",
        description=(
            f"You've only completed {len(ctx.workouts)} runs in the last 14 days. "
            "Consistency is key for improvement."
        ),
        recommendation=(
            "Try to maintain at least 3-4 runs per week. Even short, easy runs help build "
            "consistency and aerobic base."
        ),
        priority=InsightPriority.MEDIUM,
    )


def check_peak_form(ctx: InsightContext) -> Optional[Insight]:
    """Detect fresh-and-fit racing form."""
    if not (10 < ctx.tsb < 25 and ctx.ctl > 50):
        return None

    return Insight(
        type=InsightType.SUCCESS,
        category=InsightCategory.PERFORMANCE,
        title="Peak Form Detected",
        description=(
            f"Your TSB is {ctx.tsb:.1f} with CTL of {ctx.ctl:.1f}. "
            "You're fresh and fit - perfect racing form!"
        ),
        recommendation=(
            "This is an excellent time for a race or hard workout. Your fitness is high "
            "and fatigue is low."
        ),
        priority=InsightPriority.HIGH,
    )


# Evaluation order is the detection order of the returned list
INSIGHT_RULES: Tuple[InsightRule, ...] = (
    check_overtraining,
    check_high_intensity_streak,
    check_mileage_increase,
    check_personal_bests,
    check_consistency,
    check_peak_form,
)


def generate_insights(
    workouts: Sequence[WorkoutRecord],
    tsb: float,
    ctl: float,
    atl: float,
    recent_personal_bests: Sequence[PersonalBest] = (),
    rules: Sequence[InsightRule] = INSIGHT_RULES,
) -> List[Insight]:
    """
    Run every insight rule over the recent training window.

    Args:
        workouts: Completed runs from the insight window (last 14 days)
        tsb: Current Training Stress Balance
        ctl: Current Chronic Training Load
        atl: Current Acute Training Load
        recent_personal_bests: Personal bests achieved inside the window
        rules: Rules to evaluate, in order

    Returns:
        Insights in detection order; empty when there are no workouts
    """
    if not workouts:
        return []

    ctx = InsightContext(
        workouts=sorted(workouts, key=lambda w: w.date),
        tsb=tsb,
        ctl=ctl,
        atl=atl,
        recent_personal_bests=tuple(recent_personal_bests),
    )

    insights = []
    for rule in rules:
        insight = rule(ctx)
        if insight is not None:
            insights.append(insight)
    return insights


def sort_insights(insights: Sequence[Insight]) -> List[Insight]:
    """Order insights high -> medium -> low, keeping detection order within a priority."""
    return sorted(insights, key=lambda insight: PRIORITY_ORDER[insight.priority])
