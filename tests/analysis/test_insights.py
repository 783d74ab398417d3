"""Tests for the coaching insight rules."""

import pytest
from datetime import date, timedelta

from running_coach.analysis.insights import (
    INSIGHT_RULES,
    InsightContext,
    check_consistency,
    check_high_intensity_streak,
    check_mileage_increase,
    check_overtraining,
    check_peak_form,
    check_personal_bests,
    generate_insights,
    longest_high_effort_streak,
    mileage_change,
    sort_insights,
    week_start,
    weekly_mileage,
)
from running_coach.models.insights import (
    Insight,
    InsightCategory,
    InsightPriority,
    InsightType,
)
from running_coach.models.workouts import PersonalBest


# Week of Sunday 2026-03-01 and week of Sunday 2026-03-08
PREV_WEEK = date(2026, 3, 1)
LAST_WEEK = date(2026, 3, 8)


def by_category(insights, category):
    return [i for i in insights if i.category == category]


def context(workouts=(), tsb=0.0, ctl=0.0, atl=0.0, personal_bests=()):
    return InsightContext(
        workouts=list(workouts),
        tsb=tsb,
        ctl=ctl,
        atl=atl,
        recent_personal_bests=tuple(personal_bests),
    )


def make_insight(title, priority):
    return Insight(
        type=InsightType.INFO,
        category=InsightCategory.CONSISTENCY,
        title=title,
        description="",
        recommendation="",
        priority=priority,
    )


# ============================================================================
# Helpers
# ============================================================================

class TestWeekStart:
    def test_sunday_is_its_own_week(self):
        assert week_start(date(2026, 3, 15)) == date(2026, 3, 15)

    def test_saturday_belongs_to_previous_sunday(self):
        assert week_start(date(2026, 3, 14)) == date(2026, 3, 8)

    def test_monday(self):
        assert week_start(date(2026, 3, 9)) == date(2026, 3, 8)


class TestWeeklyMileage:
    def test_buckets_oldest_first(self, make_workout):
        workouts = [
            make_workout(LAST_WEEK + timedelta(days=1), distance_km=12.0),
            make_workout(PREV_WEEK + timedelta(days=2), distance_km=8.0),
            make_workout(PREV_WEEK + timedelta(days=6), distance_km=4.0),
        ]
        assert weekly_mileage(workouts) == [12.0, 12.0]

    def test_runs_without_distance_ignored(self, make_workout):
        workouts = [make_workout(PREV_WEEK, distance_km=None), make_workout(LAST_WEEK, distance_km=5.0)]
        assert weekly_mileage(workouts) == [5.0]
        assert mileage_change(workouts) is None


class TestLongestStreak:
    def test_trailing_streak(self, make_workout):
        rpes = [9, 9, 5, 9, 9, 9]
        workouts = [make_workout(PREV_WEEK + timedelta(days=i), perceived_effort=r) for i, r in enumerate(rpes)]
        assert longest_high_effort_streak(workouts) == 3

    def test_missing_rpe_breaks_streak(self, make_workout):
        rpes = [8, 8, None, 8]
        workouts = [make_workout(PREV_WEEK + timedelta(days=i), perceived_effort=r) for i, r in enumerate(rpes)]
        assert longest_high_effort_streak(workouts) == 2


# ============================================================================
# Rules
# ============================================================================

class TestOvertraining:
    """Tests for the TSB-based overtraining rule."""

    def test_very_negative_tsb_is_danger(self):
        insight = check_overtraining(context(tsb=-30.1))
        assert insight.type == InsightType.DANGER
        assert insight.priority == InsightPriority.HIGH
        assert insight.title == "High Overtraining Risk Detected"
        assert "-30.1" in insight.description

    def test_elevated_fatigue_is_warning(self):
        insight = check_overtraining(context(tsb=-25))
        assert insight.type == InsightType.WARNING
        assert insight.priority == InsightPriority.MEDIUM
        assert insight.title == "Elevated Fatigue Levels"
        assert "-25.0" in insight.description

    def test_just_above_danger_is_warning_only(self):
        insight = check_overtraining(context(tsb=-29.9))
        assert insight.type == InsightType.WARNING

    def test_mild_fatigue_no_insight(self):
        assert check_overtraining(context(tsb=-20)) is None
        assert check_overtraining(context(tsb=5)) is None


class TestHighIntensityStreak:
    def _workouts(self, make_workout, rpes):
        return [
            make_workout(PREV_WEEK + timedelta(days=i), perceived_effort=r)
            for i, r in enumerate(rpes)
        ]

    def test_three_consecutive_triggers(self, make_workout):
        insight = check_high_intensity_streak(context(self._workouts(make_workout, [9, 9, 5, 9, 9, 9])))
        assert insight is not None
        assert insight.category == InsightCategory.RECOVERY
        assert insight.priority == InsightPriority.HIGH
        assert "3 consecutive runs" in insight.description

    def test_scattered_hard_runs_do_not_trigger(self, make_workout):
        workouts = self._workouts(make_workout, [9, 5, 9, 5, 9])
        assert check_high_intensity_streak(context(workouts)) is None

    def test_too_few_hard_runs(self, make_workout):
        workouts = self._workouts(make_workout, [8, 8, 4])
        assert check_high_intensity_streak(context(workouts)) is None

    def test_reports_longest_streak(self, make_workout):
        workouts = self._workouts(make_workout, [8, 8, 8, 8, 3, 9, 9, 9])
        insight = check_high_intensity_streak(context(workouts))
        assert "4 consecutive runs" in insight.description


class TestMileageIncrease:
    """Tests for the week-over-week mileage rule."""

    def _two_weeks(self, make_workout, previous_km, last_km):
        return [
            make_workout(PREV_WEEK + timedelta(days=1), distance_km=previous_km / 2),
            make_workout(PREV_WEEK + timedelta(days=3), distance_km=previous_km / 2),
            make_workout(LAST_WEEK + timedelta(days=1), distance_km=last_km / 2),
            make_workout(LAST_WEEK + timedelta(days=3), distance_km=last_km / 2),
        ]

    def test_twenty_five_percent_triggers(self, make_workout):
        insight = check_mileage_increase(context(self._two_weeks(make_workout, 20, 25)))
        assert insight is not None
        assert insight.type == InsightType.WARNING
        assert insight.category == InsightCategory.INJURY_RISK
        assert insight.priority == InsightPriority.HIGH
        assert "25%" in insight.description
        assert "from 20.0km to 25.0km" in insight.description

    def test_fifteen_percent_does_not_trigger(self, make_workout):
        assert check_mileage_increase(context(self._two_weeks(make_workout, 20, 23))) is None

    def test_single_week_does_not_trigger(self, make_workout):
        workouts = [make_workout(LAST_WEEK + timedelta(days=i), distance_km=10) for i in range(3)]
        assert check_mileage_increase(context(workouts)) is None

    def test_decrease_does_not_trigger(self, make_workout):
        assert check_mileage_increase(context(self._two_weeks(make_workout, 30, 20))) is None


class TestPersonalBests:
    def test_counts_personal_bests(self):
        pbs = [
            PersonalBest(distance="5K", achieved_date=LAST_WEEK),
            PersonalBest(distance="10K", achieved_date=LAST_WEEK + timedelta(days=2)),
        ]
        insight = check_personal_bests(context(personal_bests=pbs))
        assert insight.type == InsightType.SUCCESS
        assert insight.priority == InsightPriority.LOW
        assert "2 new personal best(s)" in insight.description

    def test_none(self):
        assert check_personal_bests(context()) is None


class TestConsistency:
    def test_few_runs_triggers(self, make_workout):
        workouts = [make_workout(LAST_WEEK + timedelta(days=i)) for i in range(3)]
        insight = check_consistency(context(workouts))
        assert insight.type == InsightType.INFO
        assert insight.priority == InsightPriority.MEDIUM
        assert "only completed 3 runs" in insight.description

    def test_doubles_on_few_days_still_trigger(self, make_workout):
        workouts = [make_workout(LAST_WEEK), make_workout(LAST_WEEK)] * 2
        assert check_consistency(context(workouts)) is not None

    def test_four_days_is_enough(self, make_workout):
        workouts = [make_workout(LAST_WEEK + timedelta(days=i)) for i in range(4)]
        assert check_consistency(context(workouts)) is None

    def test_five_runs_is_enough(self, make_workout):
        workouts = [make_workout(LAST_WEEK + timedelta(days=i % 2)) for i in range(5)]
        assert check_consistency(context(workouts)) is None


class TestPeakForm:
    def test_fresh_and_fit(self):
        insight = check_peak_form(context(tsb=15, ctl=55))
        assert insight.title == "Peak Form Detected"
        assert insight.priority == InsightPriority.HIGH
        assert "15.0" in insight.description
        assert "55.0" in insight.description

    @pytest.mark.parametrize("tsb,ctl", [(10, 60), (25, 60), (15, 50), (30, 80)])
    def test_outside_window(self, tsb, ctl):
        assert check_peak_form(context(tsb=tsb, ctl=ctl)) is None


# ============================================================================
# Engine
# ============================================================================

class TestGenerateInsights:
    def test_empty_history(self):
        assert generate_insights([], 0, 0, 0) == []

    def test_empty_history_ignores_metrics(self):
        assert generate_insights([], -50, 60, 110) == []

    def test_multiple_rules_fire(self, make_workout):
        workouts = [make_workout(LAST_WEEK, perceived_effort=6)]
        insights = generate_insights(workouts, tsb=-35, ctl=40, atl=75)

        categories = [i.category for i in insights]
        assert categories == [InsightCategory.OVERTRAINING, InsightCategory.CONSISTENCY]

    def test_unsorted_input_is_ordered_by_date(self, make_workout):
        rpes = [9, 9, 5, 9, 9, 9]
        workouts = [
            make_workout(PREV_WEEK + timedelta(days=i), perceived_effort=r)
            for i, r in enumerate(rpes)
        ]
        insights = generate_insights(list(reversed(workouts)), 0, 0, 0)
        streak = by_category(insights, InsightCategory.RECOVERY)
        assert len(streak) == 1

    def test_custom_rules(self, make_workout):
        insights = generate_insights(
            [make_workout(LAST_WEEK)], tsb=-40, ctl=0, atl=40, rules=[check_overtraining]
        )
        assert len(insights) == 1

    def test_rule_order(self):
        assert INSIGHT_RULES[0] is check_overtraining
        assert INSIGHT_RULES[-1] is check_peak_form


class TestSortInsights:
    def test_priority_order_is_stable(self):
        insights = [
            make_insight("a", InsightPriority.LOW),
            make_insight("b", InsightPriority.HIGH),
            make_insight("c", InsightPriority.MEDIUM),
            make_insight("d", InsightPriority.HIGH),
        ]
        assert [i.title for i in sort_insights(insights)] == ["b", "d", "c", "a"]

    def test_empty(self):
        assert sort_insights([]) == []
