"""Tests for training phase detection."""

from running_coach.analysis.phases import (
    Phase,
    PlannedRun,
    TrainingPlan,
    detect_training_phase,
    get_phase_workout_recommendations,
)


PLAN = TrainingPlan(weeks=16, name="Spring Marathon")


class TestDetectTrainingPhase:
    """Tests for plan phase detection on a 16 week plan."""

    def test_no_plan(self):
        phase = detect_training_phase(None, 3, [])
        assert phase.phase == Phase.UNKNOWN
        assert phase.total_weeks_in_phase == 0

    def test_early_weeks_are_base(self):
        phase = detect_training_phase(PLAN, 6, [])
        assert phase.phase == Phase.BASE
        assert phase.week_in_phase == 6
        assert phase.total_weeks_in_phase == 7

    def test_middle_weeks_are_build(self):
        phase = detect_training_phase(PLAN, 10, [])
        assert phase.phase == Phase.BUILD
        assert phase.week_in_phase == 3
        assert phase.total_weeks_in_phase == 6

    def test_peak_needs_quality_runs(self):
        runs = [
            PlannedRun(week_number=11, run_type="Tempo Run"),
            PlannedRun(week_number=13, run_type="Intervals"),
            PlannedRun(week_number=13, run_type="Easy Run"),
        ]
        phase = detect_training_phase(PLAN, 13, runs)
        assert phase.phase == Phase.PEAK
        assert phase.week_in_phase == 1

    def test_late_plan_without_quality_is_build(self):
        runs = [PlannedRun(week_number=13, run_type="Easy Run")]
        phase = detect_training_phase(PLAN, 13, runs)
        assert phase.phase == Phase.BUILD
        assert phase.week_in_phase == 6

    def test_old_quality_runs_do_not_count(self):
        runs = [
            PlannedRun(week_number=5, run_type="Tempo Run"),
            PlannedRun(week_number=6, run_type="Quality Run"),
        ]
        assert detect_training_phase(PLAN, 13, runs).phase == Phase.BUILD

    def test_last_two_weeks_are_taper(self):
        assert detect_training_phase(PLAN, 15, []).week_in_phase == 1
        final = detect_training_phase(PLAN, 16, [])
        assert final.phase == Phase.TAPER
        assert final.week_in_phase == 2

    def test_to_dict(self):
        data = detect_training_phase(PLAN, 15, []).to_dict()
        assert data["phase"] == "taper"
        assert data["recommendations"]


class TestPhaseWorkoutRecommendations:
    def test_base_guide(self):
        guide = get_phase_workout_recommendations(detect_training_phase(PLAN, 2, []))
        assert guide.easy_run_percent == 85
        assert guide.quality_runs_per_week == 1

    def test_unknown_uses_default(self):
        guide = get_phase_workout_recommendations(detect_training_phase(None, 1, []))
        assert guide.easy_run_percent == 80
        assert guide.intensity_focus == "Balanced training"
