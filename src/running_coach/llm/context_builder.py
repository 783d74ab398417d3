"""Build training load context for LLM prompt injection."""

from typing import List, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..analysis.phases import TrainingPhase
    from ..metrics.fitness import FitnessState
    from ..models.insights import Insight
    from ..services.training_load import TrainingLoadReport


def format_training_load_section(state: "FitnessState") -> str:
    """Format CTL/ATL/TSB and form as a prompt section."""
    parts = [
        "TRAINING LOAD:",
        f"  CTL (Chronic Training Load / fitness): {state.ctl:.1f}",
        f"  ATL (Acute Training Load / fatigue): {state.atl:.1f}",
        f"  TSB (Training Stress Balance / form): {state.tsb:.1f}",
        f"  Form: {state.form.status} - {state.form.description}",
    ]
    return "\n".join(parts)


def format_insights_section(insights: Sequence["Insight"]) -> str:
    """Format insights as a prompt section, empty string if there are none."""
    if not insights:
        return ""

    parts = ["COACHING INSIGHTS:"]
    for insight in insights:
        parts.append(f"  [{insight.priority.value.upper()}] {insight.title}")
        parts.append(f"    {insight.description}")
        parts.append(f"    Recommendation: {insight.recommendation}")
    return "\n".join(parts)


def format_training_phase_section(phase: "TrainingPhase") -> str:
    """Format the current plan phase as a prompt section."""
    parts = [
        "TRAINING PHASE:",
        f"  {phase.description} (week {phase.week_in_phase} of {phase.total_weeks_in_phase})",
        f"  Focus: {phase.focus}",
    ]
    for recommendation in phase.recommendations:
        parts.append(f"  - {recommendation}")
    return "\n".join(parts)


def build_training_context(
    report: Optional["TrainingLoadReport"],
    phase: Optional["TrainingPhase"] = None,
) -> str:
    """
    Build the training load part of the coaching system prompt.

    A missing report (store unavailable) produces no training load
    section at all rather than a partial one.

    Args:
        report: Fitness state and insights, or None
        phase: Current training plan phase, if the athlete has a plan

    Returns:
        Formatted context string, sections separated by blank lines
    """
    sections: List[str] = []

    if report is not None:
        sections.append(format_training_load_section(report.fitness))
        insights_section = format_insights_section(report.insights)
        if insights_section:
            sections.append(insights_section)

    if phase is not None:
        sections.append(format_training_phase_section(phase))

    return "\n\n".join(sections)
