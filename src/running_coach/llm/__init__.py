"""Prompt context formatting for the coaching assistant."""

from .context_builder import (
    build_training_context,
    format_insights_section,
    format_training_load_section,
    format_training_phase_section,
)

__all__ = [
    "build_training_context",
    "format_insights_section",
    "format_training_load_section",
    "format_training_phase_section",
]
