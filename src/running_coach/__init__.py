"""Training load analytics and coaching insights for runners."""

from .metrics import (
    FitnessState,
    FormStatus,
    build_daily_tss,
    calculate_atl,
    calculate_ctl,
    calculate_fitness_state,
    calculate_tsb,
    calculate_tss,
    get_form_status,
)
from .analysis import generate_insights, sort_insights
from .models import Insight, PersonalBest, WorkoutRecord
from .services import TrainingLoadReport, TrainingLoadService

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Models
    "Insight",
    "PersonalBest",
    "WorkoutRecord",
    # Metrics
    "FitnessState",
    "FormStatus",
    "build_daily_tss",
    "calculate_atl",
    "calculate_ctl",
    "calculate_fitness_state",
    "calculate_tsb",
    "calculate_tss",
    "get_form_status",
    # Insights
    "generate_insights",
    "sort_insights",
    # Services
    "TrainingLoadReport",
    "TrainingLoadService",
]
