"""Training load metrics: TSS, CTL, ATL, TSB and form."""

from .load import (
    DEFAULT_INTENSITY_FACTOR,
    INTENSITY_FACTORS,
    calculate_tss,
    duration_hours,
    get_intensity_factor,
    parse_duration,
)
from .fitness import (
    ATL_DAYS,
    CTL_DAYS,
    FitnessState,
    FormStatus,
    build_daily_tss,
    calculate_atl,
    calculate_ctl,
    calculate_fitness_history,
    calculate_fitness_state,
    calculate_tsb,
    calculate_weighted_load,
    get_form_status,
)

__all__ = [
    # Load calculations
    "DEFAULT_INTENSITY_FACTOR",
    "INTENSITY_FACTORS",
    "calculate_tss",
    "duration_hours",
    "get_intensity_factor",
    "parse_duration",
    # Fitness model
    "ATL_DAYS",
    "CTL_DAYS",
    "FitnessState",
    "FormStatus",
    "build_daily_tss",
    "calculate_atl",
    "calculate_ctl",
    "calculate_fitness_history",
    "calculate_fitness_state",
    "calculate_tsb",
    "calculate_weighted_load",
    "get_form_status",
]
