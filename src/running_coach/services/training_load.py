"""
Training load service.

Fetches an athlete's recent history from the training store and turns it
into the fitness state (CTL/ATL/TSB/form) and prioritized coaching
insights used to build the coaching context.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional

from ..analysis.insights import generate_insights, sort_insights
from ..config import Settings, get_settings
from ..db.base import TrainingDataSource
from ..exceptions import DataSourceError
from ..metrics.fitness import (
    FitnessState,
    calculate_fitness_history,
    calculate_fitness_state,
)
from ..models.insights import Insight
from ..models.workouts import WorkoutRecord


@dataclass
class TrainingLoadReport:
    """Fitness state and insights for one athlete on one day."""

    user_id: str
    reference_date: date
    fitness: FitnessState
    insights: List[Insight] = field(default_factory=list)
    workout_count: int = 0

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "reference_date": self.reference_date.isoformat(),
            "fitness": self.fitness.to_dict(),
            "insights": [insight.model_dump(mode="json") for insight in self.insights],
            "workout_count": self.workout_count,
        }


class TrainingLoadService:
    """
    Computes training load analytics from stored workouts.

    The computation itself is pure; this service only owns the date
    windows and the store reads. Every method takes the reference date
    explicitly instead of reading the clock.
    """

    def __init__(
        self,
        source: TrainingDataSource,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._source = source
        self._settings = settings or get_settings()
        self._logger = logger or logging.getLogger(__name__)

    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger

    def _lookback_start(self, reference_date: date) -> date:
        return reference_date - timedelta(days=self._settings.lookback_days)

    def _insight_window_start(self, reference_date: date) -> date:
        return reference_date - timedelta(days=self._settings.insight_window_days)

    async def get_fitness_state(self, user_id: str, reference_date: date) -> FitnessState:
        """
        CTL, ATL, TSB and form as of reference_date.

        Raises:
            DataSourceError: If the store cannot be read
        """
        workouts, max_hr = await asyncio.gather(
            self._source.fetch_workouts(user_id, self._lookback_start(reference_date), reference_date),
            self._source.fetch_user_max_heart_rate(user_id),
        )
        state = calculate_fitness_state(workouts, reference_date, max_hr)
        self.logger.debug(
            f"Fitness for {user_id} on {reference_date}: "
            f"CTL={state.ctl:.1f} ATL={state.atl:.1f} TSB={state.tsb:.1f} from {len(workouts)} runs"
        )
        return state

    async def get_fitness_history(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
    ) -> List[FitnessState]:
        """
        Daily fitness states from start_date to end_date.

        Runs are fetched from a full lookback before start_date so the
        first day's CTL is not truncated.

        Raises:
            DataSourceError: If the store cannot be read
        """
        workouts, max_hr = await asyncio.gather(
            self._source.fetch_workouts(user_id, self._lookback_start(start_date), end_date),
            self._source.fetch_user_max_heart_rate(user_id),
        )
        return calculate_fitness_history(workouts, start_date, end_date, max_hr)

    async def get_insights(
        self,
        user_id: str,
        reference_date: date,
        state: Optional[FitnessState] = None,
    ) -> List[Insight]:
        """
        Prioritized insights for the insight window ending at reference_date.

        Args:
            user_id: Athlete identifier
            reference_date: Last day of the window
            state: Fitness state to use; computed if not given

        Raises:
            DataSourceError: If the store cannot be read
        """
        window_start = self._insight_window_start(reference_date)
        workouts, personal_bests = await asyncio.gather(
            self._source.fetch_workouts(user_id, window_start, reference_date),
            self._source.fetch_recent_personal_bests(user_id, window_start, reference_date),
        )
        if state is None:
            state = await self.get_fitness_state(user_id, reference_date)

        insights = generate_insights(
            workouts, state.tsb, state.ctl, state.atl, personal_bests
        )
        return sort_insights(insights)

    def _insight_window(self, workouts: List[WorkoutRecord], reference_date: date) -> List[WorkoutRecord]:
        window_start = self._insight_window_start(reference_date)
        return [w for w in workouts if window_start <= w.date <= reference_date]

    async def build_report(self, user_id: str, reference_date: date) -> Optional[TrainingLoadReport]:
        """
        Fitness state and insights in one pass over the store.

        The insight window is cut from the same lookback fetch used for
        CTL, so the store is read once per table.

        Returns:
            The report, or None if the store could not be read
        """
        try:
            workouts, max_hr, personal_bests = await asyncio.gather(
                self._source.fetch_workouts(user_id, self._lookback_start(reference_date), reference_date),
                self._source.fetch_user_max_heart_rate(user_id),
                self._source.fetch_recent_personal_bests(
                    user_id, self._insight_window_start(reference_date), reference_date
                ),
            )
        except DataSourceError as e:
            self.logger.warning(f"Training load unavailable for {user_id}: {e.message}")
            return None

        if max_hr is None:
            self.logger.info(f"No max heart rate for {user_id}; HR-based TSS skipped")

        state = calculate_fitness_state(workouts, reference_date, max_hr)
        recent = self._insight_window(workouts, reference_date)
        insights = sort_insights(
            generate_insights(recent, state.tsb, state.ctl, state.atl, personal_bests)
        )

        self.logger.info(
            f"Training load for {user_id} on {reference_date}: "
            f"form={state.form.status} insights={len(insights)}"
        )
        return TrainingLoadReport(
            user_id=user_id,
            reference_date=reference_date,
            fitness=state,
            insights=insights,
            workout_count=len(workouts),
        )
