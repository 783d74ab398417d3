"""Read contract for the training store.

The analytics only ever read three things: completed runs in a date
range, the athlete's max heart rate, and personal bests achieved in a
date range. Any store that can answer those can back the service.

Usage:
    # SQLite (development)
    source = SQLiteDataSource(db_path="training.db")

    # Supabase/PostgreSQL (production)
    source = SupabaseDataSource(url=SUPABASE_URL, key=SUPABASE_SERVICE_KEY)

    workouts = await source.fetch_workouts("user-123", start, end)
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from ..models.workouts import PersonalBest, WorkoutRecord


class TrainingDataSource(ABC):
    """Abstract base class for workout stores.

    All date ranges are inclusive on both ends. Implementations raise
    DataSourceError when the store cannot be read.
    """

    name: str = "unknown"

    @abstractmethod
    async def fetch_workouts(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
    ) -> List[WorkoutRecord]:
        """Completed runs between start_date and end_date, oldest first."""

    @abstractmethod
    async def fetch_user_max_heart_rate(self, user_id: str) -> Optional[int]:
        """The athlete's configured max heart rate, if any."""

    @abstractmethod
    async def fetch_recent_personal_bests(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
    ) -> List[PersonalBest]:
        """Personal bests achieved between start_date and end_date."""
