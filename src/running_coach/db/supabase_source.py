"""Supabase/PostgreSQL training store.

Reads the same ``runs``, ``profiles`` and ``personal_bests`` tables the
web app writes. The Supabase client is synchronous, so every query runs
in a worker thread.

Environment Variables:
    RUNNING_COACH_SUPABASE_URL          - Project URL (https://xxx.supabase.co)
    RUNNING_COACH_SUPABASE_SERVICE_KEY  - Service role key for backend (bypasses RLS)
"""

import asyncio
import logging
from datetime import date
from typing import Any, Callable, List, Optional

from pydantic import ValidationError
from supabase import Client, create_client

from ..exceptions import ConfigurationError, DataSourceError, ErrorCode
from ..models.workouts import PersonalBest, WorkoutRecord
from .base import TrainingDataSource

logger = logging.getLogger(__name__)


WORKOUT_COLUMNS = (
    "scheduled_date, actual_distance, actual_time, rpe, run_type, average_hr, max_hr"
)


class SupabaseDataSource(TrainingDataSource):
    """Supabase implementation of the training store.

    Usage:
        # With explicit credentials
        source = SupabaseDataSource(url="https://xxx.supabase.co", key="service-key")

        # Or with an existing client
        source = SupabaseDataSource(client=supabase_client)
    """

    name = "supabase"

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
        client: Optional[Client] = None,
    ):
        """Initialize the Supabase source.

        Args:
            url: Supabase project URL
            key: Supabase service role key
            client: Preconfigured client; url and key are ignored if given

        Raises:
            ConfigurationError: If neither a client nor url and key are provided.
        """
        if client is None and not (url and key):
            raise ConfigurationError(
                "Supabase URL and service key are required",
                setting="supabase_url",
            )
        self.url = url
        self.key = key
        self._client = client

    @property
    def client(self) -> Client:
        """Lazy-initialize Supabase client."""
        if self._client is None:
            self._client = create_client(self.url, self.key)
        return self._client

    async def _execute(self, description: str, build_query: Callable[[Client], Any]) -> List[dict]:
        """Run a query in a worker thread and return its rows."""
        try:
            response = await asyncio.to_thread(lambda: build_query(self.client).execute())
        except Exception as e:
            logger.error(f"Supabase query failed ({description}): {e}")
            raise DataSourceError(
                f"Supabase query failed ({description}): {e}",
                source=self.name,
            ) from e
        return response.data or []

    async def fetch_workouts(self, user_id: str, start_date: date, end_date: date) -> List[WorkoutRecord]:
        rows = await self._execute(
            "runs",
            lambda client: (
                client.table("runs")
                .select(WORKOUT_COLUMNS)
                .eq("user_id", user_id)
                .eq("completed", True)
                .gte("scheduled_date", start_date.isoformat())
                .lte("scheduled_date", end_date.isoformat())
                .order("scheduled_date")
            ),
        )
        try:
            return [WorkoutRecord.model_validate(row) for row in rows]
        except ValidationError as e:
            raise DataSourceError(
                f"Invalid run row for user {user_id}",
                source=self.name,
                code=ErrorCode.DATA_INVALID,
                details={"errors": e.errors(include_url=False)},
            ) from e

    async def fetch_user_max_heart_rate(self, user_id: str) -> Optional[int]:
        rows = await self._execute(
            "profiles",
            lambda client: (
                client.table("profiles")
                .select("max_heart_rate")
                .eq("id", user_id)
                .limit(1)
            ),
        )
        if not rows:
            return None
        return rows[0].get("max_heart_rate")

    async def fetch_recent_personal_bests(
        self, user_id: str, start_date: date, end_date: date
    ) -> List[PersonalBest]:
        rows = await self._execute(
            "personal_bests",
            lambda client: (
                client.table("personal_bests")
                .select("distance, achieved_date")
                .eq("user_id", user_id)
                .gte("achieved_date", start_date.isoformat())
                .lte("achieved_date", end_date.isoformat())
            ),
        )
        try:
            return [PersonalBest.model_validate(row) for row in rows]
        except ValidationError as e:
            raise DataSourceError(
                f"Invalid personal best row for user {user_id}",
                source=self.name,
                code=ErrorCode.DATA_INVALID,
                details={"errors": e.errors(include_url=False)},
            ) from e
