"""SQLite training store.

SQLite-Specific Considerations:
    - Stores dates as TEXT in ISO format (YYYY-MM-DD)
    - Stores booleans as INTEGER (0/1)
    - Durations are kept as TEXT ("H:MM:SS") like the production store
    - File-based, one short-lived connection per query
"""

import asyncio
import logging
import sqlite3
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence, Union

from pydantic import ValidationError

from ..exceptions import DataSourceError, ErrorCode
from ..models.workouts import AthleteProfile, PersonalBest, WorkoutRecord
from .base import TrainingDataSource

logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS profiles (
    id TEXT PRIMARY KEY,
    max_heart_rate INTEGER,
    resting_heart_rate INTEGER
);

CREATE TABLE IF NOT EXISTS runs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    scheduled_date TEXT NOT NULL,
    completed INTEGER NOT NULL DEFAULT 1,
    run_type TEXT NOT NULL DEFAULT 'Easy Run',
    actual_distance REAL,
    actual_time TEXT,
    rpe INTEGER,
    average_hr INTEGER,
    max_hr INTEGER
);

CREATE INDEX IF NOT EXISTS idx_runs_user_date ON runs(user_id, scheduled_date);

CREATE TABLE IF NOT EXISTS personal_bests (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    distance TEXT,
    time TEXT,
    achieved_date TEXT NOT NULL,
    is_target INTEGER NOT NULL DEFAULT 0
);
"""

WORKOUT_COLUMNS = (
    "scheduled_date, actual_distance, actual_time, rpe, run_type, average_hr, max_hr"
)


class SQLiteDataSource(TrainingDataSource):
    """SQLite implementation of the training store.

    Usage:
        source = SQLiteDataSource("training.db")
        source.initialize()
        workouts = await source.fetch_workouts("user-123", start, end)
    """

    name = "sqlite"

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)

    def initialize(self) -> None:
        """Create tables if they don't exist."""
        try:
            with self._connect() as conn:
                conn.executescript(SCHEMA)
        except sqlite3.Error as e:
            raise DataSourceError(
                f"Cannot open SQLite database: {e}",
                source=self.name,
                code=ErrorCode.DATA_SOURCE_UNAVAILABLE,
                details={"db_path": str(self.db_path)},
            ) from e
        logger.debug(f"SQLite schema ready at {self.db_path}")

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _query(self, sql: str, params: Sequence[Any]) -> List[sqlite3.Row]:
        try:
            with self._connect() as conn:
                return conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            logger.error(f"SQLite query failed on {self.db_path}: {e}")
            raise DataSourceError(
                f"SQLite query failed: {e}",
                source=self.name,
                details={"db_path": str(self.db_path)},
            ) from e

    # =========================================================================
    # Reads
    # =========================================================================

    def _fetch_workouts(self, user_id: str, start_date: date, end_date: date) -> List[WorkoutRecord]:
        rows = self._query(
            f"""
            SELECT {WORKOUT_COLUMNS} FROM runs
            WHERE user_id = ? AND completed = 1
              AND scheduled_date >= ? AND scheduled_date <= ?
            ORDER BY scheduled_date ASC, id ASC
            """,
            (user_id, start_date.isoformat(), end_date.isoformat()),
        )
        try:
            return [WorkoutRecord.model_validate(dict(row)) for row in rows]
        except ValidationError as e:
            raise DataSourceError(
                f"Invalid run row for user {user_id}",
                source=self.name,
                code=ErrorCode.DATA_INVALID,
                details={"errors": e.errors(include_url=False)},
            ) from e

    def _fetch_user_max_heart_rate(self, user_id: str) -> Optional[int]:
        rows = self._query("SELECT max_heart_rate FROM profiles WHERE id = ?", (user_id,))
        if not rows:
            return None
        return rows[0]["max_heart_rate"]

    def _fetch_recent_personal_bests(
        self, user_id: str, start_date: date, end_date: date
    ) -> List[PersonalBest]:
        rows = self._query(
            """
            SELECT distance, achieved_date FROM personal_bests
            WHERE user_id = ? AND achieved_date >= ? AND achieved_date <= ?
            ORDER BY achieved_date ASC
            """,
            (user_id, start_date.isoformat(), end_date.isoformat()),
        )
        try:
            return [PersonalBest.model_validate(dict(row)) for row in rows]
        except ValidationError as e:
            raise DataSourceError(
                f"Invalid personal best row for user {user_id}",
                source=self.name,
                code=ErrorCode.DATA_INVALID,
                details={"errors": e.errors(include_url=False)},
            ) from e

    async def fetch_workouts(self, user_id: str, start_date: date, end_date: date) -> List[WorkoutRecord]:
        return await asyncio.to_thread(self._fetch_workouts, user_id, start_date, end_date)

    async def fetch_user_max_heart_rate(self, user_id: str) -> Optional[int]:
        return await asyncio.to_thread(self._fetch_user_max_heart_rate, user_id)

    async def fetch_recent_personal_bests(
        self, user_id: str, start_date: date, end_date: date
    ) -> List[PersonalBest]:
        return await asyncio.to_thread(
            self._fetch_recent_personal_bests, user_id, start_date, end_date
        )

    # =========================================================================
    # Writes (seeding and imports)
    # =========================================================================

    def save_profile(self, profile: AthleteProfile) -> AthleteProfile:
        """Save or update an athlete profile."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO profiles (id, max_heart_rate, resting_heart_rate)
                VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    max_heart_rate = excluded.max_heart_rate,
                    resting_heart_rate = excluded.resting_heart_rate
                """,
                (profile.id, profile.max_heart_rate, profile.resting_heart_rate),
            )
        return profile

    def save_workout(self, user_id: str, workout: WorkoutRecord, completed: bool = True) -> None:
        """Insert a run."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO runs (
                    user_id, scheduled_date, completed, run_type, actual_distance,
                    actual_time, rpe, average_hr, max_hr
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    workout.date.isoformat(),
                    1 if completed else 0,
                    workout.workout_kind,
                    workout.distance_km,
                    workout.actual_time,
                    workout.perceived_effort,
                    workout.average_hr,
                    workout.max_hr,
                ),
            )

    def save_personal_best(
        self,
        user_id: str,
        personal_best: PersonalBest,
        time: Optional[str] = None,
    ) -> None:
        """Insert a personal best."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO personal_bests (user_id, distance, time, achieved_date)
                VALUES (?, ?, ?, ?)
                """,
                (user_id, personal_best.distance, time, personal_best.achieved_date.isoformat()),
            )
