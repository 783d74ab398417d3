"""Workout history models read from the training store."""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..metrics.load import parse_duration


class RunType(str, Enum):
    """Run kinds with a known intensity factor."""
    EASY = "Easy Run"
    LONG = "Long Run"
    TEMPO = "Tempo Run"
    QUALITY = "Quality Run"


class WorkoutRecord(BaseModel):
    """One completed training session.

    Field aliases match the store's ``runs`` columns so rows can be
    validated directly, e.g. ``WorkoutRecord.model_validate(row)``.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        use_enum_values=True,
    )

    date: datetime.date = Field(..., alias="scheduled_date", description="Day the run was done")
    distance_km: Optional[float] = Field(None, alias="actual_distance", ge=0)
    actual_time: Optional[str] = Field(None, description="Duration as H:MM:SS or MM:SS")
    perceived_effort: Optional[int] = Field(None, alias="rpe", ge=0, le=10)
    workout_kind: Optional[str] = Field(default=RunType.EASY.value, alias="run_type")
    average_hr: Optional[int] = Field(None, ge=0)
    max_hr: Optional[int] = Field(None, ge=0)

    @property
    def duration_seconds(self) -> Optional[float]:
        """Parsed duration, or None when missing or malformed."""
        return parse_duration(self.actual_time)


class PersonalBest(BaseModel):
    """A personal best record; only its achievement date matters here."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    distance: Optional[str] = None
    achieved_date: datetime.date


class AthleteProfile(BaseModel):
    """Heart rate settings from the athlete profile."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    max_heart_rate: Optional[int] = Field(None, ge=0, le=250)
    resting_heart_rate: Optional[int] = Field(None, ge=0, le=250)
