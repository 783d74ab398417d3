"""Coaching insight models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class InsightType(str, Enum):
    """Severity/tone of an insight."""
    WARNING = "warning"
    SUCCESS = "success"
    INFO = "info"
    DANGER = "danger"


class InsightCategory(str, Enum):
    """What area of training an insight is about."""
    OVERTRAINING = "overtraining"
    RECOVERY = "recovery"
    PERFORMANCE = "performance"
    INJURY_RISK = "injury_risk"
    CONSISTENCY = "consistency"
    ZONES = "zones"


class InsightPriority(str, Enum):
    """Presentation priority (high first)."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_ORDER = {
    InsightPriority.HIGH: 0,
    InsightPriority.MEDIUM: 1,
    InsightPriority.LOW: 2,
}


class Insight(BaseModel):
    """A single coaching finding derived from recent training."""

    model_config = ConfigDict(frozen=True)

    type: InsightType
    category: InsightCategory
    title: str = Field(..., description="Short headline")
    description: str = Field(..., description="What was detected, with the numbers behind it")
    recommendation: str = Field(..., description="What the athlete should do about it")
    priority: InsightPriority
