"""Services that combine store reads with the training load analytics."""

from .training_load import TrainingLoadReport, TrainingLoadService

__all__ = [
    "TrainingLoadReport",
    "TrainingLoadService",
]
