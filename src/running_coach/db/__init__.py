"""Training store access.

Provides the read contract the analytics depend on and its SQLite and
Supabase implementations.
"""

from typing import Optional

from ..config import Settings, get_settings
from ..exceptions import ConfigurationError
from .base import TrainingDataSource
from .sqlite_source import SQLiteDataSource
from .supabase_source import SupabaseDataSource


def create_data_source(settings: Optional[Settings] = None) -> TrainingDataSource:
    """Build the data source selected in settings."""
    settings = settings or get_settings()

    if settings.data_source == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ConfigurationError(
                "RUNNING_COACH_SUPABASE_URL and RUNNING_COACH_SUPABASE_SERVICE_KEY must be set",
                setting="data_source",
            )
        return SupabaseDataSource(url=settings.supabase_url, key=settings.supabase_service_key)

    source = SQLiteDataSource(settings.training_db_path)
    source.initialize()
    return source


__all__ = [
    "TrainingDataSource",
    "SQLiteDataSource",
    "SupabaseDataSource",
    "create_data_source",
]
