"""
Database Module

SQLAlchemy models, session management and repositories for saved settings.
"""

from .base import (
    Base,
    TimestampMixin,
    DatabaseManager,
    get_database,
    init_database,
    close_database,
)
from .models import SettingsJSON, UserAgentSettings
from .repositories import BaseRepository, UserSettingsRepository


__all__ = [
    "Base",
    "TimestampMixin",
    "DatabaseManager",
    "get_database",
    "init_database",
    "close_database",
    "SettingsJSON",
    "UserAgentSettings",
    "BaseRepository",
    "UserSettingsRepository",
]
