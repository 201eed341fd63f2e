"""
Database Models

SQLAlchemy ORM models for persisted agent settings.
"""

from typing import Any, Dict

from sqlalchemy import JSON, Index, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in development and tests)
SettingsJSON = JSON().with_variant(JSONB(), "postgresql")


class UserAgentSettings(Base, TimestampMixin):
    """Saved agent settings, one row per user."""

    __tablename__ = "user_agent_settings"

    user_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    settings: Mapped[Dict[str, Any]] = mapped_column(SettingsJSON, nullable=False)

    __table_args__ = (
        Index("ix_user_agent_settings_user_id", "user_id"),
    )


__all__ = [
    "SettingsJSON",
    "UserAgentSettings",
]
