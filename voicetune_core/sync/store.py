"""
Settings Stores

Persistence of per-user agent settings. The SQL store backs the running
service; the in-memory store has the same semantics and is used for local
development and tests.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..database import DatabaseManager, UserSettingsRepository
from ..settings import AgentSettings

logger = logging.getLogger(__name__)


class SettingsStore(ABC):
    """Abstract interface for settings persistence."""

    @abstractmethod
    async def load_settings(self, user_id: str) -> Optional[AgentSettings]:
        """Load a user's settings; None when the user never saved any."""
        pass

    @abstractmethod
    async def upsert_settings(self, user_id: str, settings: AgentSettings) -> bool:
        """Create or replace a user's settings; False on failure."""
        pass

    @abstractmethod
    async def has_settings(self, user_id: str) -> bool:
        """Check whether a user has saved settings."""
        pass


class SqlSettingsStore(SettingsStore):
    """Settings store backed by the ``user_agent_settings`` table."""

    def __init__(self, database: DatabaseManager):
        self._database = database

    async def load_settings(self, user_id: str) -> Optional[AgentSettings]:
        async with self._database.session() as session:
            row = await UserSettingsRepository(session).get_by_user_id(user_id)
            if row is None:
                return None
            return AgentSettings.from_dict(row.settings)

    async def upsert_settings(self, user_id: str, settings: AgentSettings) -> bool:
        try:
            async with self._database.session() as session:
                await UserSettingsRepository(session).upsert(user_id, settings.to_dict())
        except SQLAlchemyError as e:
            logger.error(f"Error saving settings: {e}", extra={"user_id": user_id})
            return False

        logger.info("Settings saved successfully", extra={"user_id": user_id})
        return True

    async def has_settings(self, user_id: str) -> bool:
        async with self._database.session() as session:
            return await UserSettingsRepository(session).exists_for_user(user_id)


class InMemorySettingsStore(SettingsStore):
    """Process-local settings store."""

    def __init__(self):
        self._rows: Dict[str, Dict[str, Any]] = {}

    async def load_settings(self, user_id: str) -> Optional[AgentSettings]:
        document = self._rows.get(user_id)
        if document is None:
            return None
        return AgentSettings.from_dict(document)

    async def upsert_settings(self, user_id: str, settings: AgentSettings) -> bool:
        # Stored as a plain document so later edits cannot leak in.
        self._rows[user_id] = settings.to_dict()
        return True

    async def has_settings(self, user_id: str) -> bool:
        return user_id in self._rows

    def clear(self) -> None:
        self._rows.clear()


__all__ = [
    "SettingsStore",
    "SqlSettingsStore",
    "InMemorySettingsStore",
]
