"""
Database Repositories

Repository pattern implementation for settings data access.
"""

from datetime import datetime
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .base import Base
from .models import UserAgentSettings


ModelType = TypeVar("ModelType", bound=Base)


# =============================================================================
# Base Repository
# =============================================================================


class BaseRepository(Generic[ModelType]):
    """Base repository with common aggregates."""

    model: Type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def count(self) -> int:
        """Count all entities."""
        result = await self.session.execute(
            select(func.count()).select_from(self.model)
        )
        return result.scalar_one()


# =============================================================================
# User Settings Repository
# =============================================================================


class UserSettingsRepository(BaseRepository[UserAgentSettings]):
    """Repository for UserAgentSettings rows."""

    model = UserAgentSettings

    async def get_by_user_id(self, user_id: str) -> Optional[UserAgentSettings]:
        """Get the settings row for a user."""
        result = await self.session.execute(
            select(UserAgentSettings).where(UserAgentSettings.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def exists_for_user(self, user_id: str) -> bool:
        """Check whether a user has saved settings."""
        result = await self.session.execute(
            select(func.count())
            .select_from(UserAgentSettings)
            .where(UserAgentSettings.user_id == user_id)
        )
        return result.scalar_one() > 0

    async def upsert(
        self,
        user_id: str,
        settings: Dict[str, Any],
    ) -> UserAgentSettings:
        """Insert the user's settings or replace the existing document."""
        row = await self.get_by_user_id(user_id)

        if row is None:
            row = UserAgentSettings(user_id=user_id, settings=dict(settings))
            self.session.add(row)
        else:
            row.settings = dict(settings)
            row.updated_at = datetime.utcnow()

        await self.session.flush()
        await self.session.refresh(row)
        return row


__all__ = [
    "BaseRepository",
    "UserSettingsRepository",
]
