"""
Settings Sync Gateway

Coordinates a settings save across the voice-agent provider and the
settings store, and loads the saved baseline for a user.
"""

import asyncio
from typing import Any, Dict, Optional

import structlog

from ..provider import ProviderTransportError, VoiceAgentProvider
from ..settings import AgentSettings
from .outcomes import (
    AuthRequiredError,
    NetworkFailure,
    PersistedWithWarning,
    ProviderFailure,
    SaveOutcome,
    Success,
)
from .store import SettingsStore


class SettingsSyncGateway:
    """
    Pushes settings to the provider, then persists them.

    The provider is authoritative: persistence is only attempted after every
    provider resource accepted the update, and a persistence failure after
    that point is reported as a warning rather than a failure.
    """

    def __init__(
        self,
        provider: VoiceAgentProvider,
        store: SettingsStore,
        persistence_timeout: Optional[float] = 10.0,
    ):
        self._provider = provider
        self._store = store
        self._persistence_timeout = persistence_timeout
        self._logger = structlog.get_logger("settings_sync")

    @property
    def provider(self) -> VoiceAgentProvider:
        return self._provider

    @property
    def store(self) -> SettingsStore:
        return self._store

    @staticmethod
    def _require_user(user_id: Optional[str]) -> str:
        if not user_id:
            raise AuthRequiredError()
        return user_id

    async def load(self, user_id: Optional[str]) -> Optional[AgentSettings]:
        """
        Load the user's saved settings.

        Returns None for a user who has never saved; callers fall back to
        the default settings.
        """
        user_id = self._require_user(user_id)
        settings = await self._store.load_settings(user_id)

        if settings is None:
            self._logger.debug("settings_not_found", user_id=user_id)
            return None

        return settings.copy()

    async def has_saved_settings(self, user_id: Optional[str]) -> bool:
        """Check whether the user has saved settings."""
        user_id = self._require_user(user_id)
        return await self._store.has_settings(user_id)

    async def save(self, user_id: Optional[str], settings: AgentSettings) -> SaveOutcome:
        """
        Save settings to the provider and then to the store.

        Args:
            user_id: Identity the settings are stored under
            settings: Settings to save

        Returns:
            Success, ProviderFailure, PersistedWithWarning or NetworkFailure
        """
        user_id = self._require_user(user_id)
        snapshot = settings.copy()
        resources = self._provider.resources

        results = await asyncio.gather(
            *(self._provider.update(resource, snapshot) for resource in resources),
            return_exceptions=True,
        )

        data: Dict[str, Any] = {}

        # Resources are checked in order so the reported failure is stable.
        for resource, result in zip(resources, results):
            if isinstance(result, ProviderTransportError):
                self._logger.warning(
                    "provider_unreachable",
                    user_id=user_id,
                    resource=resource.value,
                    error=result.message,
                )
                return NetworkFailure(reason=result.message, resource=resource)

            if isinstance(result, BaseException):
                raise result

            if not result.ok:
                self._logger.warning(
                    "provider_rejected_settings",
                    user_id=user_id,
                    resource=resource.value,
                    status_code=result.status_code,
                )
                return ProviderFailure(
                    status_code=result.status_code,
                    payload=result.data,
                    failed_resource=resource,
                )

            data[resource.value] = result.data

        reason = await self._persist(user_id, snapshot)
        if reason is not None:
            self._logger.warning("settings_not_persisted", user_id=user_id, reason=reason)
            return PersistedWithWarning(reason=reason, data=data)

        self._logger.info(
            "settings_saved",
            user_id=user_id,
            resources=[resource.value for resource in resources],
        )
        return Success(data=data)

    async def _persist(self, user_id: str, settings: AgentSettings) -> Optional[str]:
        """Upsert into the store; returns a failure reason or None."""
        try:
            saved = await asyncio.wait_for(
                self._store.upsert_settings(user_id, settings),
                timeout=self._persistence_timeout,
            )
        except asyncio.TimeoutError:
            return f"Saving settings timed out after {self._persistence_timeout}s"
        except Exception as e:
            self._logger.exception("settings_store_error", user_id=user_id)
            return f"Saving settings failed: {e}"

        if not saved:
            return "Settings store rejected the update"
        return None


__all__ = ["SettingsSyncGateway"]
