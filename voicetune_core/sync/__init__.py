"""
Settings Sync Module

Saves settings to the voice-agent provider and the settings store, and
reports the combined outcome.
"""

from .outcomes import (
    AuthRequiredError,
    Success,
    ProviderFailure,
    PersistedWithWarning,
    NetworkFailure,
    SaveOutcome,
    provider_accepted,
)
from .store import SettingsStore, SqlSettingsStore, InMemorySettingsStore
from .gateway import SettingsSyncGateway


__all__ = [
    "AuthRequiredError",
    "Success",
    "ProviderFailure",
    "PersistedWithWarning",
    "NetworkFailure",
    "SaveOutcome",
    "provider_accepted",
    "SettingsStore",
    "SqlSettingsStore",
    "InMemorySettingsStore",
    "SettingsSyncGateway",
]
