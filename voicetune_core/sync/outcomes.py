"""
Save Outcomes

Result variants of a settings save and the core-level auth error.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from ..provider import ProviderResource


class AuthRequiredError(Exception):
    """No user identity is available for an operation that needs one."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class Success:
    """Provider and persistence both accepted the settings."""

    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProviderFailure:
    """The provider rejected the settings; nothing was persisted."""

    status_code: int
    payload: Dict[str, Any]
    failed_resource: ProviderResource


@dataclass(frozen=True)
class PersistedWithWarning:
    """
    The provider accepted the settings but persisting them failed.

    The live agent already runs the new settings; only the saved copy is
    stale.
    """

    reason: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NetworkFailure:
    """No provider response was received."""

    reason: str
    resource: Optional[ProviderResource] = None


SaveOutcome = Union[Success, ProviderFailure, PersistedWithWarning, NetworkFailure]


def provider_accepted(outcome: SaveOutcome) -> bool:
    """Whether the provider is running the submitted settings."""
    return isinstance(outcome, (Success, PersistedWithWarning))


__all__ = [
    "AuthRequiredError",
    "Success",
    "ProviderFailure",
    "PersistedWithWarning",
    "NetworkFailure",
    "SaveOutcome",
    "provider_accepted",
]
