"""
Voice Agent Provider Base Types

Interface, wire payloads, responses and transport errors shared by the
voice-agent provider clients.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..settings import AgentSettings


# =============================================================================
# Enums
# =============================================================================


class ProviderResource(str, Enum):
    """Provider resources touched by a settings update."""

    AGENT = "agent"
    LLM = "llm"


# =============================================================================
# Responses
# =============================================================================


@dataclass
class ProviderResponse:
    """Result of a single provider request."""

    resource: ProviderResource
    status_code: int
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


# =============================================================================
# Exceptions
# =============================================================================


class ProviderTransportError(Exception):
    """Base exception for requests that never produced a provider response."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        provider: Optional[str] = None,
        resource: Optional[ProviderResource] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "PROVIDER_TRANSPORT_ERROR"
        self.provider = provider
        self.resource = resource
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "provider": self.provider,
            "resource": self.resource.value if self.resource else None,
            "details": self.details,
        }


class ProviderConnectionError(ProviderTransportError):
    """Failed to connect to provider."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="PROVIDER_CONNECTION_ERROR", **kwargs)


class ProviderTimeoutError(ProviderTransportError):
    """Provider request timed out."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="PROVIDER_TIMEOUT", **kwargs)


# =============================================================================
# Payloads
# =============================================================================


def build_agent_payload(
    settings: AgentSettings,
    include_prompt: bool = True,
) -> Dict[str, Any]:
    """
    Build the agent update body.

    ``voice_id`` and ``general_prompt`` are optional on the provider side and
    are only sent when they carry a value.
    """
    payload: Dict[str, Any] = {
        "voice_speed": settings.voice_speed,
        "responsiveness": settings.responsiveness,
        "interruption_sensitivity": settings.interruption_sensitivity,
        "voice_temperature": settings.voice_temperature,
        "volume": settings.volume,
        "language": settings.language,
    }

    if settings.voice_id:
        payload["voice_id"] = settings.voice_id

    prompt = settings.prompt.strip()
    if include_prompt and prompt:
        payload["general_prompt"] = prompt

    return payload


def build_llm_payload(settings: AgentSettings) -> Dict[str, Any]:
    """Build the LLM update body (prompt only)."""
    return {"general_prompt": settings.prompt.strip()}


def summarize_payload(payload: Dict[str, Any], limit: int = 50) -> Dict[str, Any]:
    """Copy of a payload that is safe to log (prompt truncated)."""
    summary = dict(payload)
    prompt = summary.get("general_prompt")
    if isinstance(prompt, str):
        summary["general_prompt"] = f"{prompt[:limit]}..." if len(prompt) > limit else prompt
        summary["prompt_length"] = len(prompt)
    return summary


# =============================================================================
# Provider Interface
# =============================================================================


class VoiceAgentProvider(ABC):
    """Abstract interface for voice-agent providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider identifier."""
        pass

    @property
    @abstractmethod
    def resources(self) -> Tuple[ProviderResource, ...]:
        """
        Resources updated by a settings save, in failure-precedence order.

        A provider that keeps the prompt on a separate LLM resource returns
        both; one that accepts the prompt on the agent returns only AGENT.
        """
        pass

    @abstractmethod
    async def update(
        self,
        resource: ProviderResource,
        settings: AgentSettings,
    ) -> ProviderResponse:
        """
        Push settings to one provider resource.

        Returns the provider response for both success and rejection;
        raises ProviderTransportError when no response was received.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Clean up provider resources."""
        pass


__all__ = [
    "ProviderResource",
    "ProviderResponse",
    "ProviderTransportError",
    "ProviderConnectionError",
    "ProviderTimeoutError",
    "build_agent_payload",
    "build_llm_payload",
    "summarize_payload",
    "VoiceAgentProvider",
]
