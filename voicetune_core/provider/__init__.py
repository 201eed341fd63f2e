"""
Voice Agent Provider Module

Provider interface, Retell HTTP client and provider error normalization.
"""

from .base import (
    ProviderResource,
    ProviderResponse,
    ProviderTransportError,
    ProviderConnectionError,
    ProviderTimeoutError,
    build_agent_payload,
    build_llm_payload,
    summarize_payload,
    VoiceAgentProvider,
)
from .retell import DEFAULT_BASE_URL, RetellProvider
from .normalizer import (
    GENERIC_ERROR_MESSAGE,
    GENERIC_PROMPT_ERROR_MESSAGE,
    NormalizedError,
    ErrorRule,
    ERROR_RULES,
    normalize_provider_error,
)


__all__ = [
    # Base
    "ProviderResource",
    "ProviderResponse",
    "ProviderTransportError",
    "ProviderConnectionError",
    "ProviderTimeoutError",
    "build_agent_payload",
    "build_llm_payload",
    "summarize_payload",
    "VoiceAgentProvider",
    # Retell
    "DEFAULT_BASE_URL",
    "RetellProvider",
    # Normalizer
    "GENERIC_ERROR_MESSAGE",
    "GENERIC_PROMPT_ERROR_MESSAGE",
    "NormalizedError",
    "ErrorRule",
    "ERROR_RULES",
    "normalize_provider_error",
]
