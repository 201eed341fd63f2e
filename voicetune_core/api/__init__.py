"""
REST API Module

FastAPI surface of the settings service.

Features:
- Agent settings update with local validation
- Provider error normalization into field-level errors
- JWT bearer authentication with a development mode
"""

from .base import (
    ErrorCode,
    SettingsPayload,
    UpdateAgentResponse,
    APIException,
    AuthenticationError,
    ConfigurationMissingError,
    SettingsValidationError,
    ProviderRejectedError,
    UpstreamUnavailableError,
    ServiceError,
    success_response,
    error_response,
)
from .auth import AuthMethod, AuthContext, JWTConfig, TokenAuthenticator
from .app import HealthResponse, create_app, run_server


__all__ = [
    # Base
    "ErrorCode",
    "SettingsPayload",
    "UpdateAgentResponse",
    "APIException",
    "AuthenticationError",
    "ConfigurationMissingError",
    "SettingsValidationError",
    "ProviderRejectedError",
    "UpstreamUnavailableError",
    "ServiceError",
    "success_response",
    "error_response",
    # Auth
    "AuthMethod",
    "AuthContext",
    "JWTConfig",
    "TokenAuthenticator",
    # App
    "HealthResponse",
    "create_app",
    "run_server",
]
