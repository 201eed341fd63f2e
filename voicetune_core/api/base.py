"""
API Base Types Module

Error codes, the API exception hierarchy and response helpers shared by
the REST routes.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Standardized error codes."""

    # Authentication errors (1xxx)
    AUTHENTICATION_REQUIRED = "AUTH_1001"
    INVALID_TOKEN = "AUTH_1002"
    EXPIRED_TOKEN = "AUTH_1003"

    # Validation errors (2xxx)
    VALIDATION_ERROR = "VAL_2001"
    INVALID_REQUEST_BODY = "VAL_2002"

    # Provider errors (3xxx)
    PROVIDER_REJECTED = "PRV_3001"
    UPSTREAM_UNAVAILABLE = "PRV_3002"

    # Server errors (5xxx)
    INTERNAL_ERROR = "SRV_5001"
    CONFIGURATION_MISSING = "SRV_5002"


# =============================================================================
# Response Models
# =============================================================================


class SettingsPayload(BaseModel):
    """Agent settings document as sent by clients."""

    voice_speed: float = Field(..., allow_inf_nan=False, description="Speech rate multiplier")
    responsiveness: float = Field(
        ...,
        allow_inf_nan=False,
        description="How quickly the agent responds",
    )
    interruption_sensitivity: float = Field(
        ...,
        allow_inf_nan=False,
        description="How easily the caller can interrupt the agent",
    )
    voice_temperature: float = Field(..., allow_inf_nan=False, description="Voice expressiveness")
    volume: float = Field(..., allow_inf_nan=False, description="Output volume")
    language: str = Field(..., description="Language code")
    voice_id: str = Field(..., description="Provider voice identifier")
    prompt: str = Field(..., description="Agent system prompt")


class UpdateAgentResponse(BaseModel):
    """Response of a settings update."""

    success: bool = True
    message: Optional[str] = None
    warning: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


# =============================================================================
# Exception Classes
# =============================================================================


class APIException(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None,
        field: Optional[str] = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.field = field
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Render the error response body."""
        return error_response(
            self.message,
            code=self.code,
            field=self.field,
            details=self.details,
        )


class AuthenticationError(APIException):
    """Authentication failure."""

    def __init__(
        self,
        message: str = "Unauthorized",
        code: ErrorCode = ErrorCode.AUTHENTICATION_REQUIRED,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=401,
            details=details,
        )


class ConfigurationMissingError(APIException):
    """Required server-side configuration is absent."""

    def __init__(self, setting: str):
        super().__init__(
            code=ErrorCode.CONFIGURATION_MISSING,
            message=f"Server configuration error: Missing {setting}",
            status_code=500,
        )


class SettingsValidationError(APIException):
    """Submitted settings break a constraint."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=400,
            details=details,
            field=field,
        )


class ProviderRejectedError(APIException):
    """The voice agent provider rejected the update."""

    def __init__(
        self,
        status_code: int,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            code=ErrorCode.PROVIDER_REJECTED,
            message=message,
            status_code=status_code,
            details=details,
            field=field,
        )


class UpstreamUnavailableError(APIException):
    """The voice agent provider could not be reached."""

    def __init__(
        self,
        message: str = "Could not reach the voice agent provider. Please try again.",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            code=ErrorCode.UPSTREAM_UNAVAILABLE,
            message=message,
            status_code=503,
            details=details,
        )


class ServiceError(APIException):
    """Internal service error."""

    def __init__(
        self,
        message: str = "Internal server error",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            code=ErrorCode.INTERNAL_ERROR,
            message=message,
            status_code=500,
            details=details,
        )


# =============================================================================
# Utility Functions
# =============================================================================


def success_response(data: Any = None, **extra: Any) -> Dict[str, Any]:
    """Create a success response."""
    response: Dict[str, Any] = {"success": True}
    response.update({key: value for key, value in extra.items() if value is not None})
    if data is not None:
        response["data"] = data
    return response


def error_response(
    message: str,
    code: Optional[ErrorCode] = None,
    field: Optional[str] = None,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    """Create an error response."""
    response: Dict[str, Any] = {"success": False, "error": message}
    if code is not None:
        response["code"] = code.value
    if field is not None:
        response["field"] = field
    if details is not None:
        response["details"] = details
    return response


__all__ = [
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
]
