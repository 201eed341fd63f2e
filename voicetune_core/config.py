"""Configuration for the Voicetune settings service.

Security Note:
    - Provider credentials and the JWT secret come from environment variables
    - No default secrets are provided for production safety
"""

import os
import secrets
from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _is_production() -> bool:
    """Check if running in production environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    return env in ("production", "prod", "staging")


def _generate_dev_secret() -> str:
    """Generate a random secret for development only."""
    if _is_production():
        raise ValueError(
            "SECURITY ERROR: JWT_SECRET environment variable is required in production. "
            "Please set JWT_SECRET to the signing secret of your identity provider."
        )
    return f"dev_only_{secrets.token_hex(32)}"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production",
    )

    # Service settings
    service_name: str = "voicetune"
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"
    log_format: str = Field(default="pretty", description="json, pretty or simple")

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./voicetune.db",
        description="Settings database URL",
    )

    # Retell
    retell_api_key: Optional[str] = Field(default=None, description="Retell API key")
    retell_agent_id: Optional[str] = Field(default=None, description="Retell agent to update")
    retell_llm_id: Optional[str] = Field(
        default=None,
        description="Retell LLM holding the agent prompt (prompt goes on the agent when unset)",
    )
    retell_base_url: str = "https://api.retellai.com"

    # Timeouts
    provider_timeout_seconds: float = 15.0
    persistence_timeout_seconds: float = 10.0

    # JWT Authentication
    jwt_secret: str = Field(
        default_factory=_generate_dev_secret,
        description="Signing secret of the identity provider's access tokens",
    )
    jwt_algorithm: str = "HS256"
    jwt_audience: Optional[str] = "authenticated"

    # Development
    dev_mode: bool = Field(
        default=False,
        validation_alias=AliasChoices("voicetune_dev_mode", "dev_mode"),
        description="Accept unauthenticated requests as the development user",
    )
    dev_user_id: str = "dev-user"

    # CORS
    cors_origins: List[str] = ["*"]

    @field_validator("jwt_secret")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Reject development secrets in production."""
        if _is_production() and (not v or v.startswith("dev_only_")):
            raise ValueError(
                "JWT_SECRET is required in production and must not use development defaults"
            )
        return v

    @field_validator("dev_mode")
    @classmethod
    def validate_dev_mode(cls, v: bool) -> bool:
        if v and _is_production():
            raise ValueError("Development mode cannot be enabled in production")
        return v

    def missing_provider_settings(self) -> List[str]:
        """List the provider credentials that are not configured."""
        missing = []
        if not self.retell_api_key:
            missing.append("API key")
        if not self.retell_agent_id:
            missing.append("Agent ID")
        return missing


@lru_cache
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
