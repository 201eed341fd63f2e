"""
API Dependencies

FastAPI dependencies for settings, authentication, the voice agent
provider, the settings store and the sync gateway.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import Settings
from ..database import get_database
from ..provider import RetellProvider, VoiceAgentProvider
from ..sync import SettingsStore, SettingsSyncGateway, SqlSettingsStore
from .auth import AuthContext, AuthMethod, JWTConfig, TokenAuthenticator
from .base import AuthenticationError, ConfigurationMissingError


logger = logging.getLogger(__name__)


bearer_scheme = HTTPBearer(auto_error=False)


# =============================================================================
# Settings
# =============================================================================


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_authenticator(settings: Settings = Depends(get_app_settings)) -> TokenAuthenticator:
    return TokenAuthenticator(
        JWTConfig(
            secret_key=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            audience=settings.jwt_audience,
        )
    )


# =============================================================================
# Authentication Dependencies
# =============================================================================


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
    authenticator: TokenAuthenticator = Depends(get_authenticator),
) -> AuthContext:
    """
    Get the authenticated user.

    Usage in routes:
        @router.get("/settings")
        async def get_settings(auth: AuthContext = Depends(get_current_user)):
            ...
    """
    client_ip = request.client.host if request.client else None

    # Development mode - allow unauthenticated access
    if settings.dev_mode and credentials is None:
        logger.debug("Dev mode: Using development user")
        return AuthContext(
            method=AuthMethod.DEV_MODE,
            is_authenticated=True,
            user_id=settings.dev_user_id,
            client_ip=client_ip,
        )

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError()

    return authenticator.authenticate_jwt(credentials.credentials, client_ip=client_ip)


# =============================================================================
# Service Dependencies
# =============================================================================


def get_provider(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> VoiceAgentProvider:
    """
    Get the voice agent provider.

    The Retell client is created on first use so a missing credential is
    reported per request instead of failing startup.
    """
    provider = getattr(request.app.state, "provider", None)
    if provider is not None:
        return provider

    missing = settings.missing_provider_settings()
    if missing:
        logger.error(f"Retell {missing[0]} is not configured")
        raise ConfigurationMissingError(missing[0])

    provider = RetellProvider(
        api_key=settings.retell_api_key,
        agent_id=settings.retell_agent_id,
        llm_id=settings.retell_llm_id,
        base_url=settings.retell_base_url,
        timeout=settings.provider_timeout_seconds,
    )
    request.app.state.provider = provider
    return provider


def get_store(request: Request) -> SettingsStore:
    """Get the settings store."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = SqlSettingsStore(get_database())
        request.app.state.store = store
    return store


def get_gateway(
    provider: VoiceAgentProvider = Depends(get_provider),
    store: SettingsStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> SettingsSyncGateway:
    return SettingsSyncGateway(
        provider,
        store,
        persistence_timeout=settings.persistence_timeout_seconds,
    )


__all__ = [
    "bearer_scheme",
    "get_app_settings",
    "get_authenticator",
    "get_current_user",
    "get_provider",
    "get_store",
    "get_gateway",
]
