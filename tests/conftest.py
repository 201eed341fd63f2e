"""Shared pytest fixtures for testing."""

import json
import os
from typing import Any, AsyncGenerator, Dict, List, Optional, Type
from uuid import uuid4

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

# Set test environment
os.environ["ENVIRONMENT"] = "development"


TEST_JWT_SECRET = "test_secret_key_for_voicetune_tokens_0123456789"


# =============================================================================
# Retell Stub
# =============================================================================


class RetellStub:
    """
    In-process stand-in for the Retell REST API.

    Requests are recorded; responses are configured per endpoint
    (``update-agent`` or ``update-retell-llm``) and default to 200.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._responses: Dict[str, Dict[str, Any]] = {}
        self._errors: Dict[str, Type[httpx.HTTPError]] = {}

    def respond(
        self,
        endpoint: str,
        status_code: int = 200,
        json: Optional[Any] = None,
        text: Optional[str] = None,
    ) -> None:
        self._responses[endpoint] = {"status_code": status_code, "json": json, "text": text}

    def fail(self, endpoint: str, error: Type[httpx.HTTPError]) -> None:
        self._errors[endpoint] = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = request.url.path.strip("/").split("/")[0]

        if endpoint in self._errors:
            raise self._errors[endpoint]("Simulated transport failure", request=request)

        configured = self._responses.get(endpoint)
        if configured is None:
            return httpx.Response(200, json={"agent_id": "agent_test", "last_modification_timestamp": 1})
        if configured["text"] is not None:
            return httpx.Response(configured["status_code"], text=configured["text"])
        return httpx.Response(configured["status_code"], json=configured["json"])

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def payloads(self, endpoint: str) -> List[Dict[str, Any]]:
        return [
            json.loads(request.content)
            for request in self.requests
            if request.url.path.strip("/").startswith(endpoint)
        ]

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def retell_stub() -> RetellStub:
    return RetellStub()


@pytest_asyncio.fixture
async def retell_provider(retell_stub):
    """Retell provider without a separate LLM resource."""
    from voicetune_core.provider import RetellProvider

    provider = RetellProvider(
        api_key="key_test",
        agent_id="agent_test",
        transport=retell_stub.transport,
    )
    yield provider
    await provider.close()


@pytest_asyncio.fixture
async def retell_llm_provider(retell_stub):
    """Retell provider with the prompt on a separate LLM resource."""
    from voicetune_core.provider import RetellProvider

    provider = RetellProvider(
        api_key="key_test",
        agent_id="agent_test",
        llm_id="llm_test",
        transport=retell_stub.transport,
    )
    yield provider
    await provider.close()


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def valid_settings():
    """Settings that pass every local check."""
    from voicetune_core.settings import AgentSettings

    return AgentSettings(
        voice_speed=1.2,
        responsiveness=0.8,
        interruption_sensitivity=0.6,
        voice_temperature=0.9,
        volume=1.1,
        language="en-US",
        voice_id="11labs-Aria",
        prompt="You are a friendly receptionist for a dental clinic.",
    )


@pytest.fixture
def memory_store():
    from voicetune_core.sync import InMemorySettingsStore

    return InMemorySettingsStore()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def database(tmp_path):
    """SQLite database with the schema created."""
    from voicetune_core.database import DatabaseManager

    db = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'voicetune_test.db'}")
    await db.create_all()
    yield db
    await db.close()


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def app_settings():
    from voicetune_core.config import Settings

    return Settings(
        _env_file=None,
        retell_api_key="key_test",
        retell_agent_id="agent_test",
        jwt_secret=TEST_JWT_SECRET,
        dev_mode=False,
    )


@pytest.fixture
def app(app_settings, retell_provider, memory_store) -> FastAPI:
    """Create test FastAPI application."""
    from voicetune_core.api.app import create_app

    return create_app(app_settings, provider=retell_provider, store=memory_store)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def user_id() -> str:
    """Generate a test user ID."""
    return f"usr_{uuid4().hex}"


@pytest.fixture
def access_token(app_settings, user_id) -> str:
    from voicetune_core.api.auth import JWTConfig, TokenAuthenticator

    authenticator = TokenAuthenticator(
        JWTConfig(secret_key=app_settings.jwt_secret, audience=app_settings.jwt_audience)
    )
    return authenticator.create_jwt(user_id)


@pytest_asyncio.fixture
async def authenticated_client(app: FastAPI, access_token) -> AsyncGenerator[AsyncClient, None]:
    """Create authenticated test HTTP client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        ac.headers["Authorization"] = f"Bearer {access_token}"
        yield ac
