"""
Retell Voice Agent Provider

Pushes agent settings to the Retell REST API. Voice and behavior settings
live on the agent resource; the prompt lives either on the agent or, when
an LLM id is configured, on the separate Retell LLM resource.
"""

import json
import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from ..settings import AgentSettings
from .base import (
    ProviderConnectionError,
    ProviderResource,
    ProviderResponse,
    ProviderTimeoutError,
    VoiceAgentProvider,
    build_agent_payload,
    build_llm_payload,
    summarize_payload,
)

logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "https://api.retellai.com"


class RetellProvider(VoiceAgentProvider):
    """
    Retell agent provider.

    Uses ``PATCH /update-agent/{agent_id}`` for the agent resource and
    ``PATCH /update-retell-llm/{llm_id}`` for the prompt resource.
    """

    def __init__(
        self,
        api_key: str,
        agent_id: str,
        llm_id: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("Retell API key is required")
        if not agent_id:
            raise ValueError("Retell agent id is required")

        self.api_key = api_key
        self.agent_id = agent_id
        self.llm_id = llm_id or None
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def provider_name(self) -> str:
        return "retell"

    @property
    def resources(self) -> Tuple[ProviderResource, ...]:
        if self.llm_id:
            return (ProviderResource.AGENT, ProviderResource.LLM)
        return (ProviderResource.AGENT,)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    def _request_for(
        self,
        resource: ProviderResource,
        settings: AgentSettings,
    ) -> Tuple[str, Dict[str, Any]]:
        if resource == ProviderResource.LLM:
            if not self.llm_id:
                raise ValueError("Retell LLM id is not configured")
            return f"/update-retell-llm/{self.llm_id}", build_llm_payload(settings)

        # The prompt rides on the agent only when there is no LLM resource.
        payload = build_agent_payload(settings, include_prompt=self.llm_id is None)
        return f"/update-agent/{self.agent_id}", payload

    async def update(
        self,
        resource: ProviderResource,
        settings: AgentSettings,
    ) -> ProviderResponse:
        """Send one resource update to Retell."""
        path, payload = self._request_for(resource, settings)

        logger.info(
            f"Sending {resource.value} update to Retell",
            extra={"path": path, "payload": summarize_payload(payload)},
        )

        try:
            client = await self._get_client()
            response = await client.patch(path, json=payload)
        except httpx.TimeoutException:
            raise ProviderTimeoutError(
                f"Retell request timed out after {self.timeout}s",
                provider=self.provider_name,
                resource=resource,
            )
        except httpx.HTTPError as e:
            raise ProviderConnectionError(
                "Failed to connect to Retell API",
                provider=self.provider_name,
                resource=resource,
                details={"error": str(e)},
            )

        data = self._parse_body(response)

        if response.is_success:
            logger.info(f"Retell {resource.value} updated")
        else:
            logger.error(
                f"Retell API error on {resource.value}",
                extra={
                    "status_code": response.status_code,
                    "response": data,
                    "payload": summarize_payload(payload),
                },
            )

        return ProviderResponse(
            resource=resource,
            status_code=response.status_code,
            data=data,
        )

    @staticmethod
    def _parse_body(response: httpx.Response) -> Dict[str, Any]:
        """Decode a response body, wrapping non-JSON text as a message."""
        if not response.content:
            return {}
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return {"message": response.text}
        if isinstance(body, dict):
            return body
        return {"message": body if isinstance(body, str) else json.dumps(body)}

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


__all__ = [
    "DEFAULT_BASE_URL",
    "RetellProvider",
]
