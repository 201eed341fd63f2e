"""
Unit Tests for the Retell Provider

Tests for request construction, response decoding and transport error
mapping against a mocked Retell API.
"""

import httpx
import pytest

from voicetune_core.provider import (
    ProviderConnectionError,
    ProviderResource,
    ProviderTimeoutError,
    RetellProvider,
    build_agent_payload,
    summarize_payload,
)


class TestPayloads:
    """Tests for payload builders."""

    def test_agent_payload_includes_prompt(self, valid_settings):
        payload = build_agent_payload(valid_settings)
        assert payload["voice_speed"] == 1.2
        assert payload["language"] == "en-US"
        assert payload["voice_id"] == "11labs-Aria"
        assert payload["general_prompt"] == valid_settings.prompt

    def test_agent_payload_without_prompt(self, valid_settings):
        payload = build_agent_payload(valid_settings, include_prompt=False)
        assert "general_prompt" not in payload

    def test_blank_prompt_is_omitted(self, valid_settings):
        payload = build_agent_payload(valid_settings.with_field("prompt", "   "))
        assert "general_prompt" not in payload

    def test_prompt_is_trimmed(self, valid_settings):
        payload = build_agent_payload(valid_settings.with_field("prompt", "  Be concise and kind.  "))
        assert payload["general_prompt"] == "Be concise and kind."

    def test_summary_truncates_prompt(self, valid_settings):
        long_prompt = "x" * 120
        summary = summarize_payload({"general_prompt": long_prompt, "volume": 1.0})
        assert summary["general_prompt"] == "x" * 50 + "..."
        assert summary["prompt_length"] == 120
        assert summary["volume"] == 1.0


class TestRetellProvider:
    """Tests for RetellProvider requests."""

    def test_requires_credentials(self):
        with pytest.raises(ValueError):
            RetellProvider(api_key="", agent_id="agent_test")
        with pytest.raises(ValueError):
            RetellProvider(api_key="key_test", agent_id="")

    def test_resources(self, retell_provider, retell_llm_provider):
        assert retell_provider.resources == (ProviderResource.AGENT,)
        assert retell_llm_provider.resources == (ProviderResource.AGENT, ProviderResource.LLM)

    @pytest.mark.asyncio
    async def test_agent_update_request(self, retell_provider, retell_stub, valid_settings):
        response = await retell_provider.update(ProviderResource.AGENT, valid_settings)

        assert response.ok
        assert response.data["agent_id"] == "agent_test"

        request = retell_stub.requests[0]
        assert request.method == "PATCH"
        assert request.url.path == "/update-agent/agent_test"
        assert request.headers["Authorization"] == "Bearer key_test"

        payload = retell_stub.payloads("update-agent")[0]
        assert payload["general_prompt"] == valid_settings.prompt

    @pytest.mark.asyncio
    async def test_prompt_goes_to_llm_resource(self, retell_llm_provider, retell_stub, valid_settings):
        await retell_llm_provider.update(ProviderResource.AGENT, valid_settings)
        await retell_llm_provider.update(ProviderResource.LLM, valid_settings)

        agent_payload = retell_stub.payloads("update-agent")[0]
        llm_payload = retell_stub.payloads("update-retell-llm")[0]

        assert "general_prompt" not in agent_payload
        assert llm_payload == {"general_prompt": valid_settings.prompt}
        assert retell_stub.requests[1].url.path == "/update-retell-llm/llm_test"

    @pytest.mark.asyncio
    async def test_llm_update_without_llm_id(self, retell_provider, valid_settings):
        with pytest.raises(ValueError):
            await retell_provider.update(ProviderResource.LLM, valid_settings)

    @pytest.mark.asyncio
    async def test_error_response(self, retell_provider, retell_stub, valid_settings):
        retell_stub.respond("update-agent", 422, json={"message": "voice not found"})

        response = await retell_provider.update(ProviderResource.AGENT, valid_settings)

        assert not response.ok
        assert response.status_code == 422
        assert response.data == {"message": "voice not found"}

    @pytest.mark.asyncio
    async def test_non_json_error_body(self, retell_provider, retell_stub, valid_settings):
        retell_stub.respond("update-agent", 502, text="Bad Gateway")

        response = await retell_provider.update(ProviderResource.AGENT, valid_settings)

        assert response.status_code == 502
        assert response.data == {"message": "Bad Gateway"}

    @pytest.mark.asyncio
    async def test_empty_body(self, retell_provider, retell_stub, valid_settings):
        retell_stub.respond("update-agent", 204)

        response = await retell_provider.update(ProviderResource.AGENT, valid_settings)

        assert response.ok
        assert response.data == {}

    @pytest.mark.asyncio
    async def test_connection_error(self, retell_provider, retell_stub, valid_settings):
        retell_stub.fail("update-agent", httpx.ConnectError)

        with pytest.raises(ProviderConnectionError) as exc_info:
            await retell_provider.update(ProviderResource.AGENT, valid_settings)

        assert exc_info.value.resource == ProviderResource.AGENT
        assert exc_info.value.code == "PROVIDER_CONNECTION_ERROR"

    @pytest.mark.asyncio
    async def test_timeout(self, retell_provider, retell_stub, valid_settings):
        retell_stub.fail("update-agent", httpx.ReadTimeout)

        with pytest.raises(ProviderTimeoutError):
            await retell_provider.update(ProviderResource.AGENT, valid_settings)

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, retell_provider, valid_settings):
        await retell_provider.update(ProviderResource.AGENT, valid_settings)
        await retell_provider.close()
        await retell_provider.close()
