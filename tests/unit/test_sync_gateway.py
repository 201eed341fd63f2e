"""
Unit Tests for the Settings Sync Gateway

Tests for save ordering, outcome classification and baseline loading.
"""

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from voicetune_core.provider import ProviderResource
from voicetune_core.sync import (
    AuthRequiredError,
    NetworkFailure,
    PersistedWithWarning,
    ProviderFailure,
    SettingsSyncGateway,
    Success,
    provider_accepted,
)


@pytest.fixture
def gateway(retell_provider, memory_store):
    return SettingsSyncGateway(retell_provider, memory_store)


@pytest.fixture
def split_gateway(retell_llm_provider, memory_store):
    return SettingsSyncGateway(retell_llm_provider, memory_store)


class TestLoad:
    """Tests for loading saved settings."""

    @pytest.mark.asyncio
    async def test_first_time_user_gets_none(self, gateway, user_id):
        assert await gateway.load(user_id) is None
        assert await gateway.has_saved_settings(user_id) is False

    @pytest.mark.asyncio
    async def test_load_after_upsert(self, gateway, memory_store, user_id, valid_settings):
        await memory_store.upsert_settings(user_id, valid_settings)

        assert await gateway.load(user_id) == valid_settings
        assert await gateway.has_saved_settings(user_id) is True

    @pytest.mark.asyncio
    async def test_missing_user(self, gateway):
        with pytest.raises(AuthRequiredError):
            await gateway.load(None)
        with pytest.raises(AuthRequiredError):
            await gateway.has_saved_settings("")


class TestSave:
    """Tests for saving settings."""

    @pytest.mark.asyncio
    async def test_success(self, gateway, memory_store, retell_stub, user_id, valid_settings):
        outcome = await gateway.save(user_id, valid_settings)

        assert isinstance(outcome, Success)
        assert outcome.data["agent"]["agent_id"] == "agent_test"
        assert provider_accepted(outcome)
        assert retell_stub.call_count == 1
        assert await memory_store.load_settings(user_id) == valid_settings

    @pytest.mark.asyncio
    async def test_missing_user_makes_no_request(self, gateway, retell_stub, valid_settings):
        with pytest.raises(AuthRequiredError):
            await gateway.save(None, valid_settings)
        assert retell_stub.call_count == 0

    @pytest.mark.asyncio
    async def test_provider_failure_skips_persistence(
        self, gateway, memory_store, retell_stub, user_id, valid_settings
    ):
        retell_stub.respond("update-agent", 400, json={"message": "voice not found"})

        outcome = await gateway.save(user_id, valid_settings)

        assert isinstance(outcome, ProviderFailure)
        assert outcome.status_code == 400
        assert outcome.payload == {"message": "voice not found"}
        assert outcome.failed_resource == ProviderResource.AGENT
        assert not provider_accepted(outcome)
        assert await memory_store.has_settings(user_id) is False

    @pytest.mark.asyncio
    async def test_transport_failure(self, gateway, memory_store, retell_stub, user_id, valid_settings):
        retell_stub.fail("update-agent", httpx.ConnectError)

        outcome = await gateway.save(user_id, valid_settings)

        assert isinstance(outcome, NetworkFailure)
        assert outcome.resource == ProviderResource.AGENT
        assert await memory_store.has_settings(user_id) is False

    @pytest.mark.asyncio
    async def test_store_failure_is_a_warning(self, retell_provider, user_id, valid_settings):
        store = AsyncMock()
        store.upsert_settings.return_value = False
        gateway = SettingsSyncGateway(retell_provider, store)

        outcome = await gateway.save(user_id, valid_settings)

        assert isinstance(outcome, PersistedWithWarning)
        assert provider_accepted(outcome)
        store.upsert_settings.assert_awaited_once_with(user_id, valid_settings)

    @pytest.mark.asyncio
    async def test_store_exception_is_a_warning(self, retell_provider, user_id, valid_settings):
        store = AsyncMock()
        store.upsert_settings.side_effect = RuntimeError("disk full")
        gateway = SettingsSyncGateway(retell_provider, store)

        outcome = await gateway.save(user_id, valid_settings)

        assert isinstance(outcome, PersistedWithWarning)
        assert "disk full" in outcome.reason

    @pytest.mark.asyncio
    async def test_store_timeout_is_a_warning(self, retell_provider, user_id, valid_settings):
        async def slow_upsert(*args):
            await asyncio.sleep(1)
            return True

        store = AsyncMock()
        store.upsert_settings.side_effect = slow_upsert
        gateway = SettingsSyncGateway(retell_provider, store, persistence_timeout=0.01)

        outcome = await gateway.save(user_id, valid_settings)

        assert isinstance(outcome, PersistedWithWarning)
        assert "timed out" in outcome.reason

    @pytest.mark.asyncio
    async def test_unexpected_provider_error_propagates(self, memory_store, user_id, valid_settings):
        provider = AsyncMock()
        provider.resources = (ProviderResource.AGENT,)
        provider.update.side_effect = KeyError("boom")
        gateway = SettingsSyncGateway(provider, memory_store)

        with pytest.raises(KeyError):
            await gateway.save(user_id, valid_settings)


class TestSplitResources:
    """Tests for providers with separate agent and LLM resources."""

    @pytest.mark.asyncio
    async def test_both_resources_updated(self, split_gateway, retell_stub, user_id, valid_settings):
        outcome = await split_gateway.save(user_id, valid_settings)

        assert isinstance(outcome, Success)
        assert set(outcome.data) == {"agent", "llm"}
        assert retell_stub.call_count == 2

    @pytest.mark.asyncio
    async def test_llm_failure(self, split_gateway, memory_store, retell_stub, user_id, valid_settings):
        retell_stub.respond("update-retell-llm", 400, json={"message": "prompt too long"})

        outcome = await split_gateway.save(user_id, valid_settings)

        assert isinstance(outcome, ProviderFailure)
        assert outcome.failed_resource == ProviderResource.LLM
        assert await memory_store.has_settings(user_id) is False

    @pytest.mark.asyncio
    async def test_agent_failure_reported_first(self, split_gateway, retell_stub, user_id, valid_settings):
        retell_stub.respond("update-agent", 404, json={"message": "agent not found"})
        retell_stub.respond("update-retell-llm", 400, json={"message": "prompt too long"})

        outcome = await split_gateway.save(user_id, valid_settings)

        assert isinstance(outcome, ProviderFailure)
        assert outcome.failed_resource == ProviderResource.AGENT
        assert outcome.status_code == 404

    @pytest.mark.asyncio
    async def test_llm_transport_failure(self, split_gateway, retell_stub, user_id, valid_settings):
        retell_stub.fail("update-retell-llm", httpx.ReadTimeout)

        outcome = await split_gateway.save(user_id, valid_settings)

        assert isinstance(outcome, NetworkFailure)
        assert outcome.resource == ProviderResource.LLM

    @pytest.mark.asyncio
    async def test_both_transport_failures_report_agent(
        self, split_gateway, memory_store, retell_stub, user_id, valid_settings
    ):
        retell_stub.fail("update-agent", httpx.ConnectError)
        retell_stub.fail("update-retell-llm", httpx.ReadTimeout)

        outcome = await split_gateway.save(user_id, valid_settings)

        assert isinstance(outcome, NetworkFailure)
        assert outcome.resource == ProviderResource.AGENT
        assert retell_stub.call_count == 2
        assert await memory_store.has_settings(user_id) is False

    @pytest.mark.asyncio
    async def test_agent_transport_failure_beats_llm_rejection(
        self, split_gateway, retell_stub, user_id, valid_settings
    ):
        retell_stub.fail("update-agent", httpx.ConnectError)
        retell_stub.respond("update-retell-llm", 400, json={"message": "prompt too long"})

        outcome = await split_gateway.save(user_id, valid_settings)

        assert isinstance(outcome, NetworkFailure)
        assert outcome.resource == ProviderResource.AGENT
