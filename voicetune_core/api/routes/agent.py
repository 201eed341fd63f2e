"""
Agent API Routes

Pushes a user's agent settings to the voice agent provider and saves them.
"""

import logging

from fastapi import APIRouter, Depends

from ...provider import build_agent_payload, normalize_provider_error, summarize_payload
from ...settings import AgentSettings, find_violation
from ...sync import (
    NetworkFailure,
    PersistedWithWarning,
    ProviderFailure,
    SettingsSyncGateway,
)
from ..auth import AuthContext
from ..base import (
    ProviderRejectedError,
    SettingsPayload,
    SettingsValidationError,
    UpdateAgentResponse,
    UpstreamUnavailableError,
    success_response,
)
from ..dependencies import get_current_user, get_gateway


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agent", tags=["Agent"])

UPDATED_MESSAGE = "Agent configuration updated successfully"


@router.post(
    "/update",
    response_model=UpdateAgentResponse,
    response_model_exclude_none=True,
)
async def update_agent(
    payload: SettingsPayload,
    auth: AuthContext = Depends(get_current_user),
    gateway: SettingsSyncGateway = Depends(get_gateway),
):
    """
    Update the voice agent with the submitted settings.

    Settings are validated locally first; nothing is sent to the provider
    when validation fails. A provider rejection is returned with the
    provider's own status code and the settings field it concerns.
    """
    settings = AgentSettings.from_dict(payload.model_dump())

    violation = find_violation(settings)
    if violation is not None:
        raise SettingsValidationError(violation.message, field=violation.field)

    outcome = await gateway.save(auth.user_id, settings)

    if isinstance(outcome, ProviderFailure):
        error = normalize_provider_error(
            outcome.payload,
            settings,
            failed_resource=outcome.failed_resource,
        )
        logger.error(
            "Retell API error",
            extra={
                "status_code": outcome.status_code,
                "resource": outcome.failed_resource.value,
                "payload": summarize_payload(build_agent_payload(settings)),
            },
        )
        raise ProviderRejectedError(
            outcome.status_code,
            error.message,
            field=error.field,
            details=outcome.payload,
        )

    if isinstance(outcome, NetworkFailure):
        raise UpstreamUnavailableError(details={"reason": outcome.reason})

    if isinstance(outcome, PersistedWithWarning):
        return success_response(
            outcome.data,
            message=UPDATED_MESSAGE,
            warning=f"Agent updated, but settings could not be saved: {outcome.reason}",
        )

    return success_response(outcome.data, message=UPDATED_MESSAGE)


__all__ = ["router"]
