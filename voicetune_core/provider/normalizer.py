"""
Provider Error Normalization

Turns free-text provider error payloads into a user-facing message and
the settings field it most likely concerns.

The provider gives no stable machine-readable error codes, so the mapping
is a best-effort keyword match over an ordered rule table. Unmatched
errors keep the provider's own text with no field attached.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple

from ..settings import SETTINGS_CONSTRAINTS, AgentSettings, ErrorField, SettingsField
from .base import ProviderResource


GENERIC_ERROR_MESSAGE = "Failed to update agent configuration"
GENERIC_PROMPT_ERROR_MESSAGE = "Failed to update agent prompt"

# Provider voice names that show up in "voice not found" style errors.
VOICE_NAME_TOKENS: Tuple[str, ...] = ("11labs", "aria", "adrian")


class NormalizedError(NamedTuple):
    """User-facing error and the field it is attributed to."""

    message: str
    field: Optional[str]


@dataclass(frozen=True)
class ErrorRule:
    """
    One entry of the classification table.

    The rule matches when the lower-cased text contains any of ``any_of``
    (if given) and all of ``all_of`` (if given). Matching ``subrules`` are
    tried before the rule's own field and template.

    Templates are ``str.format`` strings with the placeholders ``voice_id``,
    ``language``, ``value``, ``bounds`` and ``raw``.
    """

    name: str
    field: Optional[str]
    template: str
    any_of: Tuple[str, ...] = ()
    all_of: Tuple[str, ...] = ()
    subject: Optional[str] = None
    subrules: Tuple["ErrorRule", ...] = ()

    def matches(self, text: str) -> bool:
        if self.any_of and not any(token in text for token in self.any_of):
            return False
        return all(token in text for token in self.all_of)


def _range_rule(name: str, any_of: Tuple[str, ...], label: str) -> ErrorRule:
    return ErrorRule(
        name=name,
        field=name,
        template=label + " value {value} is out of range. Must be {bounds}.",
        any_of=any_of,
        subject=name,
    )


ERROR_RULES: Tuple[ErrorRule, ...] = (
    ErrorRule(
        name="voice",
        field=SettingsField.VOICE_ID.value,
        template='Voice "{voice_id}" is not available. Please select a different voice.',
        any_of=("voice",) + VOICE_NAME_TOKENS + ("voice_id", "not found"),
    ),
    ErrorRule(
        name="language",
        field=SettingsField.LANGUAGE.value,
        template='Language "{language}" is not supported. Please select a different language.',
        any_of=("language", "locale"),
    ),
    _range_rule(SettingsField.VOICE_SPEED.value, ("voice_speed", "speed"), "Voice speed"),
    _range_rule(SettingsField.RESPONSIVENESS.value, ("responsiveness",), "Responsiveness"),
    _range_rule(
        SettingsField.INTERRUPTION_SENSITIVITY.value,
        ("interruption_sensitivity",),
        "Interruption sensitivity",
    ),
    _range_rule(
        SettingsField.VOICE_TEMPERATURE.value,
        ("voice_temperature", "temperature"),
        "Voice temperature",
    ),
    _range_rule(SettingsField.VOLUME.value, ("volume",), "Volume"),
    ErrorRule(
        name="prompt",
        field=ErrorField.PROMPT.value,
        template="Prompt error: {raw}",
        any_of=("prompt", "instruction", "general_prompt"),
    ),
    ErrorRule(
        name="auth",
        field=ErrorField.AUTH.value,
        template="Authentication failed. Please check your API credentials.",
        any_of=("unauthorized", "forbidden", "auth"),
    ),
    ErrorRule(
        name="agent_not_found",
        field=ErrorField.AGENT.value,
        template="Agent not found. Please check your Agent ID configuration.",
        all_of=("agent", "not found"),
    ),
    ErrorRule(
        name="llm_not_found",
        field=ErrorField.LLM.value,
        template="LLM not found. Please check your LLM ID configuration.",
        all_of=("llm", "not found"),
    ),
    ErrorRule(
        name="validation",
        field=None,
        template="Validation error: {raw}",
        any_of=("validation", "invalid"),
        subrules=(
            ErrorRule(
                name="validation_voice",
                field=SettingsField.VOICE_ID.value,
                template='Voice "{voice_id}" is not valid. Please select a different voice.',
                any_of=("voice_id", "voice"),
            ),
            ErrorRule(
                name="validation_language",
                field=SettingsField.LANGUAGE.value,
                template='Language "{language}" is not valid. Please select a different language.',
                any_of=("language",),
            ),
        ),
    ),
)

# Last-chance field attribution for errors no rule could place.
FALLBACK_FIELD_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("voice",) + VOICE_NAME_TOKENS, SettingsField.VOICE_ID.value),
    (("language",), SettingsField.LANGUAGE.value),
    (("prompt", "llm"), ErrorField.PROMPT.value),
)


def _text_field(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    return value if isinstance(value, str) else ""


def _coerce_payload(payload: Any) -> Mapping[str, Any]:
    if isinstance(payload, Mapping):
        return payload
    if isinstance(payload, str):
        return {"message": payload}
    return {}


def _format_value(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _render(rule: ErrorRule, raw: str, context: AgentSettings) -> str:
    values: Dict[str, Any] = {
        "voice_id": context.voice_id,
        "language": context.language,
        "raw": raw,
        "value": "",
        "bounds": "",
    }
    if rule.subject:
        values["value"] = _format_value(getattr(context, rule.subject))
        values["bounds"] = SETTINGS_CONSTRAINTS[rule.subject].describe_range()
    return rule.template.format(**values)


def _apply_rules(
    rules: Tuple[ErrorRule, ...],
    text: str,
    raw: str,
    context: AgentSettings,
) -> Optional[NormalizedError]:
    for rule in rules:
        if not rule.matches(text):
            continue
        nested = _apply_rules(rule.subrules, text, raw, context)
        if nested:
            return nested
        return NormalizedError(_render(rule, raw, context), rule.field)
    return None


def _fallback_field(text: str) -> Optional[str]:
    for tokens, field_name in FALLBACK_FIELD_RULES:
        if any(token in text for token in tokens):
            return field_name
    return None


def normalize_provider_error(
    payload: Any,
    context: AgentSettings,
    failed_resource: ProviderResource = ProviderResource.AGENT,
) -> NormalizedError:
    """
    Map a provider error payload to a user-facing message and field.

    Args:
        payload: Decoded provider error body (``message`` and/or ``error``)
        context: The settings that were submitted
        failed_resource: Provider resource whose update failed

    Returns:
        NormalizedError with the message and the attributed field (or None)
    """
    body = _coerce_payload(payload)
    message_text = _text_field(body, "message")
    error_text = _text_field(body, "error")
    raw = message_text or error_text

    if failed_resource == ProviderResource.LLM:
        return NormalizedError(
            f"Prompt error: {raw}" if raw else GENERIC_PROMPT_ERROR_MESSAGE,
            ErrorField.PROMPT.value,
        )

    result = _apply_rules(ERROR_RULES, raw.lower(), raw, context)
    if result is None:
        result = NormalizedError(raw or GENERIC_ERROR_MESSAGE, None)

    if result.field is None:
        combined = f"{message_text} {error_text}".lower()
        result = NormalizedError(result.message, _fallback_field(combined))

    return result


__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "GENERIC_PROMPT_ERROR_MESSAGE",
    "VOICE_NAME_TOKENS",
    "NormalizedError",
    "ErrorRule",
    "ERROR_RULES",
    "FALLBACK_FIELD_RULES",
    "normalize_provider_error",
]
