"""
Settings Validation

Checks agent settings against the documented constraints before anything
is sent to the provider. Only the first violation is reported.
"""

from dataclasses import dataclass
from typing import Optional

from .models import (
    NUMERIC_FIELDS,
    PROMPT_CONSTRAINT,
    SETTINGS_CONSTRAINTS,
    SUPPORTED_LANGUAGES,
    SUPPORTED_VOICES,
    AgentSettings,
    SettingsField,
)


@dataclass(frozen=True)
class SettingsViolation:
    """A single failed constraint."""

    field: str
    message: str


_REQUIRED_MESSAGES = {
    SettingsField.LANGUAGE.value: "Language is required",
    SettingsField.VOICE_ID.value: "Voice is required",
    SettingsField.PROMPT.value: "Prompt is required",
}


def required_message(field: str) -> str:
    """Message for a settings field that was left out entirely."""
    if field in SETTINGS_CONSTRAINTS:
        return f"{SETTINGS_CONSTRAINTS[field].label} is required"
    return _REQUIRED_MESSAGES.get(field, f"{field} is required")


def _check_prompt(prompt: str) -> Optional[str]:
    trimmed = (prompt or "").strip()
    if not trimmed:
        return required_message(SettingsField.PROMPT.value)
    if len(trimmed) < PROMPT_CONSTRAINT.min_length:
        return f"Prompt must be at least {PROMPT_CONSTRAINT.min_length} characters"
    # The upper bound applies to the raw text as typed.
    if len(prompt) > PROMPT_CONSTRAINT.max_length:
        return f"Prompt must be less than {PROMPT_CONSTRAINT.max_length} characters"
    return None


def find_violation(settings: AgentSettings) -> Optional[SettingsViolation]:
    """
    Find the first constraint the settings break.

    Args:
        settings: Settings to check

    Returns:
        The violation, or None when the settings are valid
    """
    prompt_error = _check_prompt(settings.prompt)
    if prompt_error:
        return SettingsViolation(SettingsField.PROMPT.value, prompt_error)

    for name in NUMERIC_FIELDS:
        constraint = SETTINGS_CONSTRAINTS[name]
        if not constraint.contains(getattr(settings, name)):
            return SettingsViolation(
                name,
                f"{constraint.label} must be {constraint.describe_range()}",
            )

    if not settings.language:
        return SettingsViolation(
            SettingsField.LANGUAGE.value,
            required_message(SettingsField.LANGUAGE.value),
        )
    if not settings.voice_id:
        return SettingsViolation(
            SettingsField.VOICE_ID.value,
            required_message(SettingsField.VOICE_ID.value),
        )

    if settings.language not in SUPPORTED_LANGUAGES:
        return SettingsViolation(
            SettingsField.LANGUAGE.value,
            f'Language "{settings.language}" is not supported',
        )
    if settings.voice_id not in SUPPORTED_VOICES:
        return SettingsViolation(
            SettingsField.VOICE_ID.value,
            f'Voice "{settings.voice_id}" is not supported',
        )

    return None


def validate_settings(settings: AgentSettings) -> Optional[str]:
    """Validate settings, returning the violation message or None."""
    violation = find_violation(settings)
    return violation.message if violation else None


__all__ = [
    "SettingsViolation",
    "find_violation",
    "required_message",
    "validate_settings",
]
