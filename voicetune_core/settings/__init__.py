"""
Agent Settings Module

Settings schema, defaults, constraints, validation and change tracking.
"""

from .models import (
    SettingsField,
    ErrorField,
    NUMERIC_FIELDS,
    TEXT_FIELDS,
    NumericConstraint,
    PromptConstraint,
    SETTINGS_CONSTRAINTS,
    PROMPT_CONSTRAINT,
    SUPPORTED_LANGUAGES,
    SUPPORTED_VOICES,
    AgentSettings,
    DEFAULT_SETTINGS,
    default_settings,
)
from .validation import (
    SettingsViolation,
    find_violation,
    required_message,
    validate_settings,
)
from .comparison import settings_equal, is_dirty


__all__ = [
    # Models
    "SettingsField",
    "ErrorField",
    "NUMERIC_FIELDS",
    "TEXT_FIELDS",
    "NumericConstraint",
    "PromptConstraint",
    "SETTINGS_CONSTRAINTS",
    "PROMPT_CONSTRAINT",
    "SUPPORTED_LANGUAGES",
    "SUPPORTED_VOICES",
    "AgentSettings",
    "DEFAULT_SETTINGS",
    "default_settings",
    # Validation
    "SettingsViolation",
    "find_violation",
    "required_message",
    "validate_settings",
    # Comparison
    "settings_equal",
    "is_dirty",
]
