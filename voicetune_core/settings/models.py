"""
Agent Settings Model

Defines the voice agent settings schema, the defaults used for new users,
the numeric and textual constraints accepted by the provider, and the
supported language and voice catalogues.
"""

import math
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


# =============================================================================
# Field Names
# =============================================================================


class SettingsField(str, Enum):
    """Names of the editable agent settings fields."""

    VOICE_SPEED = "voice_speed"
    RESPONSIVENESS = "responsiveness"
    INTERRUPTION_SENSITIVITY = "interruption_sensitivity"
    VOICE_TEMPERATURE = "voice_temperature"
    VOLUME = "volume"
    LANGUAGE = "language"
    VOICE_ID = "voice_id"
    PROMPT = "prompt"


class ErrorField(str, Enum):
    """Pseudo-fields for failures that belong to no editable field."""

    AUTH = "auth"
    AGENT = "agent"
    LLM = "llm"
    PROMPT = "prompt"


NUMERIC_FIELDS: Tuple[str, ...] = (
    SettingsField.VOICE_SPEED.value,
    SettingsField.RESPONSIVENESS.value,
    SettingsField.INTERRUPTION_SENSITIVITY.value,
    SettingsField.VOICE_TEMPERATURE.value,
    SettingsField.VOLUME.value,
)

TEXT_FIELDS: Tuple[str, ...] = (
    SettingsField.LANGUAGE.value,
    SettingsField.VOICE_ID.value,
    SettingsField.PROMPT.value,
)


# =============================================================================
# Constraints
# =============================================================================


@dataclass(frozen=True)
class NumericConstraint:
    """Closed interval and slider step for a numeric setting."""

    minimum: float
    maximum: float
    step: float
    label: str

    def contains(self, value: float) -> bool:
        """Check the value lies inside the closed interval (NaN never does)."""
        return self.minimum <= value <= self.maximum

    def describe_range(self) -> str:
        return f"between {self.minimum} and {self.maximum}"


@dataclass(frozen=True)
class PromptConstraint:
    """Length bounds for the agent prompt."""

    min_length: int = 10
    max_length: int = 2000


SETTINGS_CONSTRAINTS: Dict[str, NumericConstraint] = {
    SettingsField.VOICE_SPEED.value: NumericConstraint(0.5, 2.0, 0.05, "Voice speed"),
    SettingsField.RESPONSIVENESS.value: NumericConstraint(0, 1, 0.05, "Responsiveness"),
    SettingsField.INTERRUPTION_SENSITIVITY.value: NumericConstraint(
        0, 1, 0.05, "Interruption sensitivity"
    ),
    SettingsField.VOICE_TEMPERATURE.value: NumericConstraint(0, 2, 0.1, "Voice temperature"),
    SettingsField.VOLUME.value: NumericConstraint(0, 2, 0.1, "Volume"),
}

PROMPT_CONSTRAINT = PromptConstraint()


# =============================================================================
# Catalogues
# =============================================================================


SUPPORTED_LANGUAGES: Dict[str, str] = {
    "en-US": "English (US)",
    "en-GB": "English (UK)",
    "es-ES": "Spanish (Spain)",
    "es-MX": "Spanish (Mexico)",
    "fr-FR": "French",
    "de-DE": "German",
    "it-IT": "Italian",
    "pt-BR": "Portuguese (Brazil)",
    "ja-JP": "Japanese",
    "zh-CN": "Chinese (Simplified)",
    "ko-KR": "Korean",
    "ar-SA": "Arabic",
    "hi-IN": "Hindi",
    "ru-RU": "Russian",
    "multilingual": "Multilingual",
}

SUPPORTED_VOICES: Dict[str, str] = {
    "11labs-Adrian": "Adrian (Male, Authoritative)",
    "11labs-Aria": "Aria (Female, Expressive)",
    "11labs-Clyde": "Clyde (Male, Warm)",
    "11labs-Emily": "Emily (Female, Calm)",
    "11labs-Josh": "Josh (Male, Casual)",
    "11labs-Rachel": "Rachel (Female, Professional)",
    "11labs-Sam": "Sam (Male, Friendly)",
}


# =============================================================================
# Agent Settings
# =============================================================================


@dataclass(frozen=True)
class AgentSettings:
    """
    Voice agent settings.

    Instances are immutable; edits produce a new value via ``with_field``
    so the baseline and working snapshots held by a form session can never
    share state.
    """

    voice_speed: float = 1.0
    responsiveness: float = 1.0
    interruption_sensitivity: float = 1.0
    voice_temperature: float = 1.0
    volume: float = 1.0
    language: str = "en-US"
    voice_id: str = "11labs-Adrian"
    prompt: str = ""

    def __post_init__(self):
        for name in NUMERIC_FIELDS:
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be a finite number")

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @staticmethod
    def _coerce(name: str, value: Any) -> Any:
        if name in NUMERIC_FIELDS:
            return float(value)
        if name in TEXT_FIELDS:
            return "" if value is None else str(value)
        raise ValueError(f"Unknown settings field: {name}")

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "AgentSettings":
        """
        Decode a stored settings document.

        Missing keys fall back to the defaults and unknown keys are ignored,
        so rows written by an older schema still load.
        """
        if not data:
            return cls()

        values: Dict[str, Any] = {}
        for name in cls.field_names():
            if name not in data or data[name] is None:
                continue
            values[name] = cls._coerce(name, data[name])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return asdict(self)

    def copy(self) -> "AgentSettings":
        """Return an independent copy of this snapshot."""
        return replace(self)

    def with_field(self, name: str, value: Any) -> "AgentSettings":
        """
        Return a new snapshot with one field changed.

        Raises:
            ValueError: Unknown field, or a numeric value that is not a
                finite number
        """
        return replace(self, **{name: self._coerce(name, value)})


DEFAULT_SETTINGS = AgentSettings()


def default_settings() -> AgentSettings:
    """Get a fresh copy of the settings used for first-time users."""
    return DEFAULT_SETTINGS.copy()


__all__ = [
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
]
