"""
Session Module

Form session state for editing agent settings.
"""

from .controller import (
    FormState,
    SubmitStatus,
    NoticeLevel,
    Notice,
    SettingsFormController,
)


__all__ = [
    "FormState",
    "SubmitStatus",
    "NoticeLevel",
    "Notice",
    "SettingsFormController",
]
