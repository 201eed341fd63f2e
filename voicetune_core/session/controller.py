"""
Settings Form Controller

Holds the baseline and working settings snapshots of one editing session,
validates before submitting, drives the sync gateway and turns every save
outcome into form state: field errors, a general error, a warning and a
feed of user notices.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from ..provider import normalize_provider_error
from ..settings import (
    PROMPT_CONSTRAINT,
    AgentSettings,
    default_settings,
    find_violation,
    is_dirty,
)
from ..sync import (
    AuthRequiredError,
    NetworkFailure,
    PersistedWithWarning,
    ProviderFailure,
    SettingsSyncGateway,
    Success,
)

logger = logging.getLogger(__name__)


LOAD_ERROR_MESSAGE = "Failed to load saved settings. Showing defaults."
NETWORK_ERROR_MESSAGE = "Could not reach the voice agent service. Please try again."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."
SAVED_MESSAGE = "Agent settings updated successfully"


class FormState(str, Enum):
    """Lifecycle state of a form session."""

    LOADING = "loading"
    CLEAN = "clean"
    DIRTY = "dirty"
    SUBMITTING = "submitting"


class SubmitStatus(str, Enum):
    """Result of a save attempt as seen by the form."""

    SAVED = "saved"
    SAVED_WITH_WARNING = "saved_with_warning"
    INVALID = "invalid"
    PROVIDER_ERROR = "provider_error"
    NETWORK_ERROR = "network_error"
    AUTH_REQUIRED = "auth_required"
    SKIPPED = "skipped"


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """A transient user notice."""

    level: NoticeLevel
    message: str


class SettingsFormController:
    """
    Controller for one settings editing session.

    The baseline is the last known saved settings and the working snapshot
    holds live edits. Both are immutable values, so assigning one to the
    other never aliases mutable state.

    Args:
        gateway: Sync gateway used to load and save
        user_id: Identity of the editing user (None when signed out)
        commit_baseline_on_warning: Whether a save the provider accepted but
            the store did not still clears the dirty state
    """

    def __init__(
        self,
        gateway: SettingsSyncGateway,
        user_id: Optional[str],
        commit_baseline_on_warning: bool = True,
    ):
        self._gateway = gateway
        self._user_id = user_id
        self._commit_baseline_on_warning = commit_baseline_on_warning

        self._baseline = default_settings()
        self._working = default_settings()
        self._loaded = False
        self._submitting = False

        self.is_default = True
        self.field_errors: Dict[str, str] = {}
        self.general_error: Optional[str] = None
        self.warning: Optional[str] = None
        self.notices: List[Notice] = []

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> FormState:
        if not self._loaded:
            return FormState.LOADING
        if self._submitting:
            return FormState.SUBMITTING
        return FormState.DIRTY if self.is_dirty else FormState.CLEAN

    @property
    def baseline(self) -> AgentSettings:
        return self._baseline

    @property
    def working(self) -> AgentSettings:
        return self._working

    @property
    def is_dirty(self) -> bool:
        return is_dirty(self._baseline, self._working)

    @property
    def prompt_length(self) -> int:
        return len(self._working.prompt)

    @property
    def prompt_limit(self) -> int:
        return PROMPT_CONSTRAINT.max_length

    @property
    def can_save(self) -> bool:
        """Whether the save action is enabled."""
        prompt = self._working.prompt
        return (
            self._loaded
            and not self._submitting
            and self.is_dirty
            and bool(prompt.strip())
            and len(prompt) <= PROMPT_CONSTRAINT.max_length
        )

    def _notify(self, level: NoticeLevel, message: str) -> None:
        self.notices.append(Notice(level, message))

    def _clear_errors(self) -> None:
        self.field_errors = {}
        self.general_error = None
        self.warning = None

    # -------------------------------------------------------------------------
    # Loading and editing
    # -------------------------------------------------------------------------

    async def load(self) -> AgentSettings:
        """
        Load the saved baseline once.

        Falls back to the defaults when the user never saved or the load
        fails; a failure is recorded as the general error.
        """
        if self._loaded:
            return self._working

        saved: Optional[AgentSettings] = None
        try:
            saved = await self._gateway.load(self._user_id)
        except AuthRequiredError as e:
            self.general_error = e.message
        except Exception:
            logger.exception("Error loading settings", extra={"user_id": self._user_id})
            self.general_error = LOAD_ERROR_MESSAGE

        self.is_default = saved is None
        self._baseline = saved if saved is not None else default_settings()
        self._working = self._baseline.copy()
        self._loaded = True
        return self._working

    def update_field(self, name: str, value: Any) -> AgentSettings:
        """Replace one field of the working snapshot."""
        self._working = self._working.with_field(name, value)
        self.field_errors.pop(name, None)
        return self._working

    def discard(self) -> bool:
        """Drop unsaved edits; returns whether anything was discarded."""
        changed = self.is_dirty
        self._working = self._baseline.copy()
        self._clear_errors()
        if changed:
            self._notify(NoticeLevel.INFO, "Changes discarded")
        return changed

    def reset_to_defaults(self) -> AgentSettings:
        """Set the working snapshot to the default settings without saving."""
        self._working = default_settings()
        self.field_errors = {}
        self._notify(NoticeLevel.INFO, "Settings reset to defaults. Save to apply.")
        return self._working

    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------

    async def save(self) -> SubmitStatus:
        """
        Validate and submit the working snapshot.

        Returns:
            SubmitStatus describing what happened. Errors are recorded on
            the controller and never raised.
        """
        if not self.can_save:
            return SubmitStatus.SKIPPED

        self._clear_errors()
        submitted = self._working.copy()

        violation = find_violation(submitted)
        if violation is not None:
            self.field_errors[violation.field] = violation.message
            self._notify(NoticeLevel.ERROR, violation.message)
            return SubmitStatus.INVALID

        self._submitting = True
        try:
            outcome = await self._gateway.save(self._user_id, submitted)
        except AuthRequiredError as e:
            self.general_error = e.message
            self._notify(NoticeLevel.ERROR, e.message)
            return SubmitStatus.AUTH_REQUIRED
        except Exception:
            logger.exception("Error saving settings", extra={"user_id": self._user_id})
            self.general_error = UNEXPECTED_ERROR_MESSAGE
            self._notify(NoticeLevel.ERROR, UNEXPECTED_ERROR_MESSAGE)
            return SubmitStatus.NETWORK_ERROR
        finally:
            self._submitting = False

        return self._apply_outcome(outcome, submitted)

    def _apply_outcome(self, outcome, submitted: AgentSettings) -> SubmitStatus:
        if isinstance(outcome, Success):
            self._commit(submitted)
            self._notify(NoticeLevel.SUCCESS, SAVED_MESSAGE)
            return SubmitStatus.SAVED

        if isinstance(outcome, PersistedWithWarning):
            if self._commit_baseline_on_warning:
                self._commit(submitted)
            self.warning = outcome.reason
            self._notify(
                NoticeLevel.WARNING,
                f"Agent updated, but settings were not saved: {outcome.reason}",
            )
            return SubmitStatus.SAVED_WITH_WARNING

        if isinstance(outcome, ProviderFailure):
            error = normalize_provider_error(
                outcome.payload,
                submitted,
                failed_resource=outcome.failed_resource,
            )
            if error.field:
                self.field_errors[error.field] = error.message
            else:
                self.general_error = error.message
            self._notify(NoticeLevel.ERROR, error.message)
            return SubmitStatus.PROVIDER_ERROR

        if isinstance(outcome, NetworkFailure):
            logger.warning(
                f"Provider unreachable: {outcome.reason}",
                extra={"user_id": self._user_id},
            )
            self.general_error = NETWORK_ERROR_MESSAGE
            self._notify(NoticeLevel.ERROR, NETWORK_ERROR_MESSAGE)
            return SubmitStatus.NETWORK_ERROR

        raise TypeError(f"Unknown save outcome: {outcome!r}")

    def _commit(self, submitted: AgentSettings) -> None:
        self._baseline = submitted.copy()
        self.is_default = False


__all__ = [
    "FormState",
    "SubmitStatus",
    "NoticeLevel",
    "Notice",
    "SettingsFormController",
]
