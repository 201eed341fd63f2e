"""Change tracking between settings snapshots."""

from .models import NUMERIC_FIELDS, AgentSettings


def settings_equal(a: AgentSettings, b: AgentSettings) -> bool:
    """
    Check whether two snapshots are semantically equal.

    Prompts are compared after trimming, so whitespace-only edits at either
    end do not count as a change.
    """
    for name in NUMERIC_FIELDS:
        if getattr(a, name) != getattr(b, name):
            return False

    return (
        a.language == b.language
        and a.voice_id == b.voice_id
        and a.prompt.strip() == b.prompt.strip()
    )


def is_dirty(baseline: AgentSettings, working: AgentSettings) -> bool:
    """Whether the working snapshot has unsaved changes."""
    return not settings_equal(baseline, working)


__all__ = ["settings_equal", "is_dirty"]
