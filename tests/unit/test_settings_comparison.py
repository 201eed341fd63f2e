"""Unit tests for settings change tracking."""

import pytest

from voicetune_core.settings import default_settings, is_dirty, settings_equal


class TestSettingsEqual:
    """Tests for snapshot comparison."""

    def test_reflexive(self, valid_settings):
        assert settings_equal(valid_settings, valid_settings)
        assert settings_equal(valid_settings, valid_settings.copy())

    @pytest.mark.parametrize("value", [0.0, -0.0, 1e-12, 1e308, -3.5])
    def test_reflexive_for_any_number(self, valid_settings, value):
        settings = valid_settings.with_field("voice_temperature", value)
        assert settings_equal(settings, settings)
        assert not is_dirty(settings, settings.copy())

    def test_prompt_whitespace_is_ignored(self):
        a = default_settings().with_field("prompt", "hi ")
        b = default_settings().with_field("prompt", "hi")
        assert settings_equal(a, b)
        assert not is_dirty(a, b)

    def test_prompt_inner_change_counts(self):
        a = default_settings().with_field("prompt", "hello world")
        b = default_settings().with_field("prompt", "hello  world")
        assert not settings_equal(a, b)

    def test_numeric_change_counts(self, valid_settings):
        changed = valid_settings.with_field("volume", 1.15)
        assert not settings_equal(valid_settings, changed)
        assert is_dirty(valid_settings, changed)

    def test_text_change_counts(self, valid_settings):
        assert is_dirty(valid_settings, valid_settings.with_field("language", "de-DE"))
        assert is_dirty(valid_settings, valid_settings.with_field("voice_id", "11labs-Sam"))

    def test_reverting_an_edit_is_clean(self, valid_settings):
        edited = valid_settings.with_field("voice_speed", 1.9)
        reverted = edited.with_field("voice_speed", valid_settings.voice_speed)
        assert not is_dirty(valid_settings, reverted)
