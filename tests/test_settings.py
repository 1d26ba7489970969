"""Tests for timer settings.

Covers:
- Settings dataclass defaults and the provider interface (seconds)
- validation of durations and cadence
- JSON load/save, including bad files
- update_setting / reset_settings persistence and telemetry
"""

from __future__ import annotations

import json

import pytest

from rytmo.settings import (
    Settings,
    SettingsError,
    load_settings,
    reset_settings,
    save_settings,
    update_setting,
)
from rytmo.telemetry import RecordingTelemetry
from rytmo.timer.session import Phase


# ═══════════════════════════════════════════════════════════════════════
#  DEFAULTS / PROVIDER INTERFACE
# ═══════════════════════════════════════════════════════════════════════


class TestSettingsDefaults:
    def test_durations(self):
        s = Settings()
        assert s.focus_minutes == 25
        assert s.short_break_minutes == 5
        assert s.long_break_minutes == 15

    def test_sessions_before_long_break(self):
        assert Settings().sessions_before_long_break == 4

    def test_notifications_default(self):
        s = Settings()
        assert s.notifications_enabled is True
        assert s.notification_sound is True


class TestDurationsInSeconds:
    def test_focus(self):
        assert Settings().focus_duration() == 1500
        assert Settings(focus_minutes=50).focus_duration() == 3000

    def test_short_break(self):
        assert Settings().short_break_duration() == 300
        assert Settings(short_break_minutes=10).short_break_duration() == 600

    def test_long_break(self):
        assert Settings().long_break_duration() == 900
        assert Settings(long_break_minutes=30).long_break_duration() == 1800

    @pytest.mark.parametrize("phase, seconds", [
        (Phase.IDLE, 0),
        (Phase.FOCUS, 1500),
        (Phase.SHORT_BREAK, 300),
        (Phase.LONG_BREAK, 900),
    ])
    def test_duration_for(self, phase, seconds):
        assert Settings().duration_for(phase) == seconds

    def test_defaults_match_phase_defaults(self):
        s = Settings()
        for phase in Phase:
            assert s.duration_for(phase) == phase.default_duration


# ═══════════════════════════════════════════════════════════════════════
#  VALIDATION
# ═══════════════════════════════════════════════════════════════════════


class TestValidation:
    def test_defaults_are_valid(self):
        Settings().validate()

    @pytest.mark.parametrize("field, value", [
        ("focus_minutes", 0),
        ("short_break_minutes", -5),
        ("long_break_minutes", 0),
        ("sessions_before_long_break", 0),
        ("focus_minutes", 2.5),
        ("focus_minutes", "25"),
        ("focus_minutes", True),
    ])
    def test_rejects_bad_numbers(self, field, value):
        s = Settings(**{field: value})
        with pytest.raises(SettingsError):
            s.validate()

    def test_rejects_non_bool_flags(self):
        with pytest.raises(SettingsError):
            Settings(notifications_enabled="yes").validate()

    def test_settings_error_is_value_error(self):
        assert issubclass(SettingsError, ValueError)


# ═══════════════════════════════════════════════════════════════════════
#  PERSISTENCE
# ═══════════════════════════════════════════════════════════════════════


class TestSettingsPersistence:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "settings.json"
        save_settings(Settings(focus_minutes=45, notifications_enabled=False), path)
        loaded = load_settings(path)
        assert loaded.focus_minutes == 45
        assert loaded.notifications_enabled is False

    def test_default_path_is_patchable(self, rytmo_home):
        save_settings(Settings(long_break_minutes=20))
        assert (rytmo_home / "settings.json").exists()
        assert load_settings().long_break_minutes == 20

    def test_missing_file_returns_defaults(self, tmp_path):
        assert load_settings(tmp_path / "nonexistent.json") == Settings()

    def test_invalid_json_returns_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("NOT VALID JSON", encoding="utf-8")
        assert load_settings(path) == Settings()

    def test_invalid_values_return_defaults(self, tmp_path, caplog):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"focus_minutes": -1}), encoding="utf-8")
        with caplog.at_level("WARNING", logger="rytmo.settings"):
            assert load_settings(path) == Settings()
        assert "Ignoring unreadable settings" in caplog.text

    def test_non_object_json_returns_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert load_settings(path) == Settings()

    def test_extra_keys_ignored(self, tmp_path):
        path = tmp_path / "settings.json"
        data = {"focus_minutes": 30, "unknown_future_key": True}
        path.write_text(json.dumps(data), encoding="utf-8")
        s = load_settings(path)
        assert s.focus_minutes == 30
        assert not hasattr(s, "unknown_future_key")

    def test_save_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "a" / "b" / "settings.json"
        save_settings(Settings(), path)
        assert json.loads(path.read_text(encoding="utf-8"))["focus_minutes"] == 25


# ═══════════════════════════════════════════════════════════════════════
#  UPDATE / RESET
# ═══════════════════════════════════════════════════════════════════════


class TestUpdateSetting:
    def test_applies_and_persists(self, tmp_path):
        path = tmp_path / "settings.json"
        s = Settings()
        update_setting(s, "focus_minutes", 45, path=path)
        assert s.focus_minutes == 45
        assert load_settings(path).focus_minutes == 45

    def test_tracks_change(self, tmp_path):
        telemetry = RecordingTelemetry()
        update_setting(
            Settings(), "sessions_before_long_break", 6,
            telemetry=telemetry, path=tmp_path / "s.json",
        )
        assert telemetry.events == [
            ("setting_changed", {"setting_name": "sessions_before_long_break", "new_value": "6"}),
        ]

    def test_unknown_name(self, tmp_path):
        with pytest.raises(SettingsError):
            update_setting(Settings(), "volume", 3, path=tmp_path / "s.json")

    def test_invalid_value_is_rolled_back(self, tmp_path):
        path = tmp_path / "s.json"
        telemetry = RecordingTelemetry()
        s = Settings()
        with pytest.raises(SettingsError):
            update_setting(s, "short_break_minutes", 0, telemetry=telemetry, path=path)
        assert s.short_break_minutes == 5
        assert not path.exists()
        assert telemetry.events == []


class TestResetSettings:
    def test_restores_defaults(self, tmp_path):
        path = tmp_path / "s.json"
        s = Settings(
            focus_minutes=50,
            short_break_minutes=10,
            long_break_minutes=30,
            sessions_before_long_break=6,
            notifications_enabled=False,
        )
        telemetry = RecordingTelemetry()
        reset_settings(s, telemetry=telemetry, path=path)
        assert s == Settings()
        assert load_settings(path) == Settings()
        assert telemetry.names() == ["settings_reset_to_defaults"]

    def test_reset_to_defaults_keeps_identity(self):
        s = Settings(focus_minutes=1)
        same = s
        s.reset_to_defaults()
        assert same is s
        assert s.focus_minutes == 25
