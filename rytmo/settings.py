"""Timer settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Rytmo/settings.json

Set ``RYTMO_HOME`` to use another directory.

Usage::

    settings = load_settings()
    update_setting(settings, "focus_minutes", 50, telemetry=telemetry)

The engine reads durations only when a phase begins, so edits made while
a phase is running apply from the next phase on.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Protocol

from .paths import SETTINGS_PATH
from .telemetry import (
    EVENT_SETTING_CHANGED,
    EVENT_SETTINGS_RESET,
    TelemetrySink,
)
from .timer.session import Phase

logger = logging.getLogger("rytmo.settings")


class SettingsError(ValueError):
    """Raised for unknown setting names and out-of-range values."""


class SettingsProvider(Protocol):
    """What ``TimerEngine`` needs from its settings source."""

    sessions_before_long_break: int
    notifications_enabled: bool
    notification_sound: bool

    def focus_duration(self) -> float: ...

    def short_break_duration(self) -> float: ...

    def long_break_duration(self) -> float: ...

    def duration_for(self, phase: Phase) -> float: ...


@dataclass
class Settings:
    """All user-configurable timer preferences."""

    # ── durations (minutes) ───────────────────────────────────────────
    focus_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 15
    sessions_before_long_break: int = 4

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True
    notification_sound: bool = True

    # ── provider interface (seconds) ──────────────────────────────────

    def focus_duration(self) -> float:
        return float(self.focus_minutes * 60)

    def short_break_duration(self) -> float:
        return float(self.short_break_minutes * 60)

    def long_break_duration(self) -> float:
        return float(self.long_break_minutes * 60)

    def duration_for(self, phase: Phase) -> float:
        if phase == Phase.FOCUS:
            return self.focus_duration()
        if phase == Phase.SHORT_BREAK:
            return self.short_break_duration()
        if phase == Phase.LONG_BREAK:
            return self.long_break_duration()
        return 0.0

    # ── helpers ───────────────────────────────────────────────────────

    def validate(self) -> None:
        """Raise ``SettingsError`` unless every duration and the cadence
        are positive integers."""
        for name in _POSITIVE_INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise SettingsError(f"{name} must be a positive integer, got {value!r}")
        for name in _BOOL_FIELDS:
            if not isinstance(getattr(self, name), bool):
                raise SettingsError(f"{name} must be true or false")

    def reset_to_defaults(self) -> None:
        defaults = Settings()
        for f in fields(self):
            setattr(self, f.name, getattr(defaults, f.name))


_POSITIVE_INT_FIELDS = (
    "focus_minutes",
    "short_break_minutes",
    "long_break_minutes",
    "sessions_before_long_break",
)
_BOOL_FIELDS = ("notifications_enabled", "notification_sound")


# ── persistence ───────────────────────────────────────────────────────────


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = path or SETTINGS_PATH
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        settings = Settings(**filtered)
        settings.validate()
    except (OSError, ValueError, TypeError, AttributeError) as error:
        logger.warning("Ignoring unreadable settings at %s: %s", path, error)
        return Settings()
    return settings


def save_settings(settings: Settings, path: Path | None = None) -> None:
    """Write settings to disk as JSON."""
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )


def update_setting(
    settings: Settings,
    name: str,
    value: Any,
    *,
    telemetry: TelemetrySink | None = None,
    path: Path | None = None,
) -> None:
    """Change one setting, persist it and report the change.

    The old value is restored when the new one does not validate.
    """
    valid_keys = {f.name for f in fields(Settings)}
    if name not in valid_keys:
        raise SettingsError(f"Unknown setting: {name}")

    previous = getattr(settings, name)
    setattr(settings, name, value)
    try:
        settings.validate()
    except SettingsError:
        setattr(settings, name, previous)
        raise

    save_settings(settings, path)
    logger.info("Setting changed: %s=%r", name, value)
    if telemetry is not None:
        telemetry.track(
            EVENT_SETTING_CHANGED,
            {"setting_name": name, "new_value": str(value)},
        )


def reset_settings(
    settings: Settings,
    *,
    telemetry: TelemetrySink | None = None,
    path: Path | None = None,
) -> None:
    """Restore defaults, persist them and report the reset."""
    settings.reset_to_defaults()
    save_settings(settings, path)
    logger.info("Settings reset to defaults")
    if telemetry is not None:
        telemetry.track(EVENT_SETTINGS_RESET, {})
