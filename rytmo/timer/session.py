"""Pomodoro session value for Rytmo.

Phases
------
IDLE          Nothing scheduled yet (initial state, and after reset).
FOCUS         Work interval.
SHORT_BREAK   Break between focus intervals.
LONG_BREAK    Break after ``sessions_before_long_break`` focus intervals.

Cycle
-----
IDLE → FOCUS → SHORT_BREAK → FOCUS → … → FOCUS → LONG_BREAK → FOCUS → …

The session only holds data.  ``TimerEngine`` owns it and is the only
thing that mutates it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..settings import SettingsProvider


# ── phases ────────────────────────────────────────────────────────────────


class Phase(Enum):
    IDLE = "idle"
    FOCUS = "focus"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def default_duration(self) -> float:
        """Duration in seconds when no settings override it."""
        return DEFAULT_DURATIONS[self]

    @property
    def is_break(self) -> bool:
        return self in (Phase.SHORT_BREAK, Phase.LONG_BREAK)


_DISPLAY_NAMES: dict[Phase, str] = {
    Phase.IDLE: "Idle",
    Phase.FOCUS: "Focus",
    Phase.SHORT_BREAK: "Short Break",
    Phase.LONG_BREAK: "Long Break",
}

DEFAULT_DURATIONS: dict[Phase, float] = {
    Phase.IDLE: 0.0,
    Phase.FOCUS: 25 * 60.0,
    Phase.SHORT_BREAK: 5 * 60.0,
    Phase.LONG_BREAK: 15 * 60.0,
}


# ── session ───────────────────────────────────────────────────────────────


@dataclass
class Session:
    """Current phase plus its timing fields.

    ``remaining_time`` and ``total_duration`` are seconds.
    ``scheduled_end`` is the wall-clock instant the phase hits zero and
    is only set while the clock is running.
    """

    phase: Phase = Phase.IDLE
    is_running: bool = False
    remaining_time: float = 0.0
    total_duration: float = 0.0
    completed_focus_count: int = 0
    scheduled_end: datetime | None = None

    # ── derived values ────────────────────────────────────────────────

    @property
    def progress(self) -> float:
        """0.0 → 1.0 progress through the current phase."""
        if self.total_duration <= 0:
            return 0.0
        elapsed = self.total_duration - self.remaining_time
        return max(0.0, min(1.0, elapsed / self.total_duration))

    def formatted_time(self) -> str:
        """``MM:SS`` for the remaining time, rounded down to whole seconds."""
        seconds = max(0, math.floor(self.remaining_time))
        minutes, seconds = divmod(seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"

    def display_text(self) -> str:
        """Menu-bar string: empty while idle, the countdown otherwise."""
        if self.phase == Phase.IDLE:
            return ""
        return self.formatted_time()

    # ── transitions ───────────────────────────────────────────────────

    def next_phase(self, settings: SettingsProvider) -> Phase:
        """The phase ``advance_phase`` would move to (no mutation)."""
        if self.phase == Phase.FOCUS:
            if self.completed_focus_count + 1 >= settings.sessions_before_long_break:
                return Phase.LONG_BREAK
            return Phase.SHORT_BREAK
        return Phase.FOCUS

    def advance_phase(self, settings: SettingsProvider) -> None:
        """Move to the next phase and load its duration from *settings*."""
        if self.phase == Phase.IDLE:
            self.phase = Phase.FOCUS
            self.completed_focus_count = 0
        elif self.phase == Phase.FOCUS:
            self.completed_focus_count += 1
            if self.completed_focus_count >= settings.sessions_before_long_break:
                self.phase = Phase.LONG_BREAK
                self.completed_focus_count = 0
            else:
                self.phase = Phase.SHORT_BREAK
        else:
            self.phase = Phase.FOCUS

        duration = float(settings.duration_for(self.phase))
        self.total_duration = duration
        self.remaining_time = duration

    def reset(self) -> None:
        """Back to a fresh IDLE session."""
        self.phase = Phase.IDLE
        self.is_running = False
        self.remaining_time = 0.0
        self.total_duration = 0.0
        self.completed_focus_count = 0
        self.scheduled_end = None
