"""Timer engine for Rytmo.

Drives a ``Session`` through the focus / break cycle with a one-second
``QTimer``.

States
------
(IDLE, stopped)                 Initial state, and the state after reset.
(FOCUS | SHORT_BREAK |
 LONG_BREAK, running)           Counting down.
(FOCUS | SHORT_BREAK |
 LONG_BREAK, stopped)           Paused mid-phase.

Transitions
-----------
start     stopped → running   (IDLE first advances to FOCUS)
pause     running → stopped
skip      any     → next phase, running
reset     any     → (IDLE, stopped)
complete  running → next phase, running

Drift correction
----------------
While running, the session carries ``scheduled_end``, the wall-clock
instant the phase reaches zero.  Every tick recomputes the remaining
time from that deadline instead of decrementing a counter, so late
ticks (app backgrounded, machine asleep) never accumulate error.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..notifications import NotificationSink, notification_for
from ..telemetry import (
    EVENT_TIMER_COMPLETED,
    EVENT_TIMER_PAUSED,
    EVENT_TIMER_SKIPPED,
    EVENT_TIMER_STARTED,
    LoggingTelemetry,
    TelemetrySink,
)
from .session import Phase, Session

if TYPE_CHECKING:
    from ..settings import SettingsProvider


TICK_INTERVAL_MS = 1000


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimerEngine(QObject):
    """Qt-based Pomodoro engine with drift-corrected countdown.

    Signals
    -------
    tick(remaining_seconds: float)
        Emitted after every tick.
    phase_changed(phase: Phase)
        Emitted whenever the session moves to another phase (including
        back to IDLE on reset).
    running_changed(is_running: bool)
        Emitted whenever the clock starts or stops.
    display_changed(text: str)
        Emitted after every display refresh with the menu-bar string.
    phase_completed(phase: Phase)
        Emitted when a phase runs out naturally, before the next begins.
    """

    tick = pyqtSignal(float)
    phase_changed = pyqtSignal(object)
    running_changed = pyqtSignal(bool)
    display_changed = pyqtSignal(str)
    phase_completed = pyqtSignal(object)

    def __init__(
        self,
        settings: SettingsProvider,
        parent: QObject | None = None,
        *,
        notifier: NotificationSink | None = None,
        telemetry: TelemetrySink | None = None,
        clock: Callable[[], datetime] | None = None,
        auto_continue: bool = True,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(parent)

        # ── collaborators ─────────────────────────────────────────────
        self._settings = settings
        self._notifier = notifier
        self._telemetry: TelemetrySink = telemetry or LoggingTelemetry()
        self._clock = clock or utc_now
        self._logger = logger or logging.getLogger("rytmo.timer")

        # ── state ─────────────────────────────────────────────────────
        self._session = Session()
        self._auto_continue = auto_continue
        self._display_text = ""

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def session(self) -> Session:
        return self._session

    @property
    def phase(self) -> Phase:
        return self._session.phase

    @property
    def is_running(self) -> bool:
        return self._session.is_running

    @property
    def remaining_time(self) -> float:
        """Seconds left in the current phase."""
        return self._session.remaining_time

    @property
    def total_duration(self) -> float:
        return self._session.total_duration

    @property
    def completed_focus_count(self) -> int:
        return self._session.completed_focus_count

    @property
    def scheduled_end(self) -> datetime | None:
        return self._session.scheduled_end

    @property
    def progress(self) -> float:
        """0.0 → 1.0 progress through the current phase."""
        return self._session.progress

    @property
    def display_text(self) -> str:
        """Menu-bar string as of the last refresh."""
        return self._display_text

    def formatted_time(self) -> str:
        return self._session.formatted_time()

    @property
    def settings(self) -> SettingsProvider:
        return self._settings

    def set_settings(self, settings: SettingsProvider) -> None:
        """Swap the provider.  Applies from the next phase transition."""
        self._settings = settings

    def set_notifier(self, notifier: NotificationSink | None) -> None:
        self._notifier = notifier

    @property
    def auto_continue(self) -> bool:
        """Whether a completed phase immediately starts the next one."""
        return self._auto_continue

    @auto_continue.setter
    def auto_continue(self, value: bool) -> None:
        self._auto_continue = value

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start or resume the countdown.  IDLE moves to FOCUS first."""
        session = self._session
        if session.is_running:
            return

        if session.phase == Phase.IDLE:
            self._advance()

        session.scheduled_end = self._clock() + timedelta(seconds=session.remaining_time)
        self._set_running(True)
        self._qt_timer.start()

        self._logger.info(
            "Timer started: phase=%s remaining=%.0fs",
            session.phase.value,
            session.remaining_time,
        )
        self._telemetry.track(EVENT_TIMER_STARTED, {
            "session_type": session.phase.display_name,
            "duration_seconds": int(session.total_duration),
        })
        self._refresh_display()

    def pause(self) -> None:
        """Freeze the countdown.  Remaining time is kept."""
        session = self._session
        if not session.is_running:
            return

        self._sync_remaining()
        self._telemetry.track(EVENT_TIMER_PAUSED, {
            "session_type": session.phase.display_name,
            "remaining_seconds": int(session.remaining_time),
        })

        session.scheduled_end = None
        self._set_running(False)
        self._qt_timer.stop()

        self._logger.info(
            "Timer paused: phase=%s remaining=%.0fs",
            session.phase.value,
            session.remaining_time,
        )
        self._refresh_display()

    def skip(self) -> None:
        """Abandon the current phase and run the next one.

        Works from any state; a paused (or idle) timer ends up running.
        """
        session = self._session
        self._sync_remaining()
        self._telemetry.track(EVENT_TIMER_SKIPPED, {
            "session_type": session.phase.display_name,
            "remaining_seconds": int(session.remaining_time),
        })
        skipped = session.phase

        self._qt_timer.stop()
        self._advance()
        session.scheduled_end = None
        self._set_running(False)

        self._logger.info(
            "Timer skipped: phase=%s next=%s",
            skipped.value,
            session.phase.value,
        )
        self.start()

    def reset(self) -> None:
        """Stop and return to a fresh IDLE session."""
        self._qt_timer.stop()
        previous = self._session.phase
        was_running = self._session.is_running

        self._session.reset()

        if was_running:
            self.running_changed.emit(False)
        if previous != Phase.IDLE:
            self.phase_changed.emit(Phase.IDLE)
        self._logger.info("Timer reset")
        self._refresh_display()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        session = self._session
        if session.scheduled_end is not None:
            remaining = (session.scheduled_end - self._clock()).total_seconds()
            session.remaining_time = max(0.0, remaining)
        else:
            session.remaining_time = max(0.0, session.remaining_time - 1)

        self.tick.emit(session.remaining_time)

        if session.remaining_time <= 0:
            self._finish_phase()

        self._refresh_display()

    def _finish_phase(self) -> None:
        session = self._session
        finished = session.phase
        self._telemetry.track(EVENT_TIMER_COMPLETED, {
            "session_type": finished.display_name,
            "duration_seconds": int(session.total_duration),
        })

        self._qt_timer.stop()
        self._set_running(False)
        session.scheduled_end = None

        self._advance()
        self._logger.info(
            "Phase completed: phase=%s next=%s completed_focus=%d",
            finished.value,
            session.phase.value,
            session.completed_focus_count,
        )
        self.phase_completed.emit(finished)
        self._notify_phase_started()

        if self._auto_continue:
            self.start()

    def _sync_remaining(self) -> None:
        """Bring ``remaining_time`` up to date with the deadline."""
        session = self._session
        if session.scheduled_end is None:
            return
        remaining = (session.scheduled_end - self._clock()).total_seconds()
        session.remaining_time = max(0.0, remaining)

    def _advance(self) -> None:
        session = self._session
        previous = session.phase
        session.advance_phase(self._settings)
        if session.phase != previous:
            self.phase_changed.emit(session.phase)

    def _set_running(self, running: bool) -> None:
        if self._session.is_running == running:
            return
        self._session.is_running = running
        self.running_changed.emit(running)

    def _notify_phase_started(self) -> None:
        if self._notifier is None or not self._settings.notifications_enabled:
            return
        request = notification_for(
            self._session.phase,
            self._session.total_duration,
            with_sound=self._settings.notification_sound,
        )
        if request is not None:
            self._notifier.notify(request)

    def _refresh_display(self) -> None:
        self._display_text = self._session.display_text()
        self.display_changed.emit(self._display_text)
