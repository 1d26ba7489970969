"""Shared test helpers for Rytmo."""

from datetime import datetime, timedelta, timezone

from rytmo.notifications import NotificationRequest
from rytmo.timer.engine import TimerEngine
from rytmo.timer.session import Phase


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Callable wall clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 5, 9, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingNotifier:
    """Notification sink that keeps every request."""

    def __init__(self):
        self.requests: list[NotificationRequest] = []

    def notify(self, request: NotificationRequest) -> None:
        self.requests.append(request)

    @property
    def last(self):
        return self.requests[-1] if self.requests else None


class StubSettings:
    """Minimal settings provider with durations in seconds."""

    def __init__(
        self,
        focus: float = 25 * 60,
        short_break: float = 5 * 60,
        long_break: float = 15 * 60,
        sessions_before_long_break: int = 4,
        notifications_enabled: bool = True,
        notification_sound: bool = True,
    ):
        self._durations = (focus, short_break, long_break)
        self.sessions_before_long_break = sessions_before_long_break
        self.notifications_enabled = notifications_enabled
        self.notification_sound = notification_sound

    def focus_duration(self) -> float:
        return self._durations[0]

    def short_break_duration(self) -> float:
        return self._durations[1]

    def long_break_duration(self) -> float:
        return self._durations[2]

    def duration_for(self, phase: Phase) -> float:
        return {
            Phase.FOCUS: self._durations[0],
            Phase.SHORT_BREAK: self._durations[1],
            Phase.LONG_BREAK: self._durations[2],
        }.get(phase, 0.0)


def complete_phase(engine: TimerEngine, clock: FakeClock) -> None:
    """Fast-complete the running phase by jumping the clock to its end."""
    clock.advance(engine.remaining_time)
    engine._on_tick()
