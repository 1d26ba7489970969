"""Timer package."""

from .engine import TimerEngine, TICK_INTERVAL_MS, utc_now
from .session import Session, Phase, DEFAULT_DURATIONS

__all__ = [
    "TimerEngine",
    "TICK_INTERVAL_MS",
    "utc_now",
    "Session",
    "Phase",
    "DEFAULT_DURATIONS",
]
