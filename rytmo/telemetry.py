"""Fire-and-forget usage events.

The engine and the settings helpers report what the user did through a
``TelemetrySink``.  Nothing waits on or reacts to the outcome.

Events
------
- ``timer_started``    ``session_type``, ``duration_seconds``
- ``timer_paused``     ``session_type``, ``remaining_seconds``
- ``timer_skipped``    ``session_type``, ``remaining_seconds``
- ``timer_completed``  ``session_type``, ``duration_seconds``
- ``setting_changed``  ``setting_name``, ``new_value``
- ``settings_reset_to_defaults``
- ``app_launched``     ``platform``, ``app_version``
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

EVENT_TIMER_STARTED = "timer_started"
EVENT_TIMER_PAUSED = "timer_paused"
EVENT_TIMER_SKIPPED = "timer_skipped"
EVENT_TIMER_COMPLETED = "timer_completed"
EVENT_SETTING_CHANGED = "setting_changed"
EVENT_SETTINGS_RESET = "settings_reset_to_defaults"
EVENT_APP_LAUNCHED = "app_launched"


class TelemetrySink(Protocol):
    def track(self, event_name: str, properties: dict[str, Any]) -> None: ...


class LoggingTelemetry:
    """Writes each event as one INFO record."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("rytmo.telemetry")

    def track(self, event_name: str, properties: dict[str, Any]) -> None:
        if properties:
            details = " ".join(f"{k}={v}" for k, v in sorted(properties.items()))
            self._logger.info("Event %s: %s", event_name, details)
        else:
            self._logger.info("Event %s", event_name)


class RecordingTelemetry:
    """Keeps events in memory, oldest first."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def track(self, event_name: str, properties: dict[str, Any]) -> None:
        self.events.append((event_name, dict(properties)))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    @property
    def last(self) -> tuple[str, dict[str, Any]] | None:
        return self.events[-1] if self.events else None

    def clear(self) -> None:
        self.events.clear()
