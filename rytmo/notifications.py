"""Phase-change notifications.

``TimerEngine`` asks a ``NotificationSink`` to show one message each time
a phase completes and the next one begins.  Delivery is immediate and
fire-and-forget: the engine never hears back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from PyQt6.QtWidgets import QSystemTrayIcon

from .audio.sounds import SOUND_BREAK_START, SOUND_FOCUS_START, SoundManager
from .timer.session import Phase


@dataclass(frozen=True)
class NotificationRequest:
    title: str
    body: str
    sound: Optional[str] = None


class NotificationSink(Protocol):
    def notify(self, request: NotificationRequest) -> None: ...


_TITLES: dict[Phase, str] = {
    Phase.FOCUS: "Focus Time",
    Phase.SHORT_BREAK: "Short Break",
    Phase.LONG_BREAK: "Long Break",
}

_BODIES: dict[Phase, str] = {
    Phase.FOCUS: "Focus time started ({minutes} min)",
    Phase.SHORT_BREAK: "It's time for a short break ({minutes} min)",
    Phase.LONG_BREAK: "It's time for a long break ({minutes} min)",
}


def notification_for(
    phase: Phase,
    total_duration: float,
    *,
    with_sound: bool = True,
) -> Optional[NotificationRequest]:
    """Message announcing that *phase* has begun, or None for IDLE."""
    if phase == Phase.IDLE:
        return None
    minutes = int(total_duration // 60)
    sound = None
    if with_sound:
        sound = SOUND_BREAK_START if phase.is_break else SOUND_FOCUS_START
    return NotificationRequest(
        title=_TITLES[phase],
        body=_BODIES[phase].format(minutes=minutes),
        sound=sound,
    )


class TrayNotifier:
    """Shows notifications as system-tray balloons (macOS banners)."""

    def __init__(
        self,
        tray_icon: QSystemTrayIcon,
        sounds: SoundManager | None = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._tray_icon = tray_icon
        self._sounds = sounds
        self._logger = logger or logging.getLogger("rytmo.notifications")

    def notify(self, request: NotificationRequest) -> None:
        self._logger.debug("Notification: %s / %s", request.title, request.body)
        self._tray_icon.showMessage(
            request.title,
            request.body,
            QSystemTrayIcon.MessageIcon.Information,
        )
        if request.sound and self._sounds is not None:
            self._sounds.play(request.sound)
