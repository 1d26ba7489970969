"""Allow running Rytmo as a module: python -m rytmo."""

import logging
import os
import platform
import sys

from PyQt6.QtCore import QObject
from PyQt6.QtWidgets import QApplication

from . import __version__
from .audio.sounds import SoundManager
from .notifications import TrayNotifier
from .settings import Settings, load_settings
from .telemetry import EVENT_APP_LAUNCHED, LoggingTelemetry, TelemetrySink
from .timer.engine import TimerEngine
from .ui.menubar import MenuBarController


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    override = os.environ.get("RYTMO_LOG_LEVEL")
    if override:
        level = logging.getLevelName(override.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("rytmo")


def build_app(
    settings: Settings,
    telemetry: TelemetrySink,
    parent: QObject | None = None,
) -> tuple[TimerEngine, MenuBarController]:
    """Wire the engine, tray menu, notifier and sounds together.

    The notification sound is gated per request by
    ``settings.notification_sound``, so edits made at runtime take effect
    at the next phase change.
    """
    sounds = SoundManager(parent=parent)
    engine = TimerEngine(settings, parent=parent, telemetry=telemetry)
    menubar = MenuBarController(engine, parent=parent, telemetry=telemetry)
    engine.set_notifier(TrayNotifier(menubar.tray_icon, sounds))
    return engine, menubar


def main() -> None:
    logger = setup_logging()

    app = QApplication(sys.argv)
    app.setApplicationName("Rytmo")
    app.setOrganizationName("Rytmo")
    app.setQuitOnLastWindowClosed(False)

    settings = load_settings()
    telemetry = LoggingTelemetry()
    _engine, menubar = build_app(settings, telemetry, parent=app)
    menubar.show()

    telemetry.track(EVENT_APP_LAUNCHED, {
        "platform": platform.system(),
        "app_version": __version__,
    })
    logger.info("Rytmo ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
