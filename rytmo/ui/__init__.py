"""UI package."""

from .menubar import MenuBarController, make_tray_icon, status_line
from .settings_dialog import SettingsDialog

__all__ = ["MenuBarController", "SettingsDialog", "make_tray_icon", "status_line"]
