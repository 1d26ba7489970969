"""Where Rytmo keeps its files.

``RYTMO_HOME`` overrides the default macOS app-support directory.
"""

import os
from pathlib import Path


def app_support_dir() -> Path:
    override = os.environ.get("RYTMO_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / "Library" / "Application Support" / "Rytmo"


APP_SUPPORT_DIR = app_support_dir()
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"
