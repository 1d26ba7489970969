"""Audio package."""

from .sounds import SoundManager, SOUND_NAMES, SOUND_FOCUS_START, SOUND_BREAK_START

__all__ = ["SoundManager", "SOUND_NAMES", "SOUND_FOCUS_START", "SOUND_BREAK_START"]
