"""Notification sounds, synthesized with numpy and played with QSoundEffect.

Both sounds are rendered to WAV on first use and cached in the app-support
directory.

Sound names
-----------
- ``focus_start``  three rising plucks, played when focus begins
- ``break_start``  soft bell, played when either break begins

Whether a sound plays is decided per notification (``request.sound``);
the manager itself has no on/off switch.
"""

from __future__ import annotations

import io
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..paths import SOUNDS_DIR


SOUND_FOCUS_START = "focus_start"
SOUND_BREAK_START = "break_start"
SOUND_NAMES = (SOUND_FOCUS_START, SOUND_BREAK_START)

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════════


def _pluck(freq: float, seconds: float, *, overtone: float = 0.0, ring: float = 6.0) -> np.ndarray:
    """Sine tone with a 5 ms fade-in and an exponential tail.

    *overtone* mixes in the octave; larger *ring* dies away faster.
    """
    n = int(SAMPLE_RATE * seconds)
    t = np.arange(n) / SAMPLE_RATE
    tone = np.sin(2 * np.pi * freq * t) + overtone * np.sin(4 * np.pi * freq * t)
    shape = np.exp(-ring * t)
    fade_in = min(n, int(SAMPLE_RATE * 0.005))
    shape[:fade_in] *= np.linspace(0.0, 1.0, fade_in)
    shape[-1] = 0.0
    return tone * shape / (1.0 + overtone)


def _wav(samples: np.ndarray, gain: float) -> bytes:
    pcm = (np.clip(samples * gain, -1.0, 1.0) * 32767).astype("<i2")
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


def _generate_focus_start() -> bytes:
    """C5, E5, G5 plucks 150 ms apart."""
    notes = [_pluck(f, 0.15, ring=18.0) for f in (523.25, 659.25, 783.99)]
    return _wav(np.concatenate(notes), gain=0.6)


def _generate_break_start() -> bytes:
    """One-second A4 bell."""
    return _wav(_pluck(440.0, 1.0, overtone=0.25, ring=4.0), gain=0.45)


_GENERATORS = {
    SOUND_FOCUS_START: _generate_focus_start,
    SOUND_BREAK_START: _generate_break_start,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Plays the cached notification sounds by name."""

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
        volume: float = 0.7,
    ) -> None:
        super().__init__(parent)
        sounds_dir = sounds_dir or SOUNDS_DIR
        sounds_dir.mkdir(parents=True, exist_ok=True)

        self._effects: dict[str, QSoundEffect] = {}
        for name, generate in _GENERATORS.items():
            path = sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(generate())
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(volume)
            self._effects[name] = effect

    def play(self, name: str) -> None:
        """Unknown names are ignored."""
        effect = self._effects.get(name)
        if effect is not None:
            effect.play()
