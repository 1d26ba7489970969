"""Shared pytest fixtures for Rytmo tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from rytmo.settings import Settings
from rytmo.telemetry import RecordingTelemetry
from rytmo.timer.engine import TimerEngine

from helpers import FakeClock, RecordingNotifier


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def rytmo_home(tmp_path, monkeypatch):
    """Keep settings and sound files out of the real app-support dir."""
    monkeypatch.setattr("rytmo.settings.SETTINGS_PATH", tmp_path / "settings.json")
    monkeypatch.setattr("rytmo.audio.sounds.SOUNDS_DIR", tmp_path / "sounds")
    yield tmp_path


@pytest.fixture
def settings():
    """Default 25 / 5 / 15 minutes, long break every 4 focus phases."""
    return Settings()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def telemetry():
    return RecordingTelemetry()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def engine(qapp, settings, clock, telemetry, notifier):
    """Fresh TimerEngine on a fake clock with recording sinks."""
    return TimerEngine(
        settings,
        parent=None,
        notifier=notifier,
        telemetry=telemetry,
        clock=clock,
    )


@pytest.fixture
def engine_manual(qapp, settings, clock, telemetry, notifier):
    """Fresh TimerEngine that stops after each completed phase."""
    return TimerEngine(
        settings,
        parent=None,
        notifier=notifier,
        telemetry=telemetry,
        clock=clock,
        auto_continue=False,
    )
