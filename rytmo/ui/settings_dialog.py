"""Settings dialog for Rytmo.

Timer durations, the long-break cadence and notification preferences.
Every edit goes through ``update_setting`` so it is validated, saved to
disk and reported as ``setting_changed`` straight away.  Running phases
keep their length; new values apply from the next phase.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QCheckBox, QPushButton,
    QFrame, QWidget,
)

from ..settings import Settings, reset_settings, update_setting
from ..telemetry import TelemetrySink


class SettingsDialog(QDialog):
    """Modal dialog for all timer preferences."""

    # name of the field that changed, or "" after a reset
    settings_changed = pyqtSignal(str)

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        telemetry: TelemetrySink | None = None,
        path: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Rytmo Settings")
        self.setMinimumWidth(360)
        self.setModal(True)

        self._settings = settings
        self._telemetry = telemetry
        self._path = path
        self._populating = False

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        # ── Focus time ───────────────────────────────────────────────
        root.addWidget(self._section_label("Focus Time"))
        timer_form = QFormLayout()
        timer_form.setContentsMargins(0, 0, 0, 0)
        timer_form.setHorizontalSpacing(20)
        timer_form.setVerticalSpacing(10)

        self._focus_spin = self._minutes_spin(1, 120, "focus_minutes")
        timer_form.addRow("Focus duration:", self._focus_spin)

        self._short_spin = self._minutes_spin(1, 30, "short_break_minutes")
        timer_form.addRow("Short break:", self._short_spin)

        self._long_spin = self._minutes_spin(1, 60, "long_break_minutes")
        timer_form.addRow("Long break:", self._long_spin)

        self._cadence_spin = QSpinBox()
        self._cadence_spin.setRange(1, 12)
        self._cadence_spin.setSuffix(" sessions")
        self._cadence_spin.valueChanged.connect(
            partial(self._on_changed, "sessions_before_long_break")
        )
        timer_form.addRow("Long break after:", self._cadence_spin)

        root.addLayout(timer_form)
        root.addWidget(self._separator())

        # ── Notifications ────────────────────────────────────────────
        root.addWidget(self._section_label("Notifications"))
        notif_form = QFormLayout()
        notif_form.setContentsMargins(0, 0, 0, 0)

        self._notif_cb = QCheckBox("Notify when a phase starts")
        self._notif_cb.toggled.connect(partial(self._on_changed, "notifications_enabled"))
        notif_form.addRow("", self._notif_cb)

        self._sound_cb = QCheckBox("Play a sound")
        self._sound_cb.toggled.connect(partial(self._on_changed, "notification_sound"))
        notif_form.addRow("", self._sound_cb)

        root.addLayout(notif_form)

        # ── buttons ──────────────────────────────────────────────────
        root.addStretch()
        btn_row = QHBoxLayout()
        self._reset_btn = QPushButton("Reset to Defaults")
        self._reset_btn.clicked.connect(self.reset_to_defaults)
        btn_row.addWidget(self._reset_btn)
        btn_row.addStretch()
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    # ── helpers ──────────────────────────────────────────────────────

    def _minutes_spin(self, low: int, high: int, field: str) -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(low, high)
        spin.setSuffix(" min")
        spin.valueChanged.connect(partial(self._on_changed, field))
        return spin

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        return lbl

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        return line

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE FROM SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        s = self._settings
        self._populating = True
        try:
            self._focus_spin.setValue(s.focus_minutes)
            self._short_spin.setValue(s.short_break_minutes)
            self._long_spin.setValue(s.long_break_minutes)
            self._cadence_spin.setValue(s.sessions_before_long_break)
            self._notif_cb.setChecked(s.notifications_enabled)
            self._sound_cb.setChecked(s.notification_sound)
        finally:
            self._populating = False
        self._sound_cb.setEnabled(s.notifications_enabled)

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS — save immediately
    # ══════════════════════════════════════════════════════════════════

    def _on_changed(self, field: str, value: int | bool) -> None:
        if self._populating or getattr(self._settings, field) == value:
            return
        update_setting(
            self._settings, field, value,
            telemetry=self._telemetry, path=self._path,
        )
        if field == "notifications_enabled":
            self._sound_cb.setEnabled(value)
        self.settings_changed.emit(field)

    def reset_to_defaults(self) -> None:
        reset_settings(self._settings, telemetry=self._telemetry, path=self._path)
        self._populate()
        self.settings_changed.emit("")

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> Settings:
        return self._settings
