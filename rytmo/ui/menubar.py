"""Menu-bar (system tray) front end for the timer engine."""

from __future__ import annotations

from PyQt6.QtCore import QObject, Qt
from PyQt6.QtGui import QColor, QIcon, QImage, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

from ..telemetry import TelemetrySink
from ..timer.engine import TimerEngine
from ..timer.session import Phase
from .settings_dialog import SettingsDialog


# ── tray-icon image generation ────────────────────────────────────────────


def make_tray_icon(phase: Phase, running: bool) -> QIcon:
    """32×32 monochrome template icon for the macOS menu bar.

    - IDLE:          thin circle outline
    - FOCUS:         filled circle
    - SHORT/LONG:    circle outline with a centre dot
    - paused phase:  two vertical pause bars
    """
    size = 64  # drawn at 2× for Retina
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(0, 0, 0, 220)  # template image: macOS tints automatically
    cx, cy, r = size // 2, size // 2, size // 2 - 4

    if phase != Phase.IDLE and not running:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        bar_w, bar_h, gap = 8, 28, 6
        y = cy - bar_h // 2
        p.drawRoundedRect(cx - gap - bar_w, y, bar_w, bar_h, 3, 3)
        p.drawRoundedRect(cx + gap, y, bar_w, bar_h, 3, 3)
    elif phase == Phase.FOCUS:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
    else:
        p.setPen(QPen(colour, 4))
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
        if phase.is_break:
            p.setPen(Qt.PenStyle.NoPen)
            p.setBrush(colour)
            dot_r = 6
            p.drawEllipse(cx - dot_r, cy - dot_r, dot_r * 2, dot_r * 2)

    p.end()
    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


def status_line(engine: TimerEngine) -> str:
    """``"Focus 24:59"`` style label; ``"Rytmo — Ready"`` while idle."""
    if engine.phase == Phase.IDLE:
        return "Rytmo — Ready"
    label = engine.phase.display_name
    if not engine.is_running:
        label += " (paused)"
    return f"{label} {engine.display_text}"


class MenuBarController(QObject):
    """Tray icon + context menu showing and driving one ``TimerEngine``."""

    def __init__(
        self,
        engine: TimerEngine,
        parent: QObject | None = None,
        *,
        tray_icon: QSystemTrayIcon | None = None,
        telemetry: TelemetrySink | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._telemetry = telemetry

        self._tray_icon = tray_icon or QSystemTrayIcon(self)
        self._tray_icon.setIcon(make_tray_icon(Phase.IDLE, False))
        self._build_menu()

        engine.display_changed.connect(self._on_display_changed)
        engine.phase_changed.connect(self._refresh)
        engine.running_changed.connect(self._refresh)
        self._refresh()

    @property
    def tray_icon(self) -> QSystemTrayIcon:
        return self._tray_icon

    @property
    def toggle_action_text(self) -> str:
        return self._toggle_action.text()

    @property
    def skip_action_text(self) -> str:
        return self._skip_action.text()

    @property
    def status_text(self) -> str:
        return self._status_action.text()

    def show(self) -> None:
        self._tray_icon.show()

    # ── menu ──────────────────────────────────────────────────────────

    def _build_menu(self) -> None:
        self._menu = QMenu()

        self._status_action = self._menu.addAction("")
        self._status_action.setEnabled(False)
        self._menu.addSeparator()

        self._toggle_action = self._menu.addAction("Start")
        self._toggle_action.triggered.connect(self.toggle)

        self._skip_action = self._menu.addAction("Skip")
        self._skip_action.triggered.connect(self._engine.skip)

        reset_action = self._menu.addAction("Reset")
        reset_action.triggered.connect(self._engine.reset)

        self._menu.addSeparator()

        settings_action = self._menu.addAction("Settings…")
        settings_action.triggered.connect(self.open_settings)

        quit_action = self._menu.addAction("Quit Rytmo")
        quit_action.triggered.connect(self._quit)

        self._tray_icon.setContextMenu(self._menu)

    def toggle(self) -> None:
        """Start when stopped, pause when running."""
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def settings_dialog(self) -> SettingsDialog:
        """Dialog editing the engine's settings, reported to the app's telemetry."""
        dialog = SettingsDialog(self._engine.settings, telemetry=self._telemetry)
        dialog.settings_changed.connect(self._refresh)
        return dialog

    def open_settings(self) -> None:
        self.settings_dialog().exec()

    def _quit(self) -> None:
        self._engine.reset()
        self._tray_icon.hide()
        app = QApplication.instance()
        if app is not None:
            app.quit()

    # ── engine signals ────────────────────────────────────────────────

    def _on_display_changed(self, _text: str) -> None:
        line = status_line(self._engine)
        self._status_action.setText(line)
        self._tray_icon.setToolTip(line)

    def _refresh(self, *_args) -> None:
        engine = self._engine
        self._tray_icon.setIcon(make_tray_icon(engine.phase, engine.is_running))

        if engine.is_running:
            self._toggle_action.setText("Pause")
        elif engine.phase == Phase.IDLE:
            self._toggle_action.setText("Start")
        else:
            self._toggle_action.setText("Resume")

        upcoming = engine.session.next_phase(engine.settings)
        self._skip_action.setText(f"Skip to {upcoming.display_name}")
        self._on_display_changed(engine.display_text)
