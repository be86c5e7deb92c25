"""
System tray icon and menu using PySide6.

Provides a system tray icon that follows the pipeline status, animating
while a clip is being recorded or processed.
"""

import math
from typing import Dict, Optional

from PySide6.QtCore import QObject, QPointF, QRectF, Qt, QTimer, Signal
from PySide6.QtGui import QAction, QBrush, QColor, QIcon, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QMenu, QSystemTrayIcon

from .. import __app_name__
from ..core.pipeline.status import PipelineState, StatusSnapshot

ICON_SIZE = 32
ANIMATION_FRAMES = 8
ANIMATION_INTERVAL_MS = 125  # 8 FPS

STATUS_COLORS: Dict[PipelineState, str] = {
    PipelineState.IDLE: "#4CAF50",
    PipelineState.RECORDING: "#FF3232",
    PipelineState.PROCESSING: "#6496FF",
    PipelineState.TRANSCRIBING: "#64C864",
    PipelineState.SUCCESS: "#4CAF50",
    PipelineState.ERROR: "#F44336",
}

STATUS_TOOLTIPS: Dict[PipelineState, str] = {
    PipelineState.IDLE: "Ready",
    PipelineState.RECORDING: "Recording...",
    PipelineState.PROCESSING: "Processing...",
    PipelineState.TRANSCRIBING: "Transcribing...",
    PipelineState.SUCCESS: "Done",
    PipelineState.ERROR: "Error",
}


def render_status_icon(state: PipelineState, frame: int = 0) -> QPixmap:
    """Draw the tray icon for ``state`` at animation ``frame``."""
    pixmap = QPixmap(ICON_SIZE, ICON_SIZE)
    pixmap.fill(Qt.transparent)

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing)

    color = QColor(STATUS_COLORS.get(state, "#808080"))
    center = ICON_SIZE / 2.0
    phase = frame / float(ANIMATION_FRAMES)

    if state is PipelineState.RECORDING:
        # Pulsing circle, 0.6 to 1.0 of full size
        radius = center * (0.6 + phase * 0.4)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(color))
        painter.drawEllipse(QPointF(center, center), radius, radius)
        painter.setBrush(QBrush(color.darker(140)))
        painter.drawEllipse(QPointF(center, center), radius * 0.6, radius * 0.6)

    elif state is PipelineState.PROCESSING:
        painter.setPen(QPen(color, 3))
        angle = phase * math.pi * 2.0
        for i in range(3):
            offset = i * math.pi * 2.0 / 3.0 + angle
            painter.drawLine(
                QPointF(
                    center + center * 0.6 * math.cos(offset),
                    center + center * 0.6 * math.sin(offset),
                ),
                QPointF(
                    center + center * 0.9 * math.cos(offset),
                    center + center * 0.9 * math.sin(offset),
                ),
            )

    elif state is PipelineState.TRANSCRIBING:
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(color))
        bar_width, spacing, bars = 3.0, 5.0, 5
        left = (ICON_SIZE - bars * (bar_width + spacing)) / 2.0
        for i in range(bars):
            wave = math.sin((phase + i * 0.5) * math.pi * 2.0) * 0.5 + 0.5
            height = center * 0.4 + center * 0.5 * wave
            painter.drawRect(
                QRectF(
                    left + i * (bar_width + spacing),
                    center - height / 2.0,
                    bar_width,
                    height,
                )
            )

    else:
        margin = 3
        painter.setBrush(QBrush(color))
        painter.setPen(QPen(color.darker(120), 1))
        painter.drawEllipse(
            margin, margin, ICON_SIZE - 2 * margin, ICON_SIZE - 2 * margin
        )

        if state is PipelineState.ERROR:
            painter.setPen(QPen(QColor("#FFFFFF"), 3))
            inner = 10
            painter.drawLine(inner, inner, ICON_SIZE - inner, ICON_SIZE - inner)
            painter.drawLine(ICON_SIZE - inner, inner, inner, ICON_SIZE - inner)

    painter.end()
    return pixmap


class SystemTray(QObject):
    """
    System tray icon with context menu.

    Signals:
        settings_requested: Emitted when user clicks "Settings"
        quit_requested: Emitted when user clicks "Quit"
    """

    settings_requested = Signal()
    quit_requested = Signal()

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)

        self._state = PipelineState.IDLE
        self._frame = 0
        self._tray_icon: Optional[QSystemTrayIcon] = None
        self._menu: Optional[QMenu] = None

        self._animation_timer = QTimer(self)
        self._animation_timer.setInterval(ANIMATION_INTERVAL_MS)
        self._animation_timer.timeout.connect(self._next_frame)

        self._setup_tray()

    def _setup_tray(self) -> None:
        self._tray_icon = QSystemTrayIcon(self)

        self._menu = QMenu()

        self._status_action = QAction("Ready", self._menu)
        self._status_action.setEnabled(False)
        self._menu.addAction(self._status_action)

        self._menu.addSeparator()

        settings_action = QAction("Settings...", self._menu)
        settings_action.triggered.connect(self.settings_requested.emit)
        self._menu.addAction(settings_action)

        self._menu.addSeparator()

        quit_action = QAction("Quit", self._menu)
        quit_action.triggered.connect(self.quit_requested.emit)
        self._menu.addAction(quit_action)

        self._tray_icon.setContextMenu(self._menu)

        self._update_icon()
        self._tray_icon.show()

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def is_animating(self) -> bool:
        return self._animation_timer.isActive()

    def show_status(self, status: StatusSnapshot) -> None:
        self._state = status.state
        self._frame = 0

        if status.state.is_busy:
            self._animation_timer.start()
        else:
            self._animation_timer.stop()

        self._status_action.setText(status.display_text())
        self._update_icon()

    def _next_frame(self) -> None:
        self._frame = (self._frame + 1) % ANIMATION_FRAMES
        self._update_icon()

    def _update_icon(self) -> None:
        if self._tray_icon:
            self._tray_icon.setIcon(QIcon(render_status_icon(self._state, self._frame)))
            self._tray_icon.setToolTip(
                f"{__app_name__} - {STATUS_TOOLTIPS.get(self._state, 'Ready')}"
            )

    def hide(self) -> None:
        self._animation_timer.stop()
        if self._tray_icon:
            self._tray_icon.hide()
