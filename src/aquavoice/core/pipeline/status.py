"""
Pipeline status: the single current state shown by the tray and window.

Observers subscribe to ``StatusReporter.status_changed``. Timed returns to
idle are single-shot timers owned by the reporter; any new transition
cancels a pending one.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from ...utils.logger import get_logger

logger = get_logger(__name__)


class PipelineState(Enum):
    IDLE = "idle"
    RECORDING = "recording"
    PROCESSING = "processing"
    TRANSCRIBING = "transcribing"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_busy(self) -> bool:
        """True while a clip is being recorded or is in flight."""
        return self in (
            PipelineState.RECORDING,
            PipelineState.PROCESSING,
            PipelineState.TRANSCRIBING,
        )


_DEFAULT_TEXTS = {
    PipelineState.IDLE: "Ready - hold the shortcut to dictate",
    PipelineState.RECORDING: "🎙️ Recording...",
    PipelineState.PROCESSING: "⏳ Processing...",
    PipelineState.TRANSCRIBING: "🔄 Transcribing...",
    PipelineState.SUCCESS: "✅ Done",
    PipelineState.ERROR: "❌ Error",
}


@dataclass(frozen=True)
class StatusSnapshot:
    state: PipelineState
    message: str = ""

    def display_text(self) -> str:
        if self.message and self.state in (PipelineState.SUCCESS, PipelineState.ERROR):
            return self.message
        return _DEFAULT_TEXTS[self.state]


class StatusReporter(QObject):
    """
    Holds the current pipeline status.

    Signals:
        status_changed: Emitted with the new StatusSnapshot on every update
    """

    status_changed = Signal(object)

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)

        self._status = StatusSnapshot(PipelineState.IDLE)

        self._reset_timer = QTimer(self)
        self._reset_timer.setSingleShot(True)
        self._reset_timer.timeout.connect(self._on_reset_timeout)

    @property
    def status(self) -> StatusSnapshot:
        return self._status

    @property
    def state(self) -> PipelineState:
        return self._status.state

    @property
    def has_pending_reset(self) -> bool:
        return self._reset_timer.isActive()

    def set_status(
        self,
        state: PipelineState,
        message: str = "",
        reset_after_ms: Optional[int] = None,
    ) -> None:
        """
        Replace the current status.

        Any pending return to idle is cancelled. If ``reset_after_ms`` is
        given, a new one is scheduled.
        """
        self._reset_timer.stop()

        self._status = StatusSnapshot(state, message)
        logger.debug(
            f"Status changed: {state.value}" + (f" ({message})" if message else "")
        )
        self.status_changed.emit(self._status)

        if reset_after_ms is not None:
            self._reset_timer.start(reset_after_ms)

    def cancel_pending_reset(self) -> None:
        self._reset_timer.stop()

    def _on_reset_timeout(self) -> None:
        self.set_status(PipelineState.IDLE)
