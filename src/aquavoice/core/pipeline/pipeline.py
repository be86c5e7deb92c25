"""
Record -> transcribe -> paste sequencing for one hotkey press/release cycle.

The pipeline never keeps its own "is recording" flag: whether a new
recording may start is read from the StatusReporter's current state.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from ...utils.logger import get_logger
from ..audio.recorder import AudioClip, AudioRecorder
from ..errors import AudioCaptureError, AutomationError
from ..output.text_output import PasteDispatcher
from ..settings.config import ERROR_RESET_MS, PREVIEW_LENGTH, SUCCESS_RESET_MS
from ..transcription.client import TranscriptionClient
from ..transcription.worker import TranscriptionWorker
from .status import PipelineState, StatusReporter

logger = get_logger(__name__)


@dataclass
class PipelineContext:
    """Everything one recording carries from release to paste."""

    api_key: str
    clip: AudioClip
    text: Optional[str] = None


def make_preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    text = " ".join(text.split())
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "…"


class DictationPipeline(QObject):
    """
    Drives recorder, transcription client and paste dispatcher.

    Signals:
        transcription_completed: Emitted with the text after it was pasted
    """

    transcription_completed = Signal(str)

    def __init__(
        self,
        recorder: AudioRecorder,
        client: TranscriptionClient,
        dispatcher: PasteDispatcher,
        reporter: StatusReporter,
        api_key_provider: Callable[[], str],
        run_in_background: bool = True,
        success_reset_ms: int = SUCCESS_RESET_MS,
        error_reset_ms: int = ERROR_RESET_MS,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)

        self._recorder = recorder
        self._client = client
        self._dispatcher = dispatcher
        self._reporter = reporter
        self._api_key_provider = api_key_provider
        self._run_in_background = run_in_background
        self._success_reset_ms = success_reset_ms
        self._error_reset_ms = error_reset_ms

        self._worker: Optional[TranscriptionWorker] = None
        self._context: Optional[PipelineContext] = None

    @property
    def client(self) -> TranscriptionClient:
        return self._client

    @client.setter
    def client(self, client: TranscriptionClient) -> None:
        self._client = client

    @property
    def recorder(self) -> AudioRecorder:
        return self._recorder

    def start_recording(self) -> bool:
        """Hotkey pressed. Returns False if the press was ignored or failed."""
        state = self._reporter.state
        if state.is_busy:
            logger.debug(f"Ignoring press while {state.value}")
            return False

        logger.debug("Starting audio recording")
        try:
            self._recorder.start()
        except AudioCaptureError as e:
            logger.error(f"Recording error: {e}")
            self._fail(str(e))
            return False

        self._reporter.set_status(PipelineState.RECORDING)
        logger.info("Recording started")
        return True

    def stop_and_transcribe(self) -> None:
        """Hotkey released. Only acts on a recording this pipeline started."""
        if self._reporter.state is not PipelineState.RECORDING:
            logger.debug(f"Ignoring release while {self._reporter.state.value}")
            return

        logger.debug("Stopping audio recording")
        clip = self._recorder.stop()

        if clip.is_empty:
            logger.warning("No audio data captured")
            self._reporter.set_status(PipelineState.IDLE)
            return

        self._reporter.set_status(PipelineState.PROCESSING)
        logger.info(
            f"Captured {clip.duration_seconds:.2f}s of audio ({len(clip.data)} bytes)"
        )
        self._context = PipelineContext(api_key=self._api_key_provider(), clip=clip)

        self._reporter.set_status(PipelineState.TRANSCRIBING)
        self._start_transcription(self._context)

    def _start_transcription(self, context: PipelineContext) -> None:
        worker = TranscriptionWorker(
            client=self._client,
            api_key=context.api_key,
            clip=context.clip,
            parent=self,
        )
        worker.transcribed.connect(self._on_transcribed)
        worker.error.connect(self._on_transcription_error)
        self._worker = worker

        if self._run_in_background:
            worker.finished.connect(self._on_worker_finished)
            worker.start()
        else:
            worker.run()
            self._on_worker_finished(worker)

    def _on_transcribed(self, text: str) -> None:
        context = self._context
        if context is not None:
            context.text = text

        try:
            self._dispatcher.deliver(text)
        except AutomationError as e:
            logger.error(f"Paste failed: {e}")
            self._fail(f"Paste failed: {e}")
            self._finish()
            return

        self._reporter.set_status(
            PipelineState.SUCCESS,
            make_preview(text),
            reset_after_ms=self._success_reset_ms,
        )
        self._finish()
        self.transcription_completed.emit(text)

    def _on_transcription_error(self, message: str) -> None:
        self._fail(message)
        self._finish()

    def _fail(self, message: str) -> None:
        self._reporter.set_status(
            PipelineState.ERROR, message, reset_after_ms=self._error_reset_ms
        )

    def _finish(self) -> None:
        self._context = None

    def _on_worker_finished(self, worker: Optional[TranscriptionWorker] = None) -> None:
        # Queued from a worker thread; only the sender is known to be done
        worker = worker or self.sender()
        if worker is None:
            return
        if self._worker is worker:
            self._worker = None
        worker.deleteLater()

    def shutdown(self, timeout_ms: int = 5000) -> None:
        """Wait for an in-flight transcription thread before quitting."""
        worker = self._worker
        if worker is not None and worker.isRunning():
            logger.info("Waiting for transcription to finish")
            worker.wait(timeout_ms)
