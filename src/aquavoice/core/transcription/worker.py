import time

from PySide6.QtCore import QThread, Signal

from ...utils.logger import get_logger
from ..audio.recorder import AudioClip
from ..errors import TranscriptionError
from .client import TranscriptionClient

logger = get_logger(__name__)


class TranscriptionWorker(QThread):
    """
    Runs one remote transcription off the UI thread.

    Signals:
        transcribed: Emitted with the recognized text
        error: Emitted with a short, user-facing failure message
    """

    transcribed = Signal(str)
    error = Signal(str)

    def __init__(
        self,
        client: TranscriptionClient,
        api_key: str,
        clip: AudioClip,
        parent=None,
    ):
        super().__init__(parent)
        self._client = client
        self._api_key = api_key
        self._clip = clip

    def run(self):
        start_time = time.time()

        try:
            text = self._client.transcribe(self._api_key, self._clip)
        except TranscriptionError as e:
            logger.error(f"Transcription error: {e}")
            self.error.emit(str(e))
            return
        except Exception as e:
            logger.error(f"Transcription failed: {e}", exc_info=True)
            self.error.emit(f"Transcription failed: {e}")
            return

        logger.info(f"Transcription completed in {time.time() - start_time:.2f}s")
        self.transcribed.emit(text)
