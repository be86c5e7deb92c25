from .client import TRANSCRIPTION_PROMPT, TranscriptionClient
from .worker import TranscriptionWorker

__all__ = ["TRANSCRIPTION_PROMPT", "TranscriptionClient", "TranscriptionWorker"]
