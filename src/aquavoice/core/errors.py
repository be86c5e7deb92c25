"""
Error types raised across the dictation pipeline.

Every error is caught where it is produced, turned into an ``error`` status
and never takes the process down.
"""


class AquaVoiceError(Exception):
    """Base class for all application errors."""


class ConfigLoadError(AquaVoiceError):
    """Settings file could not be read; callers fall back to defaults."""


class BindingError(AquaVoiceError):
    """Global hotkey could not be parsed or registered."""


class AudioCaptureError(AquaVoiceError):
    """Microphone stream could not be opened."""


class MicrophonePermissionError(AudioCaptureError):
    """The OS denied access to the microphone."""


class AudioDeviceError(AudioCaptureError):
    """No usable input device."""


class TranscriptionError(AquaVoiceError):
    """Base class for remote transcription failures."""


class AuthError(TranscriptionError):
    """API key missing or rejected."""


class RateLimitError(TranscriptionError):
    """Provider quota or rate limit exceeded."""


class RemoteError(TranscriptionError):
    """Any other transport or API failure."""


class AutomationError(AquaVoiceError):
    """Synthetic paste keystroke failed."""
