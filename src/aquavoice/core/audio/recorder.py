import base64
import io
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import scipy.io.wavfile as wav
import sounddevice as sd

from ...utils.logger import get_logger
from ..errors import AudioDeviceError, MicrophonePermissionError
from ..settings.config import CHANNELS, SAMPLE_RATE

logger = get_logger(__name__)

WAV_MIME_TYPE = "audio/wav"

_PERMISSION_HINTS = ("permission", "denied", "not authorized", "unauthorized")


@dataclass
class AudioDevice:
    name: str
    index: int
    channels: int
    default_sample_rate: float


@dataclass(frozen=True)
class AudioClip:
    """One encoded press-to-release recording."""

    data: bytes
    mime_type: str = WAV_MIME_TYPE
    sample_rate: int = SAMPLE_RATE
    duration_seconds: float = 0.0

    @property
    def is_empty(self) -> bool:
        return len(self.data) == 0

    @property
    def audio_format(self) -> str:
        return self.mime_type.split("/", 1)[-1]

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @classmethod
    def empty(cls, sample_rate: int = SAMPLE_RATE) -> "AudioClip":
        return cls(data=b"", sample_rate=sample_rate)


def encode_wav(samples: np.ndarray, sample_rate: int) -> bytes:
    """Encode float samples in [-1, 1] as 16-bit PCM WAV bytes."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767.0).astype(np.int16)
    buffer = io.BytesIO()
    wav.write(buffer, sample_rate, pcm)
    return buffer.getvalue()


class AudioRecorder:

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        channels: int = CHANNELS,
        device: Optional[str] = None,
    ):

        self.sample_rate = sample_rate
        self.channels = channels
        self.device = device

        self._stream: Optional[sd.InputStream] = None
        self._audio_buffer: List[np.ndarray] = []
        self._is_recording = False

    @property
    def is_recording(self) -> bool:
        return self._is_recording

    def start(self) -> None:
        """
        Open the microphone and start buffering.

        Raises MicrophonePermissionError or AudioDeviceError when the stream
        cannot be opened. Calling start() while already recording is a no-op.
        """
        if self._is_recording:
            return

        self._audio_buffer = []

        try:
            self._stream = sd.InputStream(
                samplerate=self.sample_rate,
                channels=self.channels,
                dtype="float32",
                device=self._get_device_index(),
                callback=self._audio_callback,
            )
            self._stream.start()
        except sd.PortAudioError as e:
            self._close_stream()
            message = str(e)
            if any(hint in message.lower() for hint in _PERMISSION_HINTS):
                raise MicrophonePermissionError(
                    f"Microphone access denied: {message}"
                ) from e
            raise AudioDeviceError(f"Audio device error: {message}") from e
        except Exception as e:
            self._close_stream()
            raise AudioDeviceError(f"Failed to start recording: {e}") from e

        self._is_recording = True

    def stop(self) -> AudioClip:
        """Close the stream and return the recording as a WAV clip."""
        if not self._is_recording:
            return AudioClip.empty(self.sample_rate)

        self._is_recording = False
        self._close_stream()

        if not self._audio_buffer:
            return AudioClip.empty(self.sample_rate)

        audio_data = np.concatenate(self._audio_buffer, axis=0)
        self._audio_buffer = []

        if audio_data.size == 0:
            return AudioClip.empty(self.sample_rate)

        frames = audio_data.shape[0]
        return AudioClip(
            data=encode_wav(audio_data, self.sample_rate),
            mime_type=WAV_MIME_TYPE,
            sample_rate=self.sample_rate,
            duration_seconds=frames / float(self.sample_rate),
        )

    def _close_stream(self) -> None:
        if self._stream is None:
            return
        try:
            self._stream.stop()
            self._stream.close()
        except sd.PortAudioError as e:
            logger.warning(f"Error closing audio stream: {e}")
        finally:
            self._stream = None

    def _audio_callback(self, indata: np.ndarray, frames: int, time, status) -> None:
        if status:
            logger.debug(f"Audio stream status: {status}")
        if self._is_recording:
            self._audio_buffer.append(indata.copy())

    def _get_device_index(self) -> Optional[int]:
        if self.device is None:
            return None

        for device in self.list_devices():
            if device.name == self.device:
                return device.index

        logger.warning(f"Input device '{self.device}' not found, using default")
        return None

    @staticmethod
    def list_devices() -> List[AudioDevice]:
        devices = []

        for i, device in enumerate(sd.query_devices()):
            if device["max_input_channels"] > 0:
                devices.append(
                    AudioDevice(
                        name=device["name"],
                        index=i,
                        channels=device["max_input_channels"],
                        default_sample_rate=device["default_samplerate"],
                    )
                )

        return devices
