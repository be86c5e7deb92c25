"""
Remote speech-to-text through a Gemini model.

The clip is sent inline (base64) together with a fixed instruction, and the
model's reply is the transcript. Requests go through litellm.
"""

from typing import List, Optional

import litellm
from litellm import completion

from ...utils.logger import get_logger
from ..audio.recorder import AudioClip
from ..errors import AuthError, RateLimitError, RemoteError
from ..settings.config import DEFAULT_MODEL

logger = get_logger(__name__)

TRANSCRIPTION_PROMPT = (
    "Transcribe this audio. Output only the spoken content, "
    "with no extra commentary."
)


class TranscriptionClient:

    @staticmethod
    def format_model_name(model: str) -> str:
        if model.startswith("gemini/"):
            return model
        return f"gemini/{model}"

    def __init__(self, model: str = DEFAULT_MODEL, api_base: Optional[str] = None):
        self.model = self.format_model_name(model or DEFAULT_MODEL)
        self.api_base = api_base

    @staticmethod
    def build_messages(clip: AudioClip) -> List[dict]:
        return [
            {
                "role": "user",
                "content": [
                    {
                        "type": "input_audio",
                        "input_audio": {
                            "data": clip.to_base64(),
                            "format": clip.audio_format,
                        },
                    },
                    {"type": "text", "text": TRANSCRIPTION_PROMPT},
                ],
            }
        ]

    def transcribe(self, api_key: str, clip: AudioClip) -> str:
        """
        Send one clip and return the recognized text, stripped.

        Raises AuthError, RateLimitError or RemoteError. There are no
        retries: a failure ends the attempt.
        """
        if not api_key or not api_key.strip():
            raise AuthError("No API key set")
        if clip.is_empty:
            raise ValueError("Cannot transcribe an empty clip")

        logger.info(
            f"Transcribing {len(clip.data)} bytes ({clip.mime_type}) "
            f"with {self.model}, key {api_key[:5]}..."
        )

        kwargs = {
            "model": self.model,
            "messages": self.build_messages(clip),
            "api_key": api_key,
            "num_retries": 0,
        }
        if self.api_base:
            kwargs["api_base"] = self.api_base

        try:
            response = completion(**kwargs)
        except (litellm.AuthenticationError, litellm.PermissionDeniedError) as e:
            raise AuthError(f"Invalid API key: {e}") from e
        except litellm.RateLimitError as e:
            raise RateLimitError(f"Rate limit exceeded: {e}") from e
        except Exception as e:
            raise RemoteError(f"API error: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as e:
            raise RemoteError(f"Unexpected response shape: {e}") from e

        text = (content or "").strip()
        if not text:
            raise RemoteError("No speech recognized")

        logger.info(
            f"Transcription result: '{text[:50]}{'...' if len(text) > 50 else ''}'"
        )
        return text
