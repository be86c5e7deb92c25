"""
Tests for TranscriptionClient.

litellm.completion is mocked so no request leaves the machine.
"""

from unittest.mock import MagicMock, patch

import litellm
import pytest

from aquavoice.core.audio import AudioClip
from aquavoice.core.errors import AuthError, RateLimitError, RemoteError
from aquavoice.core.transcription import TRANSCRIPTION_PROMPT, TranscriptionClient

CLIP = AudioClip(data=b"RIFF....WAVEfmt ", duration_seconds=1.0)


def make_response(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


class TestModelName:
    def test_adds_provider_prefix(self):
        assert TranscriptionClient("gemini-2.5-flash").model == "gemini/gemini-2.5-flash"

    def test_keeps_existing_prefix(self):
        assert TranscriptionClient("gemini/gemini-2.5-flash").model == "gemini/gemini-2.5-flash"

    def test_empty_model_uses_default(self):
        assert TranscriptionClient("").model.startswith("gemini/")


class TestBuildMessages:
    def test_audio_then_prompt(self):
        messages = TranscriptionClient.build_messages(CLIP)

        assert len(messages) == 1
        assert messages[0]["role"] == "user"
        audio_part, text_part = messages[0]["content"]
        assert audio_part["type"] == "input_audio"
        assert audio_part["input_audio"]["data"] == CLIP.to_base64()
        assert audio_part["input_audio"]["format"] == "wav"
        assert text_part == {"type": "text", "text": TRANSCRIPTION_PROMPT}


class TestTranscribe:
    @patch("aquavoice.core.transcription.client.completion")
    def test_returns_trimmed_text(self, mock_completion):
        mock_completion.return_value = make_response("  hello world \n")

        client = TranscriptionClient("gemini-3-flash-preview")
        assert client.transcribe("key-123", CLIP) == "hello world"

        kwargs = mock_completion.call_args.kwargs
        assert kwargs["model"] == "gemini/gemini-3-flash-preview"
        assert kwargs["api_key"] == "key-123"
        assert kwargs["num_retries"] == 0
        assert "api_base" not in kwargs

    @patch("aquavoice.core.transcription.client.completion")
    def test_api_base_forwarded(self, mock_completion):
        mock_completion.return_value = make_response("hi")

        TranscriptionClient(api_base="http://localhost:8080").transcribe("k", CLIP)

        assert mock_completion.call_args.kwargs["api_base"] == "http://localhost:8080"

    @pytest.mark.parametrize("api_key", ["", "   "])
    @patch("aquavoice.core.transcription.client.completion")
    def test_missing_key_fails_without_request(self, mock_completion, api_key):
        with pytest.raises(AuthError):
            TranscriptionClient().transcribe(api_key, CLIP)
        mock_completion.assert_not_called()

    @patch("aquavoice.core.transcription.client.completion")
    def test_empty_clip_rejected(self, mock_completion):
        with pytest.raises(ValueError):
            TranscriptionClient().transcribe("k", AudioClip.empty())
        mock_completion.assert_not_called()

    @patch("aquavoice.core.transcription.client.completion")
    def test_authentication_error(self, mock_completion):
        mock_completion.side_effect = litellm.AuthenticationError(
            message="API key not valid", llm_provider="gemini", model="gemini/x"
        )

        with pytest.raises(AuthError):
            TranscriptionClient().transcribe("bad", CLIP)

    @patch("aquavoice.core.transcription.client.completion")
    def test_rate_limit_error(self, mock_completion):
        mock_completion.side_effect = litellm.RateLimitError(
            message="quota exceeded", llm_provider="gemini", model="gemini/x"
        )

        with pytest.raises(RateLimitError) as exc_info:
            TranscriptionClient().transcribe("k", CLIP)
        assert "Rate limit" in str(exc_info.value)

    @patch("aquavoice.core.transcription.client.completion")
    def test_other_failure_is_remote_error(self, mock_completion):
        mock_completion.side_effect = ConnectionError("network down")

        with pytest.raises(RemoteError) as exc_info:
            TranscriptionClient().transcribe("k", CLIP)
        assert "network down" in str(exc_info.value)

    @pytest.mark.parametrize("content", [None, "", "   "])
    @patch("aquavoice.core.transcription.client.completion")
    def test_empty_reply_is_remote_error(self, mock_completion, content):
        mock_completion.return_value = make_response(content)

        with pytest.raises(RemoteError):
            TranscriptionClient().transcribe("k", CLIP)

    @patch("aquavoice.core.transcription.client.completion")
    def test_malformed_response(self, mock_completion):
        response = MagicMock()
        response.choices = []
        mock_completion.return_value = response

        with pytest.raises(RemoteError):
            TranscriptionClient().transcribe("k", CLIP)
