"""
Speech-to-text via a direct multipart upload to the transcription endpoint.

Not routed through litellm: the request is a plain
``POST multipart/form-data`` with fields ``model`` and ``file``.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from urllib.parse import unquote, urlparse

import httpx

from relaychat.errors import TranscriptionError
from relaychat.models import TranscriptionResult

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://api.openai.com/v1/audio/transcriptions"
DEFAULT_MODEL = "whisper-1"
AUDIO_FILENAME = "audio.m4a"
AUDIO_CONTENT_TYPE = "audio/mp4"


def _resolve_path(audio_uri: str) -> Path:
    """Accept a plain path or a file:// URI."""
    try:
        parsed = urlparse(audio_uri)
    except ValueError as e:
        raise TranscriptionError(f"Malformed audio URI {audio_uri!r}: {e}") from e
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    if parsed.scheme and len(parsed.scheme) > 1:
        raise TranscriptionError(f"Unsupported audio URI scheme: {parsed.scheme}")
    return Path(audio_uri)


class Transcriber:
    """Uploads audio files for transcription."""

    def __init__(
        self,
        url: str = DEFAULT_URL,
        model: str = DEFAULT_MODEL,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.model = model
        self.timeout = timeout
        self._transport = transport

    async def transcribe(self, audio_uri: str, api_key: str) -> TranscriptionResult:
        """Upload the audio and return the parsed response body.

        Raises TranscriptionError on unreadable audio, network failure,
        HTTP error status, or a body that is not a JSON object.
        """
        path = _resolve_path(audio_uri)
        try:
            audio = await asyncio.to_thread(path.read_bytes)
        except (OSError, ValueError) as e:
            raise TranscriptionError(f"Cannot read audio {audio_uri!r}: {e}") from e

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(
                    self.url,
                    headers={"Authorization": f"Bearer {api_key}"},
                    data={"model": self.model},
                    files={"file": (AUDIO_FILENAME, audio, AUDIO_CONTENT_TYPE)},
                )
                resp.raise_for_status()
                body = resp.json()
        except httpx.HTTPError as e:
            raise TranscriptionError(f"Transcription request failed: {e}") from e
        except ValueError as e:
            raise TranscriptionError(f"Transcription response is not JSON: {e}") from e

        if not isinstance(body, dict):
            raise TranscriptionError("Transcription response is not a JSON object")
        logger.debug("Transcribed %s (%d bytes)", path.name, len(audio))
        return TranscriptionResult(body)
