"""
Conversation engine — routes user requests to providers and keeps the transcript.

Every chat or image call follows the same shape:

    credential check → append User message → await provider → append Assistant message

A missing secret aborts before any mutation. Provider failures are written into
the transcript as the assistant's reply and returned as a failed Outcome; they
are never raised. Transcription results go straight back to the caller and
never touch the transcript.

Appends from concurrent calls may interleave unless the engine is created
with ``serialize=True``, which holds a lock from the credential check to the
Assistant append.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from relaychat.config import Config, get_config
from relaychat.credentials import CredentialStore
from relaychat.errors import (
    MissingCredentialError,
    ProviderError,
    TranscriptionError,
    UnsupportedCapabilityError,
)
from relaychat.models import (
    FALLBACK_TEXT,
    Credential,
    Message,
    Outcome,
    Provider,
    Role,
    Transcript,
    TranscriptionResult,
)
from relaychat.notify import LogNotifier, Notifier
from relaychat.providers import ProviderAdapter, adapter_for
from relaychat.transcription import Transcriber

logger = logging.getLogger(__name__)

IMAGE_PROVIDER = Provider.OPENAI

AdapterFactory = Callable[[Provider, str], ProviderAdapter]
MessageListener = Callable[[Message], None]


class ConversationEngine:
    def __init__(
        self,
        credentials: CredentialStore,
        *,
        adapter_factory: AdapterFactory | None = None,
        transcriber: Transcriber | None = None,
        notifier: Notifier | None = None,
        serialize: bool = False,
        config: Config | None = None,
    ) -> None:
        cfg = config or get_config()
        self.credentials = credentials
        self.transcript = Transcript()
        self._adapter_factory = adapter_factory or (lambda p, key: adapter_for(p, key, cfg))
        self._transcriber = transcriber or Transcriber(
            url=cfg.transcription_url,
            model=cfg.models.transcription,
            timeout=cfg.request_timeout,
        )
        self._notifier = notifier or LogNotifier()
        self._lock = asyncio.Lock() if serialize else None
        self._listeners: list[MessageListener] = []

    @property
    def messages(self) -> tuple[Message, ...]:
        return self.transcript.snapshot()

    def subscribe(self, listener: MessageListener) -> Callable[[], None]:
        """Call listener with each appended message. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Operations ──

    async def get_completion(self, prompt: str) -> Outcome:
        """Send the whole transcript plus prompt to the selected chat provider."""
        async with self._guard():
            try:
                credential = self._require_credential()
            except MissingCredentialError as e:
                return Outcome.failure(e)

            self._append(Message(prompt, Role.USER))
            history = self.transcript.as_messages()
            try:
                adapter = self._adapter_factory(credential.provider, credential.secret)
                content = await adapter.complete_chat(history)
            except Exception as e:
                return self._fail(e, "Chat completion")
            return self._succeed(content)

    async def generate_image(self, prompt: str) -> Outcome:
        """Generate one image from the prompt alone. Always uses the image provider."""
        async with self._guard():
            try:
                credential = self._require_credential()
            except MissingCredentialError as e:
                return Outcome.failure(e)

            self._append(Message(prompt, Role.USER))
            try:
                adapter = self._adapter_factory(IMAGE_PROVIDER, credential.secret)
                if not adapter.supports_images:
                    raise UnsupportedCapabilityError(f"{adapter.provider} does not support image generation")
                url = await adapter.generate_image(prompt)
            except Exception as e:
                return self._fail(e, "Image generation")
            return self._succeed(url)

    async def speech_to_text(self, audio_uri: str) -> TranscriptionResult | None:
        """Transcribe an audio file. Returns None when no transcription is available."""
        try:
            credential = self._require_credential()
        except MissingCredentialError:
            return None

        try:
            return await self._transcriber.transcribe(audio_uri, credential.secret)
        except TranscriptionError as e:
            logger.error("Error in speech_to_text: %s", e, exc_info=True)
            return None

    # ── Internals ──

    def _require_credential(self) -> Credential:
        credential = self.credentials.get_credential()
        if not credential.secret:
            error = MissingCredentialError()
            self._notifier.notify(str(error))
            raise error
        return credential

    def _guard(self) -> AbstractAsyncContextManager[object]:
        return self._lock if self._lock is not None else contextlib.nullcontext()

    def _succeed(self, content: str | None) -> Outcome:
        text = (content or "").strip() or FALLBACK_TEXT
        message = Message(text, Role.ASSISTANT)
        self._append(message)
        return Outcome.success(message)

    def _fail(self, exc: Exception, action: str) -> Outcome:
        logger.warning("%s failed: %s", action, exc)
        message = Message(str(exc) or FALLBACK_TEXT, Role.ASSISTANT)
        self._append(message)
        error = exc if isinstance(exc, ProviderError) else ProviderError(message.content)
        if error is not exc:
            error.__cause__ = exc
        return Outcome.failure(error, message)

    def _append(self, message: Message) -> None:
        self.transcript.append(message)
        for listener in list(self._listeners):
            try:
                listener(message)
            except Exception as e:
                logger.warning("Transcript listener %r failed: %s", listener, e)
