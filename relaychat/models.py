"""
Data models for relaychat.

All models are plain dataclasses. Credentials and messages are frozen so a
reader holding a reference never observes a partial update.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

from relaychat.errors import RelayError

FALLBACK_TEXT = "An error occurred"


class Provider(StrEnum):
    OPENAI = "OpenAI"
    GROQ = "GroqCloud"


class Role(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Credential:
    """The single stored {provider, secret} record."""

    provider: Provider = Provider.OPENAI
    secret: str = ""

    def with_secret(self, secret: str) -> Credential:
        return replace(self, secret=secret)

    def with_provider(self, provider: Provider) -> Credential:
        return replace(self, provider=provider)

    def dumps(self) -> str:
        """Serialize as minified JSON: {"type": ..., "key": ...}."""
        return json.dumps({"type": self.provider.value, "key": self.secret}, separators=(",", ":"))

    @classmethod
    def loads(cls, raw: str) -> Credential:
        """Parse a stored record. Raises ValueError on anything malformed."""
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Credential record must be an object, got {type(data).__name__}")
        key = data.get("key", "")
        if not isinstance(key, str):
            raise ValueError("Credential 'key' must be a string")
        return cls(provider=Provider(data.get("type")), secret=key)


@dataclass(frozen=True)
class Message:
    content: str
    role: Role

    def as_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


class Transcript:
    """Append-only ordered sequence of messages."""

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def snapshot(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def as_messages(self) -> list[dict[str, str]]:
        """Provider-ready list of {"role", "content"} dicts."""
        return [m.as_dict() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    def __repr__(self) -> str:
        return f"Transcript({self._messages!r})"


@dataclass(frozen=True)
class Outcome:
    """Result of a chat or image operation.

    ``ok`` is True only on the success path. ``message`` is the Assistant
    message that was appended, if any. ``error`` carries the failure cause.
    """

    ok: bool
    message: Message | None = None
    error: RelayError | None = None

    @classmethod
    def success(cls, message: Message) -> Outcome:
        return cls(ok=True, message=message)

    @classmethod
    def failure(cls, error: RelayError, message: Message | None = None) -> Outcome:
        return cls(ok=False, message=message, error=error)

    def raise_for_error(self) -> None:
        """Re-raise the carried error, if any."""
        if self.error is not None:
            raise self.error


class TranscriptionResult(dict[str, Any]):
    """Parsed JSON body returned by the transcription endpoint."""

    @property
    def text(self) -> str:
        value = self.get("text")
        return value if isinstance(value, str) else ""
