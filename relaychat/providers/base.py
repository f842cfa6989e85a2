"""
Provider adapter interface.

Each adapter owns its model identifiers and wiring. Image generation is a
capability not every provider has: check ``supports_images`` before calling
``generate_image``; adapters without it raise UnsupportedCapabilityError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import litellm

from relaychat.errors import UnsupportedCapabilityError
from relaychat.models import Provider

# Suppress litellm's verbose logging
litellm.suppress_debug_info = True


class ProviderAdapter(ABC):
    """Common interface for chat/image providers."""

    provider: Provider
    supports_images: bool = False

    def __init__(self, api_key: str, chat_model: str, timeout: float = 60.0) -> None:
        self.api_key = api_key
        self.chat_model = chat_model
        self.timeout = timeout

    async def complete_chat(self, messages: list[dict[str, str]]) -> str | None:
        """Send the full message list. Returns the first choice's content (may be None)."""
        response = await litellm.acompletion(
            model=self.chat_model,
            messages=messages,
            api_key=self.api_key,
            timeout=self.timeout,
        )
        return _first_choice_content(response)

    @abstractmethod
    async def generate_image(self, prompt: str) -> str | None:
        """Generate one image and return its URL (may be None)."""
        raise NotImplementedError

    def _unsupported(self, capability: str) -> UnsupportedCapabilityError:
        return UnsupportedCapabilityError(f"{self.provider} does not support {capability}")


def _first_choice_content(response: Any) -> str | None:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else None


def first_image_url(response: Any) -> str | None:
    data = getattr(response, "data", None) or []
    if not data:
        return None
    item = data[0]
    url = item.get("url") if isinstance(item, dict) else getattr(item, "url", None)
    return url if isinstance(url, str) else None
