"""GroqCloud adapter: chat completions only."""

from __future__ import annotations

from relaychat.models import Provider
from relaychat.providers.base import ProviderAdapter


class GroqAdapter(ProviderAdapter):
    provider = Provider.GROQ
    supports_images = False

    def __init__(
        self,
        api_key: str,
        chat_model: str = "groq/mixtral-8x7b-32768",
        timeout: float = 60.0,
    ) -> None:
        super().__init__(api_key, chat_model, timeout)

    async def generate_image(self, prompt: str) -> str | None:
        raise self._unsupported("image generation")
