"""OpenAI adapter: chat completions and image generation."""

from __future__ import annotations

import litellm

from relaychat.models import Provider
from relaychat.providers.base import ProviderAdapter, first_image_url


class OpenAIAdapter(ProviderAdapter):
    provider = Provider.OPENAI
    supports_images = True

    def __init__(
        self,
        api_key: str,
        chat_model: str = "gpt-3.5-turbo",
        image_model: str = "dall-e-3",
        image_size: str = "1024x1024",
        timeout: float = 60.0,
    ) -> None:
        super().__init__(api_key, chat_model, timeout)
        self.image_model = image_model
        self.image_size = image_size

    async def generate_image(self, prompt: str) -> str | None:
        response = await litellm.aimage_generation(
            model=self.image_model,
            prompt=prompt,
            n=1,
            size=self.image_size,
            api_key=self.api_key,
            timeout=self.timeout,
        )
        return first_image_url(response)
