"""
Provider adapters and the registry that picks one per Provider.

Usage:
    from relaychat.providers import adapter_for

    adapter = adapter_for(Provider.GROQ, api_key)
    text = await adapter.complete_chat([{"role": "user", "content": "Hi"}])
"""

from __future__ import annotations

from relaychat.config import Config, get_config
from relaychat.models import Provider
from relaychat.providers.base import ProviderAdapter
from relaychat.providers.groq_provider import GroqAdapter
from relaychat.providers.openai_provider import OpenAIAdapter


def adapter_for(provider: Provider | str, api_key: str, config: Config | None = None) -> ProviderAdapter:
    """Return the chat adapter for a provider."""
    cfg = config or get_config()
    provider = Provider(provider)
    if provider is Provider.OPENAI:
        return OpenAIAdapter(
            api_key,
            chat_model=cfg.models.openai_chat,
            image_model=cfg.models.image,
            image_size=cfg.models.image_size,
            timeout=cfg.request_timeout,
        )
    if provider is Provider.GROQ:
        return GroqAdapter(api_key, chat_model=cfg.models.groq_chat, timeout=cfg.request_timeout)
    raise ValueError(f"Unsupported provider: {provider}")


__all__ = ["GroqAdapter", "OpenAIAdapter", "ProviderAdapter", "adapter_for"]
