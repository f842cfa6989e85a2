"""
Centralized configuration for relaychat.

All configuration is loaded from environment variables with sensible defaults.

Usage:
    from relaychat.config import get_config
    cfg = get_config()
    print(cfg.storage_key)     # "apiKey"
    print(cfg.state_dir)       # "/home/user/.relaychat" or $RELAYCHAT_STATE_DIR
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from relaychat.vault.store import FileStore


@dataclass(frozen=True)
class ModelConfig:
    """Provider-specific model identifiers."""

    openai_chat: str = "gpt-3.5-turbo"
    groq_chat: str = "groq/mixtral-8x7b-32768"
    image: str = "dall-e-3"
    image_size: str = "1024x1024"
    transcription: str = "whisper-1"


@dataclass(frozen=True)
class Config:
    """Top-level relaychat configuration."""

    state_dir: Path = field(default_factory=lambda: Path.home() / ".relaychat")
    storage_key: str = "apiKey"
    default_provider: str = "OpenAI"
    encrypt: bool = False

    request_timeout: float = 60.0
    transcription_url: str = "https://api.openai.com/v1/audio/transcriptions"

    models: ModelConfig = field(default_factory=ModelConfig)

    @property
    def store_path(self) -> Path:
        return self.state_dir / "store.json"


# Singleton
_config: Config | None = None


def get_config() -> Config:
    """Get or create the singleton config from environment variables."""
    global _config
    if _config is not None:
        return _config
    _config = _load_from_env()
    return _config


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


def _load_from_env() -> Config:
    """Load configuration from environment variables."""
    defaults = ModelConfig()
    models = ModelConfig(
        openai_chat=os.environ.get("RELAYCHAT_OPENAI_CHAT_MODEL", defaults.openai_chat),
        groq_chat=os.environ.get("RELAYCHAT_GROQ_CHAT_MODEL", defaults.groq_chat),
        image=os.environ.get("RELAYCHAT_IMAGE_MODEL", defaults.image),
        image_size=os.environ.get("RELAYCHAT_IMAGE_SIZE", defaults.image_size),
        transcription=os.environ.get("RELAYCHAT_TRANSCRIPTION_MODEL", defaults.transcription),
    )

    return Config(
        state_dir=Path(os.environ.get("RELAYCHAT_STATE_DIR", Path.home() / ".relaychat")),
        storage_key=os.environ.get("RELAYCHAT_STORAGE_KEY", "apiKey"),
        default_provider=os.environ.get("RELAYCHAT_DEFAULT_PROVIDER", "OpenAI"),
        encrypt=_env_flag("RELAYCHAT_ENCRYPT"),
        request_timeout=float(os.environ.get("RELAYCHAT_REQUEST_TIMEOUT", "60")),
        transcription_url=os.environ.get(
            "RELAYCHAT_TRANSCRIPTION_URL",
            "https://api.openai.com/v1/audio/transcriptions",
        ),
        models=models,
    )


def reset_config() -> None:
    """Reset the singleton config (for testing)."""
    global _config
    _config = None


def open_store(config: Config | None = None) -> FileStore:
    """Build the file-backed key-value store described by the config."""
    from relaychat.vault.crypto import init_master_key
    from relaychat.vault.store import FileStore

    cfg = config or get_config()
    if cfg.encrypt:
        init_master_key(cfg.state_dir)
        return FileStore(cfg.store_path, key_dir=cfg.state_dir)
    return FileStore(cfg.store_path)
