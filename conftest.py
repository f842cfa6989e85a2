"""
Root-level shared test fixtures.

Stores, credentials and engines are built on in-memory collaborators;
no test touches the network or the user's home directory.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from relaychat.config import Config, reset_config
from relaychat.credentials import CredentialStore
from relaychat.engine import ConversationEngine
from relaychat.models import Credential, Provider
from relaychat.providers import ProviderAdapter
from relaychat.transcription import Transcriber
from relaychat.vault import MemoryStore

ENV_KEYS = [
    "RELAYCHAT_STATE_DIR",
    "RELAYCHAT_STORAGE_KEY",
    "RELAYCHAT_DEFAULT_PROVIDER",
    "RELAYCHAT_ENCRYPT",
    "RELAYCHAT_REQUEST_TIMEOUT",
    "RELAYCHAT_TRANSCRIPTION_URL",
    "RELAYCHAT_OPENAI_CHAT_MODEL",
    "RELAYCHAT_GROQ_CHAT_MODEL",
    "RELAYCHAT_IMAGE_MODEL",
    "RELAYCHAT_IMAGE_SIZE",
    "RELAYCHAT_TRANSCRIPTION_MODEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Remove relaychat env vars and reset the config singleton."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("RELAYCHAT_STATE_DIR", str(tmp_path / "state"))
    reset_config()
    yield
    reset_config()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest_asyncio.fixture
async def credentials(memory_store: MemoryStore) -> CredentialStore:
    """A loaded store holding {OpenAI, "sk-test"}."""
    await memory_store.set("apiKey", Credential(Provider.OPENAI, "sk-test").dumps())
    store = CredentialStore(memory_store)
    await store.load()
    return store


@pytest_asyncio.fixture
async def empty_credentials(memory_store: MemoryStore) -> CredentialStore:
    """A loaded store with no secret."""
    store = CredentialStore(memory_store)
    await store.load()
    return store


@pytest.fixture
def chat_adapter():
    """A mocked adapter that answers every chat with ' Hi there! '."""
    adapter = MagicMock(spec=ProviderAdapter)
    adapter.provider = Provider.OPENAI
    adapter.supports_images = True
    adapter.complete_chat = AsyncMock(return_value=" Hi there! ")
    adapter.generate_image = AsyncMock(return_value="https://images.example/cat.png")
    return adapter


@pytest.fixture
def adapter_factory(chat_adapter):
    return MagicMock(return_value=chat_adapter)


@pytest.fixture
def transcriber():
    mock = MagicMock(spec=Transcriber)
    mock.transcribe = AsyncMock(return_value={"text": "hello world"})
    return mock


@pytest.fixture
def notifier():
    return MagicMock()


@pytest.fixture
def make_engine(adapter_factory, transcriber, notifier):
    """Build an engine around the mocked collaborators."""

    def _make(store: CredentialStore, **kwargs) -> ConversationEngine:
        return ConversationEngine(
            store,
            adapter_factory=adapter_factory,
            transcriber=transcriber,
            notifier=notifier,
            config=Config(),
            **kwargs,
        )

    return _make
