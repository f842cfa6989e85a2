"""
relaychat — provider-agnostic conversation core.

Usage:
    from relaychat import ConversationEngine, CredentialStore

    credentials = CredentialStore.from_config()
    await credentials.load()
    engine = ConversationEngine(credentials)
    outcome = await engine.get_completion("Hello")
"""

from __future__ import annotations

from relaychat.credentials import CredentialStore
from relaychat.engine import ConversationEngine
from relaychat.errors import (
    MissingCredentialError,
    ProviderError,
    RelayError,
    StorageError,
    TranscriptionError,
    UnsupportedCapabilityError,
)
from relaychat.models import Credential, Message, Outcome, Provider, Role, TranscriptionResult

__version__ = "0.1.0"

__all__ = [
    "ConversationEngine",
    "Credential",
    "CredentialStore",
    "Message",
    "MissingCredentialError",
    "Outcome",
    "Provider",
    "ProviderError",
    "RelayError",
    "Role",
    "StorageError",
    "TranscriptionError",
    "TranscriptionResult",
    "UnsupportedCapabilityError",
]
