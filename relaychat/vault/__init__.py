"""
relaychat vault — async key-value persistence for the credential record.

Public API:
    KeyValueStore      → protocol: await get(key), await set(key, value)
    MemoryStore        → in-process store
    FileStore          → JSON file store, optional AES-256-GCM at rest
    init_master_key()  → create the 32-byte master key file
"""

from __future__ import annotations

from relaychat.vault.crypto import init_master_key
from relaychat.vault.store import FileStore, KeyValueStore, MemoryStore

__all__ = ["FileStore", "KeyValueStore", "MemoryStore", "init_master_key"]
