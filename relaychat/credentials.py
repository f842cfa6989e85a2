"""
Credential store — single source of truth for the active provider and secret.

Loaded once at startup via load(); reads after that are synchronous. Every
change swaps in a new frozen Credential and then persists the full record,
so a reader sees either the old record or the new one, never a mix.

One secret is shared across providers: switching provider keeps the secret.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from relaychat.config import Config, get_config, open_store
from relaychat.errors import StorageError
from relaychat.models import Credential, Provider
from relaychat.vault.store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "apiKey"

CredentialListener = Callable[[Credential], None]


class CredentialStore:
    def __init__(
        self,
        storage: KeyValueStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        default_provider: Provider | str = Provider.OPENAI,
    ) -> None:
        self._storage = storage
        self._storage_key = storage_key
        self._default = Credential(provider=Provider(default_provider))
        self._credential = self._default
        self._listeners: list[CredentialListener] = []

    @classmethod
    def from_config(cls, config: Config | None = None) -> CredentialStore:
        """Build a store on the configured file backend (not yet loaded)."""
        cfg = config or get_config()
        return cls(open_store(cfg), storage_key=cfg.storage_key, default_provider=cfg.default_provider)

    async def load(self) -> Credential:
        """Read the persisted record. Falls back to the default on missing or bad data."""
        try:
            raw = await self._storage.get(self._storage_key)
        except Exception as e:
            logger.warning("Failed to read stored credential: %s", e)
            raw = None

        credential = self._default
        if raw:
            try:
                credential = Credential.loads(raw)
            except (ValueError, RecursionError) as e:
                logger.warning("Ignoring corrupt credential record: %s", e)

        self._update(credential)
        return credential

    def get_credential(self) -> Credential:
        return self._credential

    async def set_secret(self, secret: str) -> None:
        """Replace the secret and persist. Raises StorageError if the write fails."""
        await self._commit(self._credential.with_secret(secret))

    async def clear_secret(self) -> None:
        await self.set_secret("")

    async def select_provider(self, provider: Provider | str) -> None:
        """Switch provider, keeping the current secret, and persist."""
        await self._commit(self._credential.with_provider(Provider(provider)))

    def subscribe(self, listener: CredentialListener) -> Callable[[], None]:
        """Call listener with the new credential after each change. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _commit(self, credential: Credential) -> None:
        # Memory is updated before the write; a failed write leaves storage stale.
        self._update(credential)
        try:
            await self._storage.set(self._storage_key, credential.dumps())
        except Exception as e:
            logger.error("Failed to persist credential: %s", e)
            raise StorageError(f"Failed to persist credential: {e}") from e
        logger.debug("Credential persisted (provider=%s)", credential.provider)

    def _update(self, credential: Credential) -> None:
        self._credential = credential
        for listener in list(self._listeners):
            try:
                listener(credential)
            except Exception as e:
                logger.warning("Credential listener %r failed: %s", listener, e)
