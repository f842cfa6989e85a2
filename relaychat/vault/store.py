"""
Key-value stores backing the credential record.

FileStore keeps every key in one JSON document. Writes go to a temp file
that is then renamed over the original, so readers never see a torn file.
Blocking I/O runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

from relaychat.vault.crypto import decrypt, encrypt, get_master_key

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal async persistence contract."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process store. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileStore:
    """JSON-file store, optionally encrypting values with the master key in key_dir."""

    def __init__(self, path: Path | str, *, key_dir: Path | str | None = None) -> None:
        self.path = Path(path)
        self.key_dir = Path(key_dir) if key_dir is not None else None
        self._lock = asyncio.Lock()

    @property
    def encrypted(self) -> bool:
        return self.key_dir is not None

    async def get(self, key: str) -> str | None:
        data = await asyncio.to_thread(self._read_all)
        value = data.get(key)
        if value is None:
            return None
        if self.key_dir is not None:
            return decrypt(value, get_master_key(self.key_dir))
        return value

    async def set(self, key: str, value: str) -> None:
        if self.key_dir is not None:
            value = encrypt(value, get_master_key(self.key_dir))
        async with self._lock:
            await asyncio.to_thread(self._write_key, key, value)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        return data

    def _write_key(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError:
            logger.warning("Overwriting unreadable store file %s", self.path)
            data = {}
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.chmod(tmp_name, stat.S_IRUSR | stat.S_IWUSR)  # 600
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
