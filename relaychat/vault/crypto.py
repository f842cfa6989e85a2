"""
AES-256-GCM encryption for values kept at rest.

Master key is a 32-byte random key stored at $RELAYCHAT_STATE_DIR/.vault-key
(chmod 600). Each value gets a unique 12-byte nonce prepended to the ciphertext.
"""

from __future__ import annotations

import base64
import secrets
import stat
from pathlib import Path

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

KEY_FILENAME = ".vault-key"
NONCE_SIZE = 12
TAG_SIZE = 16

_cached_keys: dict[Path, bytes] = {}


def init_master_key(key_dir: Path | str) -> Path:
    """Generate a new master key file. Returns the path. Idempotent."""
    key_path = Path(key_dir) / KEY_FILENAME
    if key_path.exists():
        return key_path
    key_path.parent.mkdir(parents=True, exist_ok=True)
    key_path.write_bytes(secrets.token_bytes(32))
    key_path.chmod(stat.S_IRUSR | stat.S_IWUSR)  # 600
    return key_path


def get_master_key(key_dir: Path | str) -> bytes:
    """Load the master key from disk (cached per directory after first read)."""
    key_path = Path(key_dir) / KEY_FILENAME
    cached = _cached_keys.get(key_path)
    if cached is not None:
        return cached

    if not key_path.exists():
        raise FileNotFoundError(f"Master key not found at {key_path}")
    key = key_path.read_bytes()
    if len(key) != 32:
        raise ValueError(f"Master key must be 32 bytes, got {len(key)}")
    _cached_keys[key_path] = key
    return key


def reset_key_cache() -> None:
    """Clear cached master keys (for testing)."""
    _cached_keys.clear()


def encrypt(plaintext: str, master_key: bytes) -> str:
    """Encrypt with AES-256-GCM. Returns base64(nonce + ciphertext + tag)."""
    nonce = secrets.token_bytes(NONCE_SIZE)
    ciphertext = AESGCM(master_key).encrypt(nonce, plaintext.encode("utf-8"), None)
    return base64.b64encode(nonce + ciphertext).decode("ascii")


def decrypt(token: str, master_key: bytes) -> str:
    """Decrypt a token produced by encrypt()."""
    data = base64.b64decode(token)
    if len(data) < NONCE_SIZE + TAG_SIZE:
        raise ValueError("Encrypted data too short")
    plaintext = AESGCM(master_key).decrypt(data[:NONCE_SIZE], data[NONCE_SIZE:], None)
    return plaintext.decode("utf-8")
