"""Error taxonomy for relaychat."""

from __future__ import annotations


class RelayError(Exception):
    """Base class for all relaychat errors."""


class MissingCredentialError(RelayError):
    """No secret is stored; the operation was aborted before any side effect."""

    def __init__(self, message: str = "No API key found") -> None:
        super().__init__(message)


class ProviderError(RelayError):
    """The remote provider rejected the call or returned no usable payload."""


class UnsupportedCapabilityError(ProviderError):
    """The provider adapter does not implement the requested capability."""


class StorageError(RelayError):
    """Persisting the credential record failed."""


class TranscriptionError(RelayError):
    """The transcription upload or response parsing failed."""
