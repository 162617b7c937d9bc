"""API key storage and validity gating."""

from .backends import FileBackend, MemoryBackend, SecretBackend
from .store import CREDENTIAL_KEY, CredentialStore, ValidationError, usable_credential

__all__ = [
    "CredentialStore",
    "ValidationError",
    "usable_credential",
    "CREDENTIAL_KEY",
    "SecretBackend",
    "MemoryBackend",
    "FileBackend",
]
