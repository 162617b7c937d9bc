"""Credential lifecycle: load, validate, persist, mask, notify."""

from typing import Callable

import structlog

from .backends import SecretBackend

logger = structlog.get_logger()

CREDENTIAL_KEY = "geminiApiKey"
MASK_CHAR = "*"
VISIBLE_SUFFIX = 4

CredentialListener = Callable[[str | None], None]


class ValidationError(ValueError):
    """Credential rejected before persisting."""


def usable_credential(value: str | None) -> str | None:
    """Return ``value`` if it may be sent to the API, else None.

    Empty and whitespace-only values count as absent.
    """
    if value is None or not value.strip():
        return None
    return value


class CredentialStore:
    """Owns the completion API key.

    The in-memory snapshot returned by ``current()`` is read from the backend
    once at construction and updated by ``save``/``clear``/``refresh``.
    """

    def __init__(self, backend: SecretBackend, key: str = CREDENTIAL_KEY):
        self._backend = backend
        self._key = key
        self._listeners: list[CredentialListener] = []
        self._current = self.load()

    def load(self) -> str | None:
        """Return the persisted credential, or None."""
        return self._backend.get(self._key) or None

    def current(self) -> str | None:
        return self._current

    def refresh(self) -> str | None:
        """Re-read the persisted credential into the in-memory snapshot."""
        self._current = self.load()
        return self._current

    def save(self, value: str) -> None:
        """Persist ``value`` and make it current.

        Raises:
            ValidationError: value is empty or whitespace-only
        """
        if usable_credential(value) is None:
            raise ValidationError("API key must not be empty")
        self._backend.set(self._key, value)
        self._current = value
        logger.info("credentials.saved", hint=self.mask(value))
        self._notify(value)

    def clear(self) -> None:
        """Remove the persisted credential."""
        self._backend.delete(self._key)
        self._current = None
        logger.info("credentials.cleared")
        self._notify(None)

    def subscribe(self, listener: CredentialListener) -> Callable[[], None]:
        """Register a credential-change listener. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, value: str | None) -> None:
        for listener in list(self._listeners):
            listener(value)

    @staticmethod
    def mask(value: str | None) -> str:
        """Display form revealing at most the last 4 characters."""
        if not value:
            return ""
        if len(value) <= VISIBLE_SUFFIX:
            return MASK_CHAR * len(value)
        return MASK_CHAR * (len(value) - VISIBLE_SUFFIX) + value[-VISIBLE_SUFFIX:]
