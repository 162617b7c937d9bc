"""Key-value secret backends. File backend stores JSON, Fernet-encrypted when a key is set."""

import json
from pathlib import Path
from typing import Any, Protocol

import structlog
from cryptography.fernet import Fernet, InvalidToken

logger = structlog.get_logger()


class SecretBackend(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryBackend:
    """In-process backend for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


def _get_fernet(secret_key: str | bytes) -> Fernet:
    """Create Fernet instance from a 32-byte url-safe base64 key."""
    return Fernet(secret_key.encode() if isinstance(secret_key, str) else secret_key)


class FileBackend:
    """Secrets file on disk. Survives restarts.

    With ``secret_key`` the whole JSON document is Fernet-encrypted; without it
    the file is plain JSON.
    """

    def __init__(self, path: str | Path, secret_key: str | None = None):
        self.path = Path(path).expanduser()
        self._fernet = _get_fernet(secret_key) if secret_key else None

    def _load(self) -> dict[str, Any]:
        """Read the document. Missing or unreadable files read as empty."""
        if not self.path.exists():
            return {}
        raw = self.path.read_bytes()
        try:
            if self._fernet:
                raw = self._fernet.decrypt(raw)
            data = json.loads(raw)
        except InvalidToken:
            logger.warning("secrets.decrypt_failed", path=str(self.path))
            return {}
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("secrets.corrupt_file", path=str(self.path))
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(data).encode()
        if self._fernet:
            payload = self._fernet.encrypt(payload)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_bytes(payload)
        tmp.chmod(0o600)
        tmp.replace(self.path)

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)
