"""Persistent client-side credential storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN_STORAGE_KEY = "auth_token"


class TokenStorage(ABC):
    """Holds the single bearer token under a fixed key."""

    @abstractmethod
    def get(self) -> str | None:
        """Return the stored token, if any."""

    @abstractmethod
    def set(self, token: str) -> None:
        """Persist the token."""

    @abstractmethod
    def remove(self) -> None:
        """Forget the token."""


class MemoryTokenStorage(TokenStorage):
    def __init__(self, token: str | None = None) -> None:
        self._values: dict[str, str] = {}
        if token is not None:
            self._values[TOKEN_STORAGE_KEY] = token

    def get(self) -> str | None:
        return self._values.get(TOKEN_STORAGE_KEY)

    def set(self, token: str) -> None:
        self._values[TOKEN_STORAGE_KEY] = token

    def remove(self) -> None:
        self._values.pop(TOKEN_STORAGE_KEY, None)


class FileTokenStorage(TokenStorage):
    """JSON key/value file shared with other client-side values.

    Only the ``auth_token`` key is touched; other keys in the file survive.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            values = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("storage.unreadable path=%s reason=invalid_json", self._path)
            return {}
        return values if isinstance(values, dict) else {}

    def _write(self, values: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(values, indent=2, sort_keys=True), encoding="utf-8")
        tmp_path.replace(self._path)

    def get(self) -> str | None:
        token = self._read().get(TOKEN_STORAGE_KEY)
        return token if isinstance(token, str) and token else None

    def set(self, token: str) -> None:
        values = self._read()
        values[TOKEN_STORAGE_KEY] = token
        self._write(values)

    def remove(self) -> None:
        values = self._read()
        if values.pop(TOKEN_STORAGE_KEY, None) is None:
            return
        self._write(values)


__all__ = ["FileTokenStorage", "MemoryTokenStorage", "TOKEN_STORAGE_KEY", "TokenStorage"]
