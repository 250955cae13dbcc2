"""Key-value backends for cart persistence."""
import threading
from typing import Dict, Optional, Protocol


class KeyValueStorage(Protocol):
    """Minimal string key-value store the cart is persisted in."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryStorage:
    """Process-local storage. Default backend and test double."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


class RedisStorage:
    """
    Storage on top of a synchronous Upstash Redis client.

    Values are written without expiry: a cart lives until it is cleared.
    """

    def __init__(self, client):
        self._client = client

    def get(self, key: str) -> Optional[str]:
        value = self._client.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        self._client.set(key, value)

    def delete(self, key: str) -> None:
        self._client.delete(key)


__all__ = ["KeyValueStorage", "InMemoryStorage", "RedisStorage"]
