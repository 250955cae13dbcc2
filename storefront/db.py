"""
Storage Module - Cart backend selection and Redis client

Provides:
- Sync Upstash Redis client singleton
- The configured cart storage backend (memory or redis)
- Key helpers for cart storage
"""

import os
from typing import Optional

from upstash_redis import Redis

from storefront.cart.storage import InMemoryStorage, KeyValueStorage, RedisStorage
from storefront.errors import ERROR_REDIS_NOT_CONFIGURED, ERROR_UNKNOWN_BACKEND
from storefront.logging import get_logger

logger = get_logger(__name__)


# Backend selection: "memory" (default) or "redis"
CART_STORAGE_BACKEND = os.environ.get("CART_STORAGE_BACKEND", "memory").strip().lower()

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Logical key the whole cart lives under
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cart")


# Singleton instances
_sync_redis_client: Optional[Redis] = None
_storage: Optional[KeyValueStorage] = None


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError(ERROR_REDIS_NOT_CONFIGURED)
        _sync_redis_client = Redis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _sync_redis_client


def create_storage(backend: str) -> KeyValueStorage:
    """Build a storage backend by name."""
    if backend == "memory":
        return InMemoryStorage()
    if backend == "redis":
        return RedisStorage(get_redis_sync())
    raise ValueError(f"{ERROR_UNKNOWN_BACKEND}: {backend}")


def get_storage() -> KeyValueStorage:
    """Get the configured cart storage backend (singleton)."""
    global _storage

    if _storage is None:
        _storage = create_storage(CART_STORAGE_BACKEND)
        logger.info(f"Cart storage backend: {CART_STORAGE_BACKEND}")

    return _storage


class StorageKeys:
    """Key layout for cart storage."""

    CART = CART_STORAGE_KEY

    @staticmethod
    def cart_key(session_id: Optional[str] = None) -> str:
        """Single logical key, namespaced per browser session when one is given."""
        if not session_id:
            return StorageKeys.CART
        return f"{StorageKeys.CART}:{session_id}"
