"""
Storefront Core Module

This package contains the backend of the Gamer's Paradise storefront:
- cart: cart models, storage backends and the cart store
- catalog: static product catalog and search filter
- notifications: toast messages for cart actions
- routers: FastAPI endpoints
- db: storage backend selection (memory or Upstash Redis)

Note: Imports are lazy so importing a submodule does not pull in FastAPI
or the Redis client.
"""

__all__ = [
    "get_cart_store",
    "get_storage",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "get_cart_store":
        from storefront.cart import get_cart_store
        return get_cart_store
    elif name == "get_storage":
        from storefront.db import get_storage
        return get_storage
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
