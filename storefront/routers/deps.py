"""
Shared Dependencies for Routers

Resolves which cart a request talks to.
"""
from typing import Optional

from fastapi import Header

from storefront.cart import CartStore, get_cart_store
from storefront.db import StorageKeys


def get_request_cart_store(
    x_cart_session: Optional[str] = Header(default=None),
) -> CartStore:
    """CartStore for the browser session in ``X-Cart-Session`` (or the shared key)."""
    return get_cart_store(StorageKeys.cart_key(x_cart_session))
