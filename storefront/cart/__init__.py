"""Cart package: models, storage backends, and the cart store."""
from .models import CartLineItem, Cart
from .service import CartStore, get_cart_store
from .storage import KeyValueStorage, InMemoryStorage, RedisStorage

__all__ = [
    "CartLineItem",
    "Cart",
    "CartStore",
    "get_cart_store",
    "KeyValueStorage",
    "InMemoryStorage",
    "RedisStorage",
]
