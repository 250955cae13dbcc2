"""Cart store: read-modify-write operations over the persisted cart."""
import json
import threading
import weakref
from typing import Optional

from storefront.errors import (
    CartStorageError,
    ERROR_CART_UNAVAILABLE,
    ERROR_INVALID_ITEM_NAME,
    ERROR_INVALID_PRICE,
    ERROR_INVALID_QUANTITY,
)
from storefront.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from storefront.services.money import to_number
from .models import MAX_QUANTITY, Cart, CartLineItem, is_valid_price
from .storage import KeyValueStorage

logger = get_logger(__name__)


class CartStore:
    """
    Owns the cart persisted under a single storage key.

    Every mutation loads the whole cart, changes it and writes it back with
    one ``set`` call. Mutations on the same store are serialized by a lock;
    separate processes sharing a backend are last-write-wins.
    """

    def __init__(self, storage: KeyValueStorage, key: str = "cart"):
        self.storage = storage
        self.key = key
        self._lock = threading.RLock()

    # ==================== PERSISTENCE ====================

    def load_cart(self) -> Cart:
        """Load the cart. Missing or corrupted state yields an empty cart."""
        raw = self._read()
        if raw is None:
            return Cart()

        try:
            return Cart.from_list(json.loads(raw))
        except (ValueError, KeyError, TypeError, RecursionError) as e:
            logger.warning(f"Corrupted cart data under {sanitize_id_for_logging(self.key)}: {e}")
            return Cart()

    def save_cart(self, cart: Cart) -> None:
        """Overwrite the persisted cart with a single write."""
        self._write(json.dumps(cart.to_list()))

    # ==================== MUTATIONS ====================

    def add_item(self, name: str, price) -> Cart:
        """Add one unit of ``name``. The first price seen for a name is kept."""
        if not isinstance(name, str) or not name:
            raise ValueError(ERROR_INVALID_ITEM_NAME)
        if not is_valid_price(price):
            raise ValueError(ERROR_INVALID_PRICE)

        with self._lock:
            cart = self.load_cart()
            existing_item = cart.find_item(name)

            if existing_item:
                existing_item.quantity = min(existing_item.quantity + 1, MAX_QUANTITY)
            else:
                cart.items.append(CartLineItem(name=name, price=price, quantity=1))

            self.save_cart(cart)

        logger.debug(f"Added {sanitize_string_for_logging(name)} to cart")
        return cart

    def remove_item(self, name: str) -> Cart:
        """Remove the line item for ``name``. Absent names are a no-op."""
        with self._lock:
            cart = self.load_cart()
            cart.items = [item for item in cart.items if item.name != name]
            self.save_cart(cart)

        logger.debug(f"Removed {sanitize_string_for_logging(name)} from cart")
        return cart

    def set_quantity(self, name: str, quantity: int) -> Cart:
        """Set the quantity of ``name``, clamped to 1..MAX_QUANTITY."""
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise ValueError(ERROR_INVALID_QUANTITY)

        with self._lock:
            cart = self.load_cart()
            item = cart.find_item(name)
            if item is None:
                return cart

            item.quantity = min(max(1, quantity), MAX_QUANTITY)
            self.save_cart(cart)

        return cart

    def change_quantity(self, name: str, delta: int) -> Cart:
        """Step the quantity of ``name`` by ``delta`` (the +/- buttons)."""
        with self._lock:
            cart = self.load_cart()
            item = cart.find_item(name)
            if item is None:
                return cart
            return self.set_quantity(name, item.quantity + delta)

    def clear_cart(self) -> None:
        """Delete all persisted cart state."""
        with self._lock:
            self._delete()
        logger.debug(f"Cleared cart {sanitize_id_for_logging(self.key)}")

    # ==================== SUMMARY ====================

    def get_cart_summary(self) -> dict:
        """Plain-dict snapshot of the cart with derived totals."""
        cart = self.load_cart()

        if cart.is_empty:
            return {
                "is_empty": True,
                "total_items": 0,
                "items": [],
                "subtotal": 0,
                "tax": 0,
                "total": 0,
            }

        return {
            "is_empty": False,
            "total_items": cart.total_items,
            "items": [
                {
                    "name": item.name,
                    "price": item.price,
                    "quantity": item.quantity,
                    "line_total": to_number(item.line_total),
                }
                for item in cart.items
            ],
            "subtotal": to_number(cart.subtotal),
            "tax": to_number(cart.tax),
            "total": to_number(cart.grand_total),
        }

    # ==================== BACKEND ACCESS ====================

    def _read(self) -> Optional[str]:
        try:
            return self.storage.get(self.key)
        except Exception as e:
            logger.error(f"Failed to read cart from storage: {e}")
            raise CartStorageError(ERROR_CART_UNAVAILABLE) from e

    def _write(self, value: str) -> None:
        try:
            self.storage.set(self.key, value)
        except Exception as e:
            logger.error(f"Failed to save cart to storage: {e}")
            raise CartStorageError(ERROR_CART_UNAVAILABLE) from e

    def _delete(self) -> None:
        try:
            self.storage.delete(self.key)
        except Exception as e:
            logger.error(f"Failed to clear cart from storage: {e}")
            raise CartStorageError(ERROR_CART_UNAVAILABLE) from e


# One live store per key so concurrent requests for a cart share its lock.
# Entries vanish once no request holds the store.
_cart_stores: "weakref.WeakValueDictionary[str, CartStore]" = weakref.WeakValueDictionary()
_cart_stores_lock = threading.Lock()


def get_cart_store(key: Optional[str] = None) -> CartStore:
    """Get the CartStore for ``key`` on the configured backend."""
    from storefront.db import StorageKeys, get_storage

    key = key or StorageKeys.CART
    with _cart_stores_lock:
        store = _cart_stores.get(key)
        if store is None:
            store = CartStore(get_storage(), key=key)
            _cart_stores[key] = store
    return store
