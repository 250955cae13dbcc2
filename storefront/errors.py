"""
Common Error Constants

Centralized error messages shared by the cart store and the HTTP routers.
"""

from storefront.services.money import MAX_PRICE

# Cart errors
ERROR_CART_UNAVAILABLE = "Cart service unavailable"
ERROR_CLEAR_NOT_CONFIRMED = "Clearing the cart must be confirmed"
ERROR_INVALID_ITEM_NAME = "name must be a non-empty string"
ERROR_INVALID_PRICE = f"price must be a finite number between 0 and {MAX_PRICE}"
ERROR_INVALID_QUANTITY = "quantity must be an integer"

# Storage errors
ERROR_REDIS_NOT_CONFIGURED = "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set"
ERROR_UNKNOWN_BACKEND = "Unknown cart storage backend"


class CartStorageError(Exception):
    """Raised when the key-value backend behind the cart fails."""
