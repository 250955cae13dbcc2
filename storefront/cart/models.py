"""Cart models with Decimal-based totals."""
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Union

from storefront.services.money import MAX_PRICE, add, calculate_tax, multiply

# Upper bound for one line item; keeps every total well inside Decimal precision
MAX_QUANTITY = 1_000_000


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_valid_price(value) -> bool:
    """Finite number between 0 and MAX_PRICE."""
    if not _is_number(value):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return 0 <= value <= MAX_PRICE


@dataclass
class CartLineItem:
    """Single product entry in the cart."""
    name: str
    price: Union[int, float]
    quantity: int = 1

    @property
    def line_total(self) -> Decimal:
        """Price for all units of this item."""
        return multiply(self.price, self.quantity)

    def to_dict(self) -> dict:
        """Convert to the persisted dictionary layout."""
        return {
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLineItem":
        """
        Create from a persisted dictionary.

        Raises:
            KeyError: a field is missing
            TypeError: a field has the wrong type
            ValueError: price is not finite or out of range, or quantity is out of range
        """
        name = data["name"]
        price = data["price"]
        quantity = data["quantity"]

        if not isinstance(name, str):
            raise TypeError("name must be a string")
        if not _is_number(price):
            raise TypeError("price must be a number")
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise TypeError("quantity must be an integer")
        if not is_valid_price(price):
            raise ValueError(f"price must be a finite number between 0 and {MAX_PRICE}")
        if not 1 <= quantity <= MAX_QUANTITY:
            raise ValueError(f"quantity must be between 1 and {MAX_QUANTITY}")

        return cls(name=name, price=price, quantity=quantity)


@dataclass
class Cart:
    """Ordered line items, at most one per name."""
    items: List[CartLineItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_items(self) -> int:
        """Total number of units in cart."""
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> Decimal:
        """Sum of all line totals."""
        total = Decimal("0")
        for item in self.items:
            total = add(total, item.line_total)
        return total

    @property
    def tax(self) -> Decimal:
        return calculate_tax(self.subtotal)

    @property
    def grand_total(self) -> Decimal:
        """Subtotal plus tax."""
        return add(self.subtotal, self.tax)

    def find_item(self, name: str) -> Optional[CartLineItem]:
        """Line item with exactly this name (case-sensitive), or None."""
        return next((item for item in self.items if item.name == name), None)

    def to_list(self) -> list:
        """Convert to the persisted list layout."""
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_list(cls, data: list) -> "Cart":
        """
        Create from the persisted list layout.

        Raises:
            TypeError: data is not a list of objects
            ValueError: an entry is invalid or a name appears twice
        """
        if not isinstance(data, list):
            raise TypeError("cart must be a list")

        items = []
        seen = set()
        for entry in data:
            if not isinstance(entry, dict):
                raise TypeError("cart entries must be objects")
            item = CartLineItem.from_dict(entry)
            if item.name in seen:
                raise ValueError(f"duplicate line item {item.name!r}")
            seen.add(item.name)
            items.append(item)

        return cls(items=items)
