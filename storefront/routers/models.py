"""
API Pydantic Models

Request and response models for the cart and catalog endpoints.
"""
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from storefront.cart.models import is_valid_price
from storefront.errors import ERROR_INVALID_PRICE
from storefront.notifications import Notification


# ==================== CART REQUESTS ====================

class AddToCartRequest(BaseModel):
    name: str = Field(min_length=1)
    price: Union[int, float]

    @field_validator("price")
    @classmethod
    def price_in_range(cls, v):
        if not is_valid_price(v):
            raise ValueError(ERROR_INVALID_PRICE)
        return v


class UpdateCartItemRequest(BaseModel):
    name: str
    quantity: int  # clamped to 1, never removes


class CartItemRequest(BaseModel):
    name: str


# ==================== CART RESPONSES ====================

class CartItemView(BaseModel):
    name: str
    price: Union[int, float]
    quantity: int
    line_total: Union[int, float]
    price_label: str
    line_total_label: str
    decrement_quantity: int
    increment_quantity: int


class CartView(BaseModel):
    is_empty: bool
    items: List[CartItemView] = []
    total_items: int = 0
    subtotal: Union[int, float] = 0
    tax: Union[int, float] = 0
    total: Union[int, float] = 0
    subtotal_label: str
    tax_label: str
    total_label: str
    notification: Optional[Notification] = None


# ==================== CATALOG ====================

class ProductView(BaseModel):
    name: str
    price: int
    category: str
    description: str
    matches: bool
