"""
Cart Router

Cart page endpoints. Every response is the cart display model: the front end
re-renders the whole cart from it after each action.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from storefront import notifications
from storefront.cart import Cart, CartStore
from storefront.errors import CartStorageError, ERROR_CART_UNAVAILABLE, ERROR_CLEAR_NOT_CONFIRMED
from storefront.logging import get_logger
from storefront.notifications import Notification
from storefront.services.money import format_money, to_number
from .deps import get_request_cart_store
from .models import AddToCartRequest, CartItemRequest, CartView, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(tags=["cart"])


def _format_cart_response(cart: Cart, notification: Optional[Notification] = None) -> dict:
    """
    Build the cart display model.

    Totals are derived from the cart on every call. Each line carries the
    quantities its - and + buttons should request.
    """
    payload = notification.model_dump() if notification else None

    if cart.is_empty:
        return {
            "is_empty": True,
            "items": [],
            "total_items": 0,
            "subtotal": 0,
            "tax": 0,
            "total": 0,
            "subtotal_label": format_money(0),
            "tax_label": format_money(0),
            "total_label": format_money(0),
            "notification": payload,
        }

    items = []
    for item in cart.items:
        items.append({
            "name": item.name,
            "price": item.price,
            "quantity": item.quantity,
            "line_total": to_number(item.line_total),
            "price_label": f"{format_money(item.price)} each",
            "line_total_label": f"Total: {format_money(item.line_total)}",
            "decrement_quantity": item.quantity - 1,
            "increment_quantity": item.quantity + 1,
        })

    return {
        "is_empty": False,
        "items": items,
        "total_items": cart.total_items,
        "subtotal": to_number(cart.subtotal),
        "tax": to_number(cart.tax),
        "total": to_number(cart.grand_total),
        "subtotal_label": format_money(cart.subtotal),
        "tax_label": format_money(cart.tax),
        "total_label": format_money(cart.grand_total),
        "notification": payload,
    }


def _storage_unavailable() -> HTTPException:
    return HTTPException(
        status_code=503,
        detail={
            "message": ERROR_CART_UNAVAILABLE,
            "notification": notifications.cart_unavailable().model_dump(),
        },
    )


@router.get("/cart", response_model=CartView)
def get_cart(store: CartStore = Depends(get_request_cart_store)):
    """Display the current cart. Storage failures render as an empty cart."""
    try:
        cart = store.load_cart()
    except CartStorageError:
        logger.warning("Cart storage unavailable, rendering empty cart")
        return _format_cart_response(Cart(), notifications.cart_unavailable())
    return _format_cart_response(cart)


@router.post("/cart/add", response_model=CartView)
def add_to_cart(request: AddToCartRequest, store: CartStore = Depends(get_request_cart_store)):
    """Add one unit of a catalog entry."""
    try:
        cart = store.add_item(request.name, request.price)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except CartStorageError:
        raise _storage_unavailable()

    return _format_cart_response(cart, notifications.item_added(request.name))


@router.patch("/cart/item", response_model=CartView)
def update_cart_item(request: UpdateCartItemRequest, store: CartStore = Depends(get_request_cart_store)):
    """Set a line item's quantity (values below 1 become 1)."""
    try:
        cart = store.set_quantity(request.name, request.quantity)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except CartStorageError:
        raise _storage_unavailable()

    return _format_cart_response(cart)


@router.post("/cart/item/increment", response_model=CartView)
def increment_cart_item(request: CartItemRequest, store: CartStore = Depends(get_request_cart_store)):
    """The + button."""
    try:
        cart = store.change_quantity(request.name, 1)
    except CartStorageError:
        raise _storage_unavailable()

    return _format_cart_response(cart)


@router.post("/cart/item/decrement", response_model=CartView)
def decrement_cart_item(request: CartItemRequest, store: CartStore = Depends(get_request_cart_store)):
    """The - button. Stops at 1; use remove to drop the item."""
    try:
        cart = store.change_quantity(request.name, -1)
    except CartStorageError:
        raise _storage_unavailable()

    return _format_cart_response(cart)


@router.delete("/cart/item", response_model=CartView)
def remove_cart_item(name: str, store: CartStore = Depends(get_request_cart_store)):
    """Remove a line item."""
    try:
        cart = store.remove_item(name)
    except CartStorageError:
        raise _storage_unavailable()

    return _format_cart_response(cart, notifications.item_removed())


@router.delete("/cart", response_model=CartView)
def clear_cart(confirm: bool = False, store: CartStore = Depends(get_request_cart_store)):
    """Empty the cart. The shopper has to confirm first."""
    if not confirm:
        raise HTTPException(status_code=400, detail=ERROR_CLEAR_NOT_CONFIRMED)

    try:
        store.clear_cart()
    except CartStorageError:
        raise _storage_unavailable()

    return _format_cart_response(Cart(), notifications.cart_cleared())


@router.post("/cart/checkout", response_model=CartView)
def start_checkout(store: CartStore = Depends(get_request_cart_store)):
    """Checkout is not wired to payments yet; acknowledge and show the cart."""
    try:
        cart = store.load_cart()
    except CartStorageError:
        raise _storage_unavailable()

    return _format_cart_response(cart, notifications.checkout_started())
