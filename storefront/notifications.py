"""
Toast notifications attached to cart responses.

The front end shows the message in the corner of the page and removes it
after ``dismiss_after_ms``. Nothing here is stored.
"""
from typing import Literal

from pydantic import BaseModel

NotificationType = Literal["success", "error", "info"]

# Toast lifetime on screen (slide in, hold, slide out)
DEFAULT_DISMISS_MS = 4000


class Notification(BaseModel):
    message: str
    type: NotificationType = "info"
    dismiss_after_ms: int = DEFAULT_DISMISS_MS


def item_added(name: str) -> Notification:
    return Notification(message=f"✅ {name} added to cart", type="success")


def item_removed() -> Notification:
    return Notification(message="🗑️ Item removed", type="info")


def cart_cleared() -> Notification:
    return Notification(message="🗑️ Cart cleared!", type="success")


def checkout_started() -> Notification:
    return Notification(message="💳 Proceeding to checkout...", type="info")


def cart_unavailable() -> Notification:
    return Notification(message="⚠️ Cart is unavailable right now. Please try again.", type="error")
