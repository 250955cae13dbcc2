"""API Router.

Combines the cart and catalog routers under the /api prefix.
"""

from fastapi import APIRouter

from .cart import router as cart_router
from .products import router as products_router

router = APIRouter(prefix="/api")

router.include_router(products_router)
router.include_router(cart_router)

__all__ = ["router"]
