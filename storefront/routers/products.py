"""
Catalog Router

Product listing with the search filter applied.
"""
from typing import List

from fastapi import APIRouter

from storefront.catalog import CATALOG, filter_products
from storefront.logging import get_logger, sanitize_string_for_logging
from .models import ProductView

logger = get_logger(__name__)

router = APIRouter(tags=["catalog"])


@router.get("/products", response_model=List[ProductView])
def get_products(q: str = ""):
    """All catalog entries, each flagged with whether it matches ``q``."""
    if q:
        logger.debug(f"Catalog search: {sanitize_string_for_logging(q)}")
    return filter_products(CATALOG, q)
