"""Pytest configuration and fixtures"""
import os
from typing import Optional

import pytest
from fastapi import Header
from fastapi.testclient import TestClient

# Set test environment variables
os.environ.setdefault("CART_STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from storefront.cart import CartStore, InMemoryStorage
from storefront.db import StorageKeys


@pytest.fixture
def storage():
    """Empty in-memory key-value storage"""
    return InMemoryStorage()


@pytest.fixture
def store(storage):
    """Cart store under the default key"""
    return CartStore(storage, key="cart")


@pytest.fixture
def sample_cart_json():
    """Persisted cart with two line items"""
    return (
        '[{"name": "Gaming Mouse", "price": 100, "quantity": 2}, '
        '{"name": "Minecraft", "price": 50, "quantity": 1}]'
    )


@pytest.fixture
def client(storage):
    """Test client whose carts live in the test's in-memory storage"""
    from api.index import app
    from storefront.routers.deps import get_request_cart_store

    stores = {}

    def _store_for_session(x_cart_session: Optional[str] = Header(default=None)) -> CartStore:
        key = StorageKeys.cart_key(x_cart_session)
        if key not in stores:
            stores[key] = CartStore(storage, key=key)
        return stores[key]

    app.dependency_overrides[get_request_cart_store] = _store_for_session
    yield TestClient(app)
    app.dependency_overrides.clear()
