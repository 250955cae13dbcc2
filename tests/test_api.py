"""Tests for API endpoints"""
from unittest.mock import Mock

import pytest

from storefront.cart import CartStore


def _add(client, name, price, session=None):
    headers = {"X-Cart-Session": session} if session else {}
    return client.post("/api/cart/add", json={"name": name, "price": price}, headers=headers)


def test_health_check(client):
    """Test health check endpoint"""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_get_empty_cart(client):
    response = client.get("/api/cart")

    assert response.status_code == 200
    data = response.json()
    assert data["is_empty"] is True
    assert data["items"] == []
    assert data["total_label"] == "R0"
    assert data["notification"] is None


def test_add_to_cart(client):
    response = _add(client, "Gaming Mouse", 799)

    assert response.status_code == 200
    data = response.json()
    assert data["is_empty"] is False
    assert data["items"][0]["name"] == "Gaming Mouse"
    assert data["items"][0]["quantity"] == 1
    assert data["notification"]["type"] == "success"
    assert data["notification"]["message"] == "✅ Gaming Mouse added to cart"


def test_add_twice_keeps_first_price(client):
    _add(client, "Mouse", 500)
    response = _add(client, "Mouse", 999)

    items = response.json()["items"]
    assert len(items) == 1
    assert items[0]["price"] == 500
    assert items[0]["quantity"] == 2


def test_cart_totals_and_labels(client):
    _add(client, "A", 100)
    _add(client, "A", 100)
    _add(client, "B", 50)

    data = client.get("/api/cart").json()

    assert (data["subtotal"], data["tax"], data["total"]) == (250, 38, 288)
    assert data["subtotal_label"] == "R250"
    assert data["tax_label"] == "R38"
    assert data["total_label"] == "R288"
    assert data["total_items"] == 3

    line = data["items"][0]
    assert line["line_total"] == 200
    assert line["price_label"] == "R100 each"
    assert line["line_total_label"] == "Total: R200"
    assert line["decrement_quantity"] == 1
    assert line["increment_quantity"] == 3


@pytest.mark.parametrize("payload", [
    {"name": "", "price": 100},
    {"name": "Mouse", "price": -1},
    {"name": "Mouse"},
])
def test_add_to_cart_invalid_payload(client, payload):
    response = client.post("/api/cart/add", json=payload)
    assert response.status_code == 422


def test_update_quantity(client):
    _add(client, "Mouse", 500)

    response = client.patch("/api/cart/item", json={"name": "Mouse", "quantity": 5})

    assert response.status_code == 200
    assert response.json()["items"][0]["quantity"] == 5


@pytest.mark.parametrize("quantity", [0, -5])
def test_update_quantity_clamps_to_one(client, quantity):
    _add(client, "Mouse", 500)
    _add(client, "Mouse", 500)

    response = client.patch("/api/cart/item", json={"name": "Mouse", "quantity": quantity})

    items = response.json()["items"]
    assert len(items) == 1
    assert items[0]["quantity"] == 1


def test_update_missing_item_is_noop(client):
    _add(client, "Mouse", 500)

    response = client.patch("/api/cart/item", json={"name": "Keyboard", "quantity": 3})

    assert response.status_code == 200
    assert [item["name"] for item in response.json()["items"]] == ["Mouse"]


def test_increment_and_decrement(client):
    _add(client, "Mouse", 500)

    response = client.post("/api/cart/item/increment", json={"name": "Mouse"})
    assert response.json()["items"][0]["quantity"] == 2

    client.post("/api/cart/item/decrement", json={"name": "Mouse"})
    response = client.post("/api/cart/item/decrement", json={"name": "Mouse"})
    assert response.json()["items"][0]["quantity"] == 1


def test_remove_item(client):
    _add(client, "A", 1)
    _add(client, "B", 1)

    response = client.delete("/api/cart/item", params={"name": "A"})

    assert response.status_code == 200
    data = response.json()
    assert [item["name"] for item in data["items"]] == ["B"]
    assert data["notification"]["message"] == "🗑️ Item removed"


def test_remove_last_item_shows_empty_state(client):
    _add(client, "A", 1)

    response = client.delete("/api/cart/item", params={"name": "A"})

    assert response.json()["is_empty"] is True


def test_clear_requires_confirmation(client):
    _add(client, "Mouse", 500)

    response = client.delete("/api/cart")

    assert response.status_code == 400
    assert client.get("/api/cart").json()["is_empty"] is False


def test_clear_cart(client):
    _add(client, "Mouse", 500)

    response = client.delete("/api/cart", params={"confirm": "true"})

    assert response.status_code == 200
    data = response.json()
    assert data["is_empty"] is True
    assert data["notification"]["message"] == "🗑️ Cart cleared!"
    assert client.get("/api/cart").json()["is_empty"] is True


def test_checkout(client):
    _add(client, "Mouse", 500)

    response = client.post("/api/cart/checkout")

    assert response.status_code == 200
    data = response.json()
    assert data["notification"]["type"] == "info"
    assert data["total"] == 575


def test_sessions_have_separate_carts(client):
    _add(client, "Mouse", 500, session="alice")

    shared = client.get("/api/cart").json()
    other = client.get("/api/cart", headers={"X-Cart-Session": "bob"}).json()
    own = client.get("/api/cart", headers={"X-Cart-Session": "alice"}).json()

    assert shared["is_empty"] is True
    assert other["is_empty"] is True
    assert own["items"][0]["name"] == "Mouse"


def test_corrupted_storage_renders_empty_cart(client, storage):
    storage.set("cart", "{broken")

    response = client.get("/api/cart")

    assert response.status_code == 200
    assert response.json()["is_empty"] is True


@pytest.fixture
def broken_client(client):
    """Client whose cart backend raises on every call"""
    from api.index import app
    from storefront.routers.deps import get_request_cart_store

    broken = Mock()
    broken.get.side_effect = ConnectionError("redis down")
    broken.delete.side_effect = ConnectionError("redis down")
    app.dependency_overrides[get_request_cart_store] = lambda: CartStore(broken)
    return client


def test_storage_failure_does_not_break_cart_page(broken_client):
    response = broken_client.get("/api/cart")

    assert response.status_code == 200
    data = response.json()
    assert data["is_empty"] is True
    assert data["notification"]["type"] == "error"


def test_storage_failure_on_mutation(broken_client):
    response = broken_client.post("/api/cart/add", json={"name": "Mouse", "price": 500})

    assert response.status_code == 503
    assert response.json()["detail"]["notification"]["type"] == "error"

    response = broken_client.delete("/api/cart", params={"confirm": "true"})
    assert response.status_code == 503


def test_get_products(client):
    response = client.get("/api/products")

    assert response.status_code == 200
    products = response.json()
    assert len(products) > 0
    assert all(product["matches"] for product in products)


def test_search_products(client):
    response = client.get("/api/products", params={"q": "MOUSE"})

    products = response.json()
    matching = [product["name"] for product in products if product["matches"]]
    assert matching == ["Gaming Mouse"]
    assert len(products) > len(matching)


@pytest.mark.parametrize("price", [1e308, 10 ** 30])
def test_add_to_cart_rejects_out_of_range_price(client, price):
    response = client.post("/api/cart/add", json={"name": "A", "price": price})

    assert response.status_code == 422
    assert client.get("/api/cart").json()["is_empty"] is True


@pytest.mark.parametrize("raw", [
    '[{"name": "A", "price": NaN, "quantity": 1}]',
    '[{"name": "A", "price": 1e400, "quantity": 1}]',
    '[{"name": "A", "price": 1e30, "quantity": 1}]',
    pytest.param("[" * 100000, id="deeply-nested"),
])
def test_unreadable_stored_cart_renders_empty(client, storage, raw):
    storage.set("cart", raw)

    response = client.get("/api/cart")

    assert response.status_code == 200
    data = response.json()
    assert data["is_empty"] is True
    assert data["total_label"] == "R0"
