"""Integration tests for the storefront endpoints."""

from decimal import Decimal

from fastapi.testclient import TestClient

SHIPPING_ADDRESS = {
    "first_name": "Jane",
    "last_name": "Doe",
    "address_line1": "1 Main Street",
    "city": "Lyon",
    "postal_code": "69001",
    "country": "FR",
}


def test_health(test_client: TestClient):
    response = test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_admin_creates_product_visible_in_catalog(test_client: TestClient, create_product):
    product = create_product(name="Arctic Split Pro", tags=["Inverter"])

    listing = test_client.get("/api/products", params={"brand": "daikin"}).json()
    detail = test_client.get("/api/products/arctic-split-pro")

    assert product["slug"] == "arctic-split-pro"
    assert product["variants"][0]["sku"] == f"{product['sku']}-DEFAULT"
    assert listing["total_count"] == 1
    assert listing["items"][0]["tags"] == ["inverter"]
    assert detail.status_code == 200
    assert Decimal(detail.json()["base_price"]) == Decimal("1299.00")


def test_filters_and_extras(test_client: TestClient, create_product):
    product = create_product(base_price="1000.00")

    filters = test_client.get("/api/products/filters").json()
    installation = test_client.get(f"/api/installation/options/{product['id']}").json()
    financing = test_client.get(f"/api/financing/products/{product['id']}").json()
    history = test_client.get(f"/api/price-history/{product['id']}").json()

    assert filters["brands"] == [{"name": "Daikin", "count": 1}]
    assert [Decimal(o["price"]) for o in installation["options"]] == [
        Decimal("150.00"), Decimal("250.00"), Decimal("350.00"),
    ]
    assert [o["months"] for o in financing["offers"]] == [6, 12, 24, 36]
    assert [p["reason"] for p in history["points"]] == ["Initial"]


def test_guest_cart_and_checkout(test_client: TestClient, create_product, guest_headers):
    product = create_product(base_price="1000.00")

    added = test_client.post(
        "/api/cart/items", json={"product_id": product["id"], "quantity": 2}, headers=guest_headers
    )
    assert added.status_code == 200, added.text
    assert Decimal(added.json()["total"]) == Decimal("2400.00")

    order = test_client.post(
        "/api/orders",
        json={
            "customer_email": "jane@example.com",
            "shipping_address": SHIPPING_ADDRESS,
            "shipping_method": "standard",
        },
        headers=guest_headers,
    )
    assert order.status_code == 201, order.text
    body = order.json()
    assert body["order_number"].startswith("ORD-")
    assert body["status"] == "Pending"
    assert Decimal(body["total"]) == Decimal("2405.99")

    cart = test_client.get("/api/cart", headers=guest_headers).json()
    detail = test_client.get(f"/api/products/{product['slug']}").json()
    assert cart["items"] == []
    assert detail["variants"][0]["stock_quantity"] == 48


def test_customer_order_history_and_cancel(test_client: TestClient, create_product, customer_headers):
    product = create_product()
    test_client.post("/api/cart/items", json={"product_id": product["id"]}, headers=customer_headers)
    order = test_client.post(
        "/api/orders",
        json={"customer_email": "max@example.com", "shipping_address": SHIPPING_ADDRESS, "shipping_method": "express"},
        headers=customer_headers,
    ).json()

    history = test_client.get("/api/orders", params={"status": "pending"}, headers=customer_headers).json()
    by_number = test_client.get(f"/api/orders/number/{order['order_number']}", headers=customer_headers)
    cancelled = test_client.post(
        f"/api/orders/{order['id']}/cancel", json={"reason": "Found a better deal"}, headers=customer_headers
    )

    assert history["total_count"] == 1
    assert by_number.json()["id"] == order["id"]
    assert cancelled.json()["status"] == "Cancelled"


def test_admin_order_workflow(test_client: TestClient, create_product, customer_headers, admin_headers):
    product = create_product()
    test_client.post("/api/cart/items", json={"product_id": product["id"]}, headers=customer_headers)
    order = test_client.post(
        "/api/orders",
        json={"customer_email": "max@example.com", "shipping_address": SHIPPING_ADDRESS, "shipping_method": "standard"},
        headers=customer_headers,
    ).json()

    paid = test_client.put(f"/api/admin/orders/{order['id']}/status", json={"status": "Paid"}, headers=admin_headers)
    events = test_client.get(f"/api/admin/orders/{order['id']}/events", headers=admin_headers).json()

    assert paid.json()["status"] == "Paid"
    assert [e["event_type"] for e in events] == ["OrderPlacedEvent", "OrderStatusChangedEvent"]


def test_wishlist_persists_between_requests(test_client: TestClient, create_product, customer_headers):
    product = create_product()

    test_client.post("/api/wishlist/items", json={"product_id": product["id"]}, headers=customer_headers)
    shared = test_client.put("/api/wishlist/visibility", json={"is_public": True}, headers=customer_headers).json()
    public_view = test_client.get(f"/api/wishlist/shared/{shared['share_token']}")

    assert shared["item_count"] == 1
    assert public_view.status_code == 200
    assert public_view.json()["items"][0]["product_id"] == product["id"]


def test_addresses(test_client: TestClient, customer_headers):
    payload = {
        "full_name": "Jane Doe",
        "address_line1": "1 Main Street",
        "city": "Lyon",
        "postal_code": "69001",
        "country": "France",
        "country_code": "FR",
        "phone": "+33 4 00 00 00 00",
    }

    created = test_client.post("/api/addresses", json=payload, headers=customer_headers)
    listed = test_client.get("/api/addresses", headers=customer_headers).json()
    deleted = test_client.delete(f"/api/addresses/{created.json()['id']}", headers=customer_headers)

    assert created.status_code == 201, created.text
    assert created.json()["is_default"] is True
    assert len(listed) == 1
    assert deleted.status_code == 204


def test_questions_flow(test_client: TestClient, create_product, admin_headers):
    product = create_product()

    asked = test_client.post(
        "/api/questions",
        json={"product_id": product["id"], "question_text": "Is the outdoor unit noisy at night?"},
    )
    question_id = asked.json()["id"]
    test_client.put(f"/api/admin/questions/{question_id}/status", json={"status": "Approved"}, headers=admin_headers)
    answered = test_client.post(
        f"/api/questions/{question_id}/answers",
        json={"answer_text": "It runs at 19 dB in night mode.", "is_official": True},
        headers=admin_headers,
    )
    listing = test_client.get(f"/api/questions/product/{product['id']}").json()

    assert asked.status_code == 201
    assert answered.status_code == 201
    assert listing["total_questions"] == 1
    assert listing["questions"][0]["answers"][0]["answerer_name"] == "ClimaSite Support"
