"""Error envelope and status mapping."""

from uuid import uuid4

from fastapi.testclient import TestClient


def test_validation_errors_are_listed(test_client: TestClient, admin_headers):
    response = test_client.post("/api/admin/products", json={"sku": "", "name": ""}, headers=admin_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["status"] == 400
    assert body["message"] == "Bad Request"
    assert body["errors"] == ["SKU is required", "Product name is required"]


def test_malformed_body(test_client: TestClient, guest_headers):
    response = test_client.post("/api/cart/items", json={"product_id": "not-a-uuid"}, headers=guest_headers)

    assert response.status_code == 400
    assert response.json()["errors"][0].startswith("product_id")


def test_invalid_user_id_is_unauthorized(test_client: TestClient):
    response = test_client.get("/api/wishlist", headers={"X-User-Id": "nobody"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid user id"


def test_anonymous_wishlist_is_unauthorized(test_client: TestClient):
    response = test_client.get("/api/wishlist")

    assert response.status_code == 401
    assert response.json()["detail"] == "User not authenticated"


def test_admin_routes_require_role(test_client: TestClient, customer_headers):
    response = test_client.get("/api/admin/orders", headers=customer_headers)

    assert response.status_code == 403
    assert response.json()["detail"] == "Admin access required"


def test_role_header_without_user_is_not_admin(test_client: TestClient):
    response = test_client.get("/api/admin/orders", headers={"X-User-Role": "admin"})

    assert response.status_code == 403


def test_not_found(test_client: TestClient):
    product = test_client.get("/api/products/no-such-unit")
    price_history = test_client.get(f"/api/price-history/{uuid4()}")

    assert product.status_code == 404
    assert product.json()["detail"] == "Product not found"
    assert price_history.status_code == 404


def test_conflict(test_client: TestClient, create_product, admin_headers):
    product = create_product()

    response = test_client.post(
        "/api/admin/products",
        json={"sku": product["sku"], "name": "Duplicate", "base_price": "10"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "SKU already exists"


def test_shared_product_name_is_not_a_conflict(test_client: TestClient, create_product):
    first = create_product(name="Polar Cassette 18000")
    second = create_product(name="Polar Cassette 18000")

    assert first["slug"] == "polar-cassette-18000"
    assert second["slug"] == "polar-cassette-18000-1"
    assert test_client.get("/api/products/polar-cassette-18000-1").json()["id"] == second["id"]


def test_taken_slug_conflicts(test_client: TestClient, create_product, admin_headers):
    create_product(slug="polar-cassette")

    response = test_client.post(
        "/api/admin/products",
        json={"sku": "PC-NEW", "name": "Polar Cassette", "base_price": "10", "slug": "polar-cassette"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Slug already exists"


def test_malformed_user_id_on_admin_route(test_client: TestClient):
    response = test_client.get(
        "/api/admin/orders", headers={"X-User-Id": "12345", "X-User-Role": "admin"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid user id"


def test_cart_without_identity(test_client: TestClient):
    response = test_client.get("/api/cart")

    assert response.status_code == 400
    assert response.json()["detail"] == "Cart session required"
