"""Pytest configuration and fixtures for integration tests."""

from typing import Dict, Generator
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from apps.api.main import create_app
from core.settings import AppSettings, DatabaseSettings, StoreSettings

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_client() -> Generator[TestClient, None, None]:
    """API client over a fresh in-memory database (lifespan included)."""
    settings = AppSettings(
        database=DatabaseSettings(database_url=TEST_DATABASE_URL),
        store=StoreSettings(tax_rate="0.20", default_variant_stock=50),
    )
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return {"X-User-Id": str(uuid4()), "X-User-Role": "admin"}


@pytest.fixture
def customer_headers() -> Dict[str, str]:
    return {"X-User-Id": str(uuid4())}


@pytest.fixture
def guest_headers() -> Dict[str, str]:
    return {"X-Session-Id": f"guest-{uuid4().hex}"}


@pytest.fixture
def create_product(test_client: TestClient, admin_headers: Dict[str, str]):
    """POST a product through the admin API and return the response body."""

    def _create(**overrides) -> Dict:
        payload = {
            "sku": f"AC-{uuid4().hex[:8].upper()}",
            "name": f"Arctic Split {uuid4().hex[:6]}",
            "base_price": "1299.00",
            "category": "air-conditioners",
            "brand": "Daikin",
            "specifications": {"btu": "12000"},
        }
        payload.update(overrides)
        response = test_client.post("/api/admin/products", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
