"""Shared pytest fixtures: in-memory database, mediator and catalogue helpers."""

from decimal import Decimal
from typing import Any, Callable, Dict, List
from uuid import uuid4

import pytest
import pytest_asyncio

from core.application.dtos.product_dto import ProductDto
from core.application.features.products import CreateProductCommand
from core.application.mediator import CurrentUser, HandlerContext, Mediator
from core.domain.events.base import DomainEvent
from core.infrastructure.database.config import create_engine, create_session_factory
from core.infrastructure.database.lifecycle import dispose_engine, drop_database, init_database
from core.infrastructure.event_bus import InMemoryEventBus
from core.settings import DatabaseSettings, StoreSettings

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def store_settings() -> StoreSettings:
    """Store settings with the documented defaults."""
    return StoreSettings(
        currency="EUR",
        tax_rate=Decimal("0.20"),
        default_variant_stock=50,
        max_cart_quantity=100,
        installation_min_price=Decimal("200"),
    )


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with all tables."""
    engine = create_engine(DatabaseSettings(database_url=TEST_DATABASE_URL))
    await init_database(engine)

    yield engine

    await drop_database(engine)
    await dispose_engine(engine)


@pytest.fixture
def published_events() -> List[DomainEvent]:
    return []


@pytest.fixture
def event_bus(published_events: List[DomainEvent]) -> InMemoryEventBus:
    """Real event bus recording everything published on it."""
    bus = InMemoryEventBus()

    async def record(event: DomainEvent) -> None:
        published_events.append(event)

    bus.subscribe(DomainEvent, record)
    return bus


@pytest.fixture
def mediator(test_engine, store_settings, event_bus) -> Mediator:
    """Anonymous mediator over the in-memory database."""
    context = HandlerContext(
        session_factory=create_session_factory(test_engine),
        settings=store_settings,
        event_bus=event_bus,
    )
    return Mediator(context)


@pytest.fixture
def admin() -> CurrentUser:
    return CurrentUser(user_id=uuid4(), is_admin=True)


@pytest.fixture
def customer() -> CurrentUser:
    return CurrentUser(user_id=uuid4())


@pytest.fixture
def guest() -> CurrentUser:
    return CurrentUser(session_id=f"guest-{uuid4().hex}")


@pytest.fixture
def as_admin(mediator: Mediator, admin: CurrentUser) -> Mediator:
    return mediator.for_user(admin)


@pytest.fixture
def as_customer(mediator: Mediator, customer: CurrentUser) -> Mediator:
    return mediator.for_user(customer)


@pytest.fixture
def as_guest(mediator: Mediator, guest: CurrentUser) -> Mediator:
    return mediator.for_user(guest)


def product_fields(**overrides: Any) -> Dict[str, Any]:
    """Fields of a valid split air conditioner."""
    fields: Dict[str, Any] = {
        "sku": f"AC-{uuid4().hex[:8].upper()}",
        "name": f"Arctic Split {uuid4().hex[:6]}",
        "base_price": Decimal("1299.00"),
        "category": "air-conditioners",
        "brand": "Daikin",
        "specifications": {"btu": "12000", "seer": "21"},
        "tags": ["Inverter", "quiet"],
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def make_product(as_admin: Mediator) -> Callable:
    """Create a product through the mediator and return its DTO."""

    async def _make(**overrides: Any) -> ProductDto:
        result = await as_admin.send(CreateProductCommand(**product_fields(**overrides)))
        assert result.succeeded, result.error
        return result.value

    return _make
