"""Tests for the default notification subscribers."""

import logging

import pytest

from core.domain.events.order_events import OrderCancelledEvent, OrderPlacedEvent
from core.domain.events.product_events import StockAdjustedEvent
from core.infrastructure.event_bus import InMemoryEventBus
from core.infrastructure.notifications import register_default_subscribers

LOGGER = "core.infrastructure.notifications"


def stock_event(new_quantity: int) -> StockAdjustedEvent:
    return StockAdjustedEvent(
        product_id="product-1",
        variant_id="variant-1",
        variant_sku="AC-12K-DEFAULT",
        previous_quantity=10,
        new_quantity=new_quantity,
        low_stock_threshold=5,
    )


class TestDefaultSubscribers:
    @pytest.mark.asyncio
    async def test_order_placed_is_notified(self, caplog):
        bus = InMemoryEventBus()
        register_default_subscribers(bus)

        with caplog.at_level(logging.INFO, logger=LOGGER):
            await bus.publish(
                OrderPlacedEvent(
                    order_id="order-1",
                    order_number="ORD-2026-000001",
                    customer_email="buyer@example.com",
                )
            )

        assert "Order confirmation for buyer@example.com: ORD-2026-000001" in caplog.text

    @pytest.mark.asyncio
    async def test_cancellation_includes_reason(self, caplog):
        bus = InMemoryEventBus()
        register_default_subscribers(bus)

        with caplog.at_level(logging.INFO, logger=LOGGER):
            await bus.publish(
                OrderCancelledEvent(
                    order_id="order-1",
                    order_number="ORD-2026-000001",
                    customer_email="buyer@example.com",
                    reason="Ordered twice",
                )
            )

        assert "ORD-2026-000001 (Ordered twice)" in caplog.text

    @pytest.mark.asyncio
    async def test_low_stock_warning(self, caplog):
        bus = InMemoryEventBus()
        register_default_subscribers(bus)

        with caplog.at_level(logging.INFO, logger=LOGGER):
            await bus.publish(stock_event(new_quantity=6))
            await bus.publish(stock_event(new_quantity=5))

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "Low stock for variant AC-12K-DEFAULT: 5 left" in warnings[0].getMessage()

    @pytest.mark.asyncio
    async def test_low_stock_alerts_can_be_disabled(self, caplog):
        bus = InMemoryEventBus()
        register_default_subscribers(bus, low_stock_alerts=False)

        with caplog.at_level(logging.INFO, logger=LOGGER):
            await bus.publish(stock_event(new_quantity=0))

        assert "Low stock" not in caplog.text
