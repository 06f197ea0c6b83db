"""Domain events for the event store and event bus."""
from .base import DomainEvent
from .order_events import (
    OrderCancelledEvent,
    OrderPlacedEvent,
    OrderStatusChangedEvent,
)
from .product_events import ProductPriceChangedEvent, StockAdjustedEvent

__all__ = [
    "DomainEvent",
    "OrderCancelledEvent",
    "OrderPlacedEvent",
    "OrderStatusChangedEvent",
    "ProductPriceChangedEvent",
    "StockAdjustedEvent",
]
