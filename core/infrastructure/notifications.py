"""
Default event subscribers.

Customer notifications are logged; delivery channels (email, SMS) plug in
by subscribing their own handlers to the same events.
"""
from core.domain.event_bus import EventBus
from core.domain.events import (
    OrderCancelledEvent,
    OrderPlacedEvent,
    OrderStatusChangedEvent,
    StockAdjustedEvent,
)
from core.infrastructure.logging import get_logger

logger = get_logger(__name__)


async def notify_order_placed(event: OrderPlacedEvent) -> None:
    logger.info(
        f"📧 Order confirmation for {event.customer_email}: "
        f"{event.order_number} ({event.total_amount} {event.currency})"
    )


async def notify_order_status_changed(event: OrderStatusChangedEvent) -> None:
    logger.info(
        f"📧 Status update for {event.customer_email}: "
        f"{event.order_number} {event.previous_status} -> {event.new_status}"
    )


async def notify_order_cancelled(event: OrderCancelledEvent) -> None:
    reason = f" ({event.reason})" if event.reason else ""
    logger.info(f"📧 Cancellation notice for {event.customer_email}: {event.order_number}{reason}")


async def warn_low_stock(event: StockAdjustedEvent) -> None:
    """Warn when a variant's stock drops to or below its threshold."""
    if not event.is_low_stock:
        return
    logger.warning(
        f"⚠️ Low stock for variant {event.variant_sku}: "
        f"{event.new_quantity} left (threshold {event.low_stock_threshold})"
    )


def register_default_subscribers(bus: EventBus, low_stock_alerts: bool = True) -> None:
    """
    Wire the default notification handlers.

    Args:
        bus: Event bus to subscribe on
        low_stock_alerts: Whether to warn about low variant stock
    """
    bus.subscribe(OrderPlacedEvent, notify_order_placed)
    bus.subscribe(OrderStatusChangedEvent, notify_order_status_changed)
    bus.subscribe(OrderCancelledEvent, notify_order_cancelled)
    if low_stock_alerts:
        bus.subscribe(StockAdjustedEvent, warn_low_stock)
