"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, FrozenSet, List, Optional
from uuid import UUID, uuid4

from ..clock import utcnow
from ..enums import OrderStatus
from ..events.base import DomainEvent
from ..events.order_events import (
    OrderCancelledEvent,
    OrderPlacedEvent,
    OrderStatusChangedEvent,
)
from ..exceptions import InvalidOrderTransitionError
from ..value_objects import Money, OrderNumber
from .rules import EventRecorder, optional_text, required_text


ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset(
        {OrderStatus.PROCESSING, OrderStatus.REFUNDED, OrderStatus.CANCELLED}
    ),
    OrderStatus.PROCESSING: frozenset(
        {OrderStatus.SHIPPED, OrderStatus.REFUNDED, OrderStatus.CANCELLED}
    ),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.RETURNED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.RETURNED}),
    OrderStatus.RETURNED: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.REFUNDED: frozenset(),
}

CANCELLABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.PAID})
REFUNDABLE_STATUSES = frozenset(
    {OrderStatus.PAID, OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED}
)


@dataclass
class OrderItem:
    """Individual line item within an order (product data is snapshotted)."""
    product_id: UUID
    variant_id: UUID
    product_name: str
    variant_name: str
    sku: str
    quantity: int
    unit_price: Money
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        if self.quantity <= 0:
            raise ValueError("Quantity must be greater than zero")
        if self.unit_price.is_negative():
            raise ValueError("Unit price cannot be negative")

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass
class OrderTimelineEntry:
    """One step of the order's status history, shown to the customer."""
    status: OrderStatus
    description: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    id: UUID = field(default_factory=uuid4)


@dataclass
class Order(EventRecorder):
    """
    Order aggregate root.

    Amounts are Money in the order currency; ``total`` is always
    subtotal + shipping + tax - discount.
    """
    order_number: OrderNumber
    customer_email: str
    currency: str = "EUR"
    user_id: Optional[UUID] = None
    customer_phone: Optional[str] = None
    status: OrderStatus = OrderStatus.PENDING
    items: List[OrderItem] = field(default_factory=list)
    timeline: List[OrderTimelineEntry] = field(default_factory=list)
    shipping_address: Dict[str, Any] = field(default_factory=dict)
    billing_address: Optional[Dict[str, Any]] = None
    shipping_method: Optional[str] = None
    tracking_number: Optional[str] = None
    subtotal: Optional[Money] = None
    shipping_cost: Optional[Money] = None
    tax_amount: Optional[Money] = None
    discount_amount: Optional[Money] = None
    paid_at: Optional[datetime] = None
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    notes: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    _domain_events: List[DomainEvent] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        self.currency = self.currency.upper()
        self.customer_email = required_text(self.customer_email, "Customer email").lower()
        self.customer_phone = optional_text(self.customer_phone, "Customer phone", 30)
        for name in ("subtotal", "shipping_cost", "tax_amount", "discount_amount"):
            if getattr(self, name) is None:
                setattr(self, name, Money.zero(self.currency))

    @classmethod
    def place(
        cls,
        order_number: OrderNumber,
        customer_email: str,
        items: List[OrderItem],
        shipping_address: Dict[str, Any],
        shipping_method: str,
        shipping_cost: Money,
        tax_amount: Money,
        user_id: Optional[UUID] = None,
        customer_phone: Optional[str] = None,
        billing_address: Optional[Dict[str, Any]] = None,
        notes: Optional[str] = None,
        currency: str = "EUR",
    ) -> "Order":
        """Create a pending order from checkout data and record OrderPlacedEvent."""
        order = cls(
            order_number=order_number,
            customer_email=customer_email,
            currency=currency,
            user_id=user_id,
            customer_phone=customer_phone,
            shipping_address=dict(shipping_address),
            billing_address=dict(billing_address) if billing_address else None,
            shipping_method=shipping_method,
            notes=optional_text(notes, "Notes"),
        )
        for item in items:
            order.add_item(item)
        order.set_shipping_cost(shipping_cost)
        order.set_tax_amount(tax_amount)
        order.timeline.append(
            OrderTimelineEntry(status=OrderStatus.PENDING, description="Order placed")
        )
        order._record_event(
            OrderPlacedEvent(
                order_id=str(order.id),
                order_number=str(order.order_number),
                customer_email=order.customer_email,
                total_amount=order.total.amount,
                currency=order.currency,
                item_skus=[item.sku for item in order.items],
                user_id=str(user_id) if user_id else None,
            )
        )
        return order

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------

    @property
    def total(self) -> Money:
        return self.subtotal + self.shipping_cost + self.tax_amount - self.discount_amount

    def add_item(self, item: OrderItem) -> None:
        """Add item and recalculate the subtotal."""
        if item.unit_price.currency != self.currency:
            raise ValueError(
                f"Item currency {item.unit_price.currency} does not match order currency {self.currency}"
            )
        self.items.append(item)
        self._recalculate_subtotal()

    def _recalculate_subtotal(self) -> None:
        subtotal = Money.zero(self.currency)
        for item in self.items:
            subtotal = subtotal + item.line_total
        self.subtotal = subtotal
        self.touch()

    def set_shipping_cost(self, amount: Money) -> None:
        if amount.is_negative():
            raise ValueError("Shipping cost cannot be negative")
        self.shipping_cost = amount
        self.touch()

    def set_tax_amount(self, amount: Money) -> None:
        if amount.is_negative():
            raise ValueError("Tax amount cannot be negative")
        self.tax_amount = amount
        self.touch()

    def set_discount_amount(self, amount: Money) -> None:
        if amount.is_negative():
            raise ValueError("Discount amount cannot be negative")
        self.discount_amount = amount
        self.touch()

    # ------------------------------------------------------------------
    # Status workflow
    # ------------------------------------------------------------------

    @property
    def can_be_cancelled(self) -> bool:
        return self.status in CANCELLABLE_STATUSES

    @property
    def can_be_refunded(self) -> bool:
        return self.status in REFUNDABLE_STATUSES

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.status]

    def set_status(
        self,
        target: OrderStatus,
        description: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """
        Move the order to ``target``.

        Raises:
            InvalidOrderTransitionError: If the transition is not allowed
        """
        if not self.can_transition_to(target):
            raise InvalidOrderTransitionError(self.status.value, target.value)

        previous = self.status
        self.status = target
        now = utcnow()
        if target == OrderStatus.PAID:
            self.paid_at = now
        elif target == OrderStatus.SHIPPED:
            self.shipped_at = now
        elif target == OrderStatus.DELIVERED:
            self.delivered_at = now
        elif target == OrderStatus.CANCELLED:
            self.cancelled_at = now

        self.timeline.append(
            OrderTimelineEntry(
                status=target,
                description=description or f"Order status changed to {target.value}",
                notes=notes,
                created_at=now,
            )
        )
        self.touch()
        self._record_event(
            OrderStatusChangedEvent(
                order_id=str(self.id),
                order_number=str(self.order_number),
                customer_email=self.customer_email,
                previous_status=previous.value,
                new_status=target.value,
                note=notes,
            )
        )

    def cancel(self, reason: Optional[str] = None) -> None:
        """Cancel a pending or paid order; stock release is the caller's job."""
        self.cancellation_reason = optional_text(reason, "Cancellation reason")
        self.set_status(
            OrderStatus.CANCELLED,
            description="Order cancelled",
            notes=self.cancellation_reason,
        )
        self._record_event(
            OrderCancelledEvent(
                order_id=str(self.id),
                order_number=str(self.order_number),
                customer_email=self.customer_email,
                reason=self.cancellation_reason,
            )
        )

    def append_note(self, note: str, timestamp: Optional[datetime] = None) -> None:
        stamp = (timestamp or utcnow()).strftime("%Y-%m-%d %H:%M")
        line = f"[{stamp}] {note}"
        self.notes = f"{self.notes}\n{line}" if self.notes else line
        self.touch()

    def set_tracking_number(self, tracking_number: Optional[str]) -> None:
        self.tracking_number = optional_text(tracking_number, "Tracking number", 100)
        self.touch()

    def set_shipping_method(self, shipping_method: Optional[str]) -> None:
        self.shipping_method = optional_text(shipping_method, "Shipping method", 50)
        self.touch()

    def touch(self) -> None:
        self.updated_at = utcnow()
