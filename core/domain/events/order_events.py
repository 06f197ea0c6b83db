"""
Order Domain Events.

Events raised while an order moves through checkout and fulfilment.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from .base import DomainEvent


@dataclass
class OrderPlacedEvent(DomainEvent):
    """
    Checkout completed and an order was created.

    Consumers: customer notifications
    """

    order_id: str = ""
    order_number: str = ""
    customer_email: str = ""
    total_amount: Decimal = Decimal("0.00")
    currency: str = "EUR"
    item_skus: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not self.aggregate_id and self.order_id:
            self.aggregate_id = self.order_id
        super().__post_init__()


@dataclass
class OrderStatusChangedEvent(DomainEvent):
    """Order moved from one status to another."""

    order_id: str = ""
    order_number: str = ""
    customer_email: str = ""
    previous_status: str = ""
    new_status: str = ""
    note: Optional[str] = None

    def __post_init__(self):
        if not self.aggregate_id and self.order_id:
            self.aggregate_id = self.order_id
        super().__post_init__()


@dataclass
class OrderCancelledEvent(DomainEvent):
    """Order was cancelled and its stock released."""

    order_id: str = ""
    order_number: str = ""
    customer_email: str = ""
    reason: Optional[str] = None

    def __post_init__(self):
        if not self.aggregate_id and self.order_id:
            self.aggregate_id = self.order_id
        super().__post_init__()
