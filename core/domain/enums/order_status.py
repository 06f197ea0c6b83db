"""
Order Status Enum.

Lifecycle states of a storefront order.
"""
from enum import Enum
from typing import Optional


class OrderStatus(str, Enum):
    """Order status values."""

    PENDING = "Pending"
    PAID = "Paid"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"
    RETURNED = "Returned"

    @classmethod
    def parse(cls, value: str) -> Optional["OrderStatus"]:
        """Case-insensitive lookup by value; None when unknown."""
        if not value:
            return None
        lowered = value.strip().lower()
        for status in cls:
            if status.value.lower() == lowered:
                return status
        return None
