"""Domain enums."""

from .address_type import AddressType
from .moderation import ModerationStatus, PriceChangeReason
from .order_status import OrderStatus

__all__ = ["AddressType", "ModerationStatus", "OrderStatus", "PriceChangeReason"]
