"""Domain layer - pure domain models and interfaces."""

from .entities import Address, Cart, Order, OrderItem, Product, ProductVariant, Wishlist
from .enums import AddressType, ModerationStatus, OrderStatus, PriceChangeReason
from .exceptions import (
    ConflictException,
    DomainException,
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
    ValidationException,
)
from .value_objects import ExecutionID, Money, OrderNumber

__all__ = [
    "Address",
    "AddressType",
    "Cart",
    "ConflictException",
    "DomainException",
    "ExecutionID",
    "ForbiddenException",
    "ModerationStatus",
    "Money",
    "NotFoundException",
    "Order",
    "OrderItem",
    "OrderNumber",
    "OrderStatus",
    "PriceChangeReason",
    "Product",
    "ProductVariant",
    "UnauthorizedException",
    "ValidationException",
    "Wishlist",
]
