"""
Shopping cart aggregate.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, List, Optional
from uuid import UUID, uuid4

from ..clock import utcnow
from .rules import to_decimal

DEFAULT_EXPIRY_DAYS = 7


@dataclass
class CartItem:
    """A variant and quantity held in a cart at a captured unit price."""
    product_id: UUID
    variant_id: UUID
    quantity: int
    unit_price: Decimal
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)
        if self.quantity <= 0:
            raise ValueError("Quantity must be greater than zero")
        if self.unit_price < 0:
            raise ValueError("Unit price cannot be negative")

    def set_quantity(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than zero")
        self.quantity = quantity

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class Cart:
    """
    Cart owned by a signed-in user or by an anonymous session.

    Items are unique per variant: adding a variant that is already in the
    cart increases its quantity.
    """
    user_id: Optional[UUID] = None
    session_id: Optional[str] = None
    items: List[CartItem] = field(default_factory=list)
    expires_at: Optional[datetime] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.user_id is None and not self.session_id:
            raise ValueError("Cart must have either UserId or SessionId")
        if self.expires_at is None:
            self.expires_at = utcnow() + timedelta(days=DEFAULT_EXPIRY_DAYS)

    @classmethod
    def open(
        cls,
        user_id: Optional[UUID] = None,
        session_id: Optional[str] = None,
        expiry_days: int = DEFAULT_EXPIRY_DAYS,
    ) -> "Cart":
        """New cart for a user or, if there is none, a guest session."""
        if user_id is not None:
            session_id = None
        return cls(
            user_id=user_id,
            session_id=session_id,
            expires_at=utcnow() + timedelta(days=expiry_days),
        )

    def extend_expiration(self, days: int = DEFAULT_EXPIRY_DAYS) -> None:
        self.expires_at = utcnow() + timedelta(days=days)
        self.touch()

    def get_item(self, variant_id: UUID) -> Optional[CartItem]:
        return next((i for i in self.items if i.variant_id == variant_id), None)

    def find_item(self, item_id: UUID) -> Optional[CartItem]:
        return next((i for i in self.items if i.id == item_id), None)

    def add_item(self, product_id: UUID, variant_id: UUID, quantity: int, unit_price: Decimal) -> CartItem:
        existing = self.get_item(variant_id)
        if existing is not None:
            existing.set_quantity(existing.quantity + quantity)
            self.touch()
            return existing

        item = CartItem(
            product_id=product_id,
            variant_id=variant_id,
            quantity=quantity,
            unit_price=unit_price,
        )
        self.items.append(item)
        self.touch()
        return item

    def remove_item(self, variant_id: UUID) -> None:
        item = self.get_item(variant_id)
        if item is not None:
            self.items.remove(item)
            self.touch()

    def update_item_quantity(self, variant_id: UUID, quantity: int) -> None:
        """Set a variant's quantity; zero or less removes the line."""
        item = self.get_item(variant_id)
        if item is None:
            return
        if quantity <= 0:
            self.items.remove(item)
        else:
            item.set_quantity(quantity)
        self.touch()

    def merge_from(self, other: "Cart", available_stock: Callable[[CartItem], Optional[int]]) -> int:
        """
        Move the lines of ``other`` into this cart.

        ``available_stock`` returns the stock of an item's variant, or None
        when the variant can no longer be bought (the line is skipped).
        Merged quantities never exceed the available stock.

        Returns:
            Number of lines merged
        """
        merged = 0
        for guest_item in other.items:
            stock = available_stock(guest_item)
            if stock is None or stock <= 0:
                continue

            existing = self.get_item(guest_item.variant_id)
            if existing is not None:
                existing.set_quantity(max(1, min(existing.quantity + guest_item.quantity, stock)))
            else:
                self.items.append(
                    CartItem(
                        product_id=guest_item.product_id,
                        variant_id=guest_item.variant_id,
                        quantity=min(guest_item.quantity, stock),
                        unit_price=guest_item.unit_price,
                    )
                )
            merged += 1

        if merged:
            self.touch()
        return merged

    def clear(self) -> None:
        self.items.clear()
        self.touch()

    @property
    def total_items(self) -> int:
        return sum(i.quantity for i in self.items)

    @property
    def subtotal(self) -> Decimal:
        return sum((i.line_total for i in self.items), Decimal("0.00"))

    @property
    def is_expired(self) -> bool:
        return self.expires_at is not None and utcnow() > self.expires_at

    @property
    def is_empty(self) -> bool:
        return not self.items

    def touch(self) -> None:
        self.updated_at = utcnow()
