"""Wishlist aggregate."""
import base64
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from ..clock import utcnow
from .rules import optional_text


def generate_share_token() -> str:
    """URL-safe base64 of a random UUID, without padding (22 characters)."""
    return base64.urlsafe_b64encode(uuid4().bytes).decode("ascii").rstrip("=")


@dataclass
class WishlistItem:
    product_id: UUID
    note: Optional[str] = None
    priority: int = 0
    id: UUID = field(default_factory=uuid4)
    added_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        self.note = optional_text(self.note, "Note", 500)


@dataclass
class Wishlist:
    """A user's saved products; optionally shared through a token link."""
    user_id: UUID
    is_public: bool = False
    share_token: Optional[str] = None
    items: List[WishlistItem] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def get_item(self, product_id: UUID) -> Optional[WishlistItem]:
        return next((i for i in self.items if i.product_id == product_id), None)

    def add_item(self, product_id: UUID, note: Optional[str] = None, priority: int = 0) -> WishlistItem:
        """Add a product; adding one that is already saved returns the existing item."""
        existing = self.get_item(product_id)
        if existing is not None:
            return existing
        item = WishlistItem(product_id=product_id, note=note, priority=priority)
        self.items.append(item)
        self.touch()
        return item

    def remove_item(self, product_id: UUID) -> bool:
        item = self.get_item(product_id)
        if item is None:
            return False
        self.items.remove(item)
        self.touch()
        return True

    def clear(self) -> None:
        self.items.clear()
        self.touch()

    def set_public(self, is_public: bool) -> None:
        self.is_public = is_public
        if is_public and not self.share_token:
            self.share_token = generate_share_token()
        self.touch()

    def regenerate_share_token(self) -> str:
        self.share_token = generate_share_token()
        self.touch()
        return self.share_token

    @property
    def total_items(self) -> int:
        return len(self.items)

    def touch(self) -> None:
        self.updated_at = utcnow()
