"""Application DTOs for wishlists."""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from core.domain.entities.product import Product
from core.domain.entities.wishlist import Wishlist


class WishlistItemDto(BaseModel):
    id: UUID
    product_id: UUID
    product_name: str
    product_slug: str
    price: Decimal
    compare_at_price: Optional[Decimal] = None
    is_on_sale: bool
    in_stock: bool
    note: Optional[str] = None
    priority: int = 0
    added_at: datetime

    model_config = {"frozen": True}


class WishlistDto(BaseModel):
    """Response DTO for a wishlist; items of deleted products are hidden."""

    id: UUID
    is_public: bool
    share_token: Optional[str] = None
    items: List[WishlistItemDto] = Field(default_factory=list)
    item_count: int = 0

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, wishlist: Wishlist, products: Dict[UUID, Product]) -> "WishlistDto":
        items = []
        for item in wishlist.items:
            product = products.get(item.product_id)
            if product is None:
                continue
            items.append(
                WishlistItemDto(
                    id=item.id,
                    product_id=product.id,
                    product_name=product.name,
                    product_slug=product.slug,
                    price=product.base_price,
                    compare_at_price=product.compare_at_price,
                    is_on_sale=product.is_on_sale,
                    in_stock=product.in_stock,
                    note=item.note,
                    priority=item.priority,
                    added_at=item.added_at,
                )
            )
        return cls(
            id=wishlist.id,
            is_public=wishlist.is_public,
            share_token=wishlist.share_token,
            items=items,
            item_count=len(items),
        )
