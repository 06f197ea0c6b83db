"""Application DTOs for shopping carts."""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from core.domain.entities.cart import Cart
from core.domain.entities.product import Product
from core.domain.value_objects import round_money


class CartItemDto(BaseModel):
    """DTO for a cart line with the product data needed to render it."""

    id: UUID
    product_id: UUID
    variant_id: UUID
    product_name: str
    product_slug: str
    variant_name: str
    sku: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    available_stock: int

    model_config = {"frozen": True}


class CartDto(BaseModel):
    """Response DTO for a cart; ``id`` is None while no cart exists."""

    id: Optional[UUID] = None
    items: List[CartItemDto] = Field(default_factory=list)
    subtotal: Decimal = Decimal("0.00")
    tax: Decimal = Decimal("0.00")
    total: Decimal = Decimal("0.00")
    item_count: int = 0
    expires_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def empty(cls) -> "CartDto":
        return cls()

    @classmethod
    def from_entity(cls, cart: Cart, products: Dict[UUID, Product], tax_rate: Decimal) -> "CartDto":
        """Build the DTO from a cart and the products its lines refer to.

        Args:
            cart: Cart aggregate
            products: Products by id (lines with unknown products show placeholders)
            tax_rate: Store tax rate applied to the subtotal

        Returns:
            CartDto with totals
        """
        items = []
        for item in cart.items:
            product = products.get(item.product_id)
            variant = product.get_variant(item.variant_id) if product else None
            items.append(
                CartItemDto(
                    id=item.id,
                    product_id=item.product_id,
                    variant_id=item.variant_id,
                    product_name=product.name if product else "Unavailable product",
                    product_slug=product.slug if product else "",
                    variant_name=variant.name if variant else "",
                    sku=variant.sku if variant else "",
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    line_total=item.line_total,
                    available_stock=variant.stock_quantity if variant else 0,
                )
            )

        subtotal = round_money(cart.subtotal)
        tax = round_money(subtotal * tax_rate)
        return cls(
            id=cart.id,
            items=items,
            subtotal=subtotal,
            tax=tax,
            total=subtotal + tax,
            item_count=cart.total_items,
            expires_at=cart.expires_at,
        )


class ReorderResultDto(BaseModel):
    """Outcome of copying a past order into the cart."""

    cart: CartDto
    items_added: int = 0
    items_skipped: int = 0
    skipped_reasons: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}
