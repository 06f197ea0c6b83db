"""Application DTOs for Order operations."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from core.data.event_store import StoredEvent
from core.domain.entities.order import Order, OrderItem, OrderTimelineEntry
from core.domain.repositories.paging import Page


class OrderItemDto(BaseModel):
    """DTO for order item."""

    id: UUID
    product_id: UUID
    variant_id: UUID
    product_name: str = Field(..., description="Product name at order time")
    variant_name: str
    sku: str = Field(..., description="Variant SKU")
    quantity: int = Field(..., gt=0, description="Quantity ordered")
    unit_price: Decimal = Field(..., ge=0, description="Unit price amount")
    line_total: Decimal = Field(..., ge=0, description="Total amount")

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, item: OrderItem) -> "OrderItemDto":
        return cls(
            id=item.id,
            product_id=item.product_id,
            variant_id=item.variant_id,
            product_name=item.product_name,
            variant_name=item.variant_name,
            sku=item.sku,
            quantity=item.quantity,
            unit_price=item.unit_price.amount,
            line_total=item.line_total.amount,
        )


class OrderTimelineDto(BaseModel):
    status: str
    description: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, entry: OrderTimelineEntry) -> "OrderTimelineDto":
        return cls(
            status=entry.status.value,
            description=entry.description,
            notes=entry.notes,
            created_at=entry.created_at,
        )


class OrderDto(BaseModel):
    """Response DTO for order details."""

    id: UUID
    order_number: str
    user_id: Optional[UUID] = None
    customer_email: str
    customer_phone: Optional[str] = None
    status: str
    currency: str = Field(default="EUR", description="Currency code")
    subtotal: Decimal
    shipping_cost: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total: Decimal
    shipping_address: Dict[str, Any] = Field(default_factory=dict)
    billing_address: Optional[Dict[str, Any]] = None
    shipping_method: Optional[str] = None
    tracking_number: Optional[str] = None
    notes: Optional[str] = None
    cancellation_reason: Optional[str] = None
    can_be_cancelled: bool
    items: List[OrderItemDto] = Field(default_factory=list, description="Order items")
    timeline: List[OrderTimelineDto] = Field(default_factory=list)
    paid_at: Optional[datetime] = None
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, order: Order) -> "OrderDto":
        return cls(
            id=order.id,
            order_number=str(order.order_number),
            user_id=order.user_id,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            status=order.status.value,
            currency=order.currency,
            subtotal=order.subtotal.amount,
            shipping_cost=order.shipping_cost.amount,
            tax_amount=order.tax_amount.amount,
            discount_amount=order.discount_amount.amount,
            total=order.total.amount,
            shipping_address=dict(order.shipping_address),
            billing_address=dict(order.billing_address) if order.billing_address else None,
            shipping_method=order.shipping_method,
            tracking_number=order.tracking_number,
            notes=order.notes,
            cancellation_reason=order.cancellation_reason,
            can_be_cancelled=order.can_be_cancelled,
            items=[OrderItemDto.from_entity(item) for item in order.items],
            timeline=[OrderTimelineDto.from_entity(entry) for entry in order.timeline],
            paid_at=order.paid_at,
            shipped_at=order.shipped_at,
            delivered_at=order.delivered_at,
            cancelled_at=order.cancelled_at,
            created_at=order.created_at,
        )


class OrderSummaryDto(BaseModel):
    """DTO for listing orders."""

    id: UUID
    order_number: str
    customer_email: str
    status: str
    total: Decimal
    currency: str
    item_count: int
    created_at: datetime

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, order: Order) -> "OrderSummaryDto":
        return cls(
            id=order.id,
            order_number=str(order.order_number),
            customer_email=order.customer_email,
            status=order.status.value,
            total=order.total.amount,
            currency=order.currency,
            item_count=sum(item.quantity for item in order.items),
            created_at=order.created_at,
        )


class OrderListDto(BaseModel):
    """DTO for a page of orders."""

    items: List[OrderSummaryDto] = Field(default_factory=list, description="List of orders")
    total_count: int = Field(..., ge=0, description="Total count")
    page: int
    page_size: int
    total_pages: int

    model_config = {"frozen": True}

    @classmethod
    def from_page(cls, page: Page[Order]) -> "OrderListDto":
        return cls(
            items=[OrderSummaryDto.from_entity(order) for order in page.items],
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )


class OrderEventDto(BaseModel):
    """A stored domain event of an order (audit trail)."""

    event_id: str
    event_type: str
    sequence_number: int
    occurred_at: datetime
    data: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @classmethod
    def from_stored(cls, event: StoredEvent) -> "OrderEventDto":
        return cls(
            event_id=event.event_id,
            event_type=event.event_type,
            sequence_number=event.sequence_number,
            occurred_at=event.occurred_at,
            data=dict(event.data),
        )
