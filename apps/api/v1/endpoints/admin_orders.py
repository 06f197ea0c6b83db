"""Back-office order endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from apps.api.deps import get_mediator, require_admin
from apps.api.errors import unwrap
from core.application.dtos.order_dto import OrderDto, OrderEventDto, OrderListDto
from core.application.features.admin_orders import (
    GetAdminOrdersQuery,
    GetOrderEventsQuery,
    UpdateOrderStatusCommand,
    UpdateShippingInfoCommand,
)
from core.application.mediator import Mediator

router = APIRouter(prefix="/admin/orders", tags=["admin-orders"], dependencies=[Depends(require_admin)])


class StatusBody(BaseModel):
    status: str
    note: Optional[str] = None


class ShippingBody(BaseModel):
    tracking_number: Optional[str] = None
    shipping_method: Optional[str] = None
    mark_as_shipped: bool = False


@router.get("", response_model=OrderListDto)
async def list_orders(
    page: int = Query(default=1),
    page_size: int = Query(default=20),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    search: Optional[str] = Query(default=None, description="Order number or customer email"),
    mediator: Mediator = Depends(get_mediator),
) -> OrderListDto:
    query = GetAdminOrdersQuery(page=page, page_size=page_size, status=status_filter, search=search)
    return unwrap(await mediator.send(query))


@router.put("/{order_id}/status", response_model=OrderDto)
async def update_status(
    order_id: UUID,
    body: StatusBody,
    mediator: Mediator = Depends(get_mediator),
) -> OrderDto:
    command = UpdateOrderStatusCommand(order_id=order_id, status=body.status, note=body.note)
    return unwrap(await mediator.send(command))


@router.put("/{order_id}/shipping", response_model=OrderDto)
async def update_shipping(
    order_id: UUID,
    body: ShippingBody,
    mediator: Mediator = Depends(get_mediator),
) -> OrderDto:
    command = UpdateShippingInfoCommand(order_id=order_id, **body.model_dump())
    return unwrap(await mediator.send(command))


@router.get("/{order_id}/events", response_model=List[OrderEventDto])
async def get_order_events(order_id: UUID, mediator: Mediator = Depends(get_mediator)) -> List[OrderEventDto]:
    """Stored domain events of the order, in sequence order."""
    return unwrap(await mediator.send(GetOrderEventsQuery(order_id=order_id)))
