"""Order endpoints for REST API."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from apps.api.deps import get_mediator
from apps.api.errors import unwrap
from core.application.dtos.cart_dto import ReorderResultDto
from core.application.dtos.order_dto import OrderDto, OrderListDto
from core.application.features.orders import (
    CancelOrderCommand,
    CreateOrderCommand,
    GetOrderByNumberQuery,
    GetOrderQuery,
    GetUserOrdersQuery,
    ReorderCommand,
)
from core.application.mediator import Mediator

router = APIRouter(prefix="/orders", tags=["orders"])


class CancelBody(BaseModel):
    reason: Optional[str] = None


@router.post("", response_model=OrderDto, status_code=status.HTTP_201_CREATED)
async def create_order(command: CreateOrderCommand, mediator: Mediator = Depends(get_mediator)) -> OrderDto:
    """Check out the current cart.

    Args:
        command: Customer, address and shipping details
        mediator: Mediator acting as the caller

    Returns:
        OrderDto of the placed order
    """
    return unwrap(await mediator.send(command))


@router.get("", response_model=OrderListDto)
async def list_orders(
    page: int = Query(default=1),
    page_size: int = Query(default=10),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    mediator: Mediator = Depends(get_mediator),
) -> OrderListDto:
    """Orders of the current user, newest first."""
    query = GetUserOrdersQuery(page=page, page_size=page_size, status=status_filter)
    return unwrap(await mediator.send(query))


@router.get("/number/{order_number}", response_model=OrderDto)
async def get_order_by_number(order_number: str, mediator: Mediator = Depends(get_mediator)) -> OrderDto:
    return unwrap(await mediator.send(GetOrderByNumberQuery(order_number=order_number)))


@router.get("/{order_id}", response_model=OrderDto)
async def get_order(order_id: UUID, mediator: Mediator = Depends(get_mediator)) -> OrderDto:
    return unwrap(await mediator.send(GetOrderQuery(order_id=order_id)))


@router.post("/{order_id}/cancel", response_model=OrderDto)
async def cancel_order(
    order_id: UUID,
    body: Optional[CancelBody] = None,
    mediator: Mediator = Depends(get_mediator),
) -> OrderDto:
    reason = body.reason if body else None
    return unwrap(await mediator.send(CancelOrderCommand(order_id=order_id, reason=reason)))


@router.post("/{order_id}/reorder", response_model=ReorderResultDto)
async def reorder(order_id: UUID, mediator: Mediator = Depends(get_mediator)) -> ReorderResultDto:
    """Add the lines of a past order to the cart."""
    return unwrap(await mediator.send(ReorderCommand(order_id=order_id)))
