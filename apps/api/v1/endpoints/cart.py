"""Shopping cart endpoints (signed-in user or X-Session-Id guest)."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from apps.api.deps import get_mediator
from apps.api.errors import unwrap
from core.application.dtos.cart_dto import CartDto
from core.application.features.cart import (
    AddToCartCommand,
    ClearCartCommand,
    GetCartQuery,
    MergeGuestCartCommand,
    RemoveFromCartCommand,
    UpdateCartItemCommand,
)
from core.application.mediator import Mediator

router = APIRouter(prefix="/cart", tags=["cart"])


class QuantityBody(BaseModel):
    quantity: int


@router.get("", response_model=CartDto)
async def get_cart(mediator: Mediator = Depends(get_mediator)) -> CartDto:
    """Current cart; empty when none exists yet."""
    return unwrap(await mediator.send(GetCartQuery()))


@router.post("/items", response_model=CartDto)
async def add_to_cart(command: AddToCartCommand, mediator: Mediator = Depends(get_mediator)) -> CartDto:
    return unwrap(await mediator.send(command))


@router.put("/items/{item_id}", response_model=CartDto)
async def update_cart_item(
    item_id: UUID,
    body: QuantityBody,
    mediator: Mediator = Depends(get_mediator),
) -> CartDto:
    """Set a line's quantity; 0 removes the line."""
    return unwrap(await mediator.send(UpdateCartItemCommand(item_id=item_id, quantity=body.quantity)))


@router.delete("/items/{item_id}", response_model=CartDto)
async def remove_cart_item(item_id: UUID, mediator: Mediator = Depends(get_mediator)) -> CartDto:
    return unwrap(await mediator.send(RemoveFromCartCommand(item_id=item_id)))


@router.delete("", response_model=CartDto)
async def clear_cart(mediator: Mediator = Depends(get_mediator)) -> CartDto:
    return unwrap(await mediator.send(ClearCartCommand()))


@router.post("/merge", response_model=CartDto)
async def merge_guest_cart(
    command: Optional[MergeGuestCartCommand] = None,
    mediator: Mediator = Depends(get_mediator),
) -> CartDto:
    """Merge the guest session cart into the signed-in user's cart."""
    return unwrap(await mediator.send(command or MergeGuestCartCommand()))
