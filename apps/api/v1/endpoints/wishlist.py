"""Wishlist endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from apps.api.deps import get_mediator
from apps.api.errors import unwrap
from core.application.dtos.wishlist_dto import WishlistDto
from core.application.features.wishlist import (
    AddToWishlistCommand,
    ClearWishlistCommand,
    GetSharedWishlistQuery,
    GetWishlistQuery,
    RemoveFromWishlistCommand,
    SetWishlistVisibilityCommand,
)
from core.application.mediator import Mediator

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


class VisibilityBody(BaseModel):
    is_public: bool


@router.get("", response_model=WishlistDto)
async def get_wishlist(mediator: Mediator = Depends(get_mediator)) -> WishlistDto:
    return unwrap(await mediator.send(GetWishlistQuery()))


@router.post("/items", response_model=WishlistDto)
async def add_to_wishlist(command: AddToWishlistCommand, mediator: Mediator = Depends(get_mediator)) -> WishlistDto:
    return unwrap(await mediator.send(command))


@router.delete("/items/{product_id}", response_model=WishlistDto)
async def remove_from_wishlist(product_id: UUID, mediator: Mediator = Depends(get_mediator)) -> WishlistDto:
    return unwrap(await mediator.send(RemoveFromWishlistCommand(product_id=product_id)))


@router.delete("", response_model=WishlistDto)
async def clear_wishlist(mediator: Mediator = Depends(get_mediator)) -> WishlistDto:
    return unwrap(await mediator.send(ClearWishlistCommand()))


@router.put("/visibility", response_model=WishlistDto)
async def set_visibility(body: VisibilityBody, mediator: Mediator = Depends(get_mediator)) -> WishlistDto:
    """Publish or hide the wishlist; publishing creates the share token."""
    return unwrap(await mediator.send(SetWishlistVisibilityCommand(is_public=body.is_public)))


@router.get("/shared/{share_token}", response_model=WishlistDto)
async def get_shared_wishlist(share_token: str, mediator: Mediator = Depends(get_mediator)) -> WishlistDto:
    return unwrap(await mediator.send(GetSharedWishlistQuery(share_token=share_token)))
