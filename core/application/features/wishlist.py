"""
Wishlist commands and queries.

Each user has one wishlist, created on first use. A public wishlist can be
viewed by anyone holding its share token.
"""
from typing import Dict, List, Optional
from uuid import UUID

from core.application.dtos.wishlist_dto import WishlistDto
from core.application.mediator import Request, RequestHandler, RequestValidator, handles, validates
from core.application.result import Result
from core.application.validation import check_max_length
from core.data.uow import UnitOfWork
from core.domain.entities.product import Product
from core.domain.entities.wishlist import Wishlist
from core.infrastructure.logging import get_logger

logger = get_logger(__name__)


async def products_of(uow: UnitOfWork, wishlist: Wishlist) -> Dict[UUID, Product]:
    product_ids = {item.product_id for item in wishlist.items}
    if not product_ids:
        return {}
    return {p.id: p for p in await uow.products.list_by_ids(product_ids)}


async def get_or_create(uow: UnitOfWork, user_id: UUID) -> Wishlist:
    wishlist = await uow.wishlists.get_for_user(user_id)
    if wishlist is None:
        wishlist = Wishlist(user_id=user_id)
        await uow.wishlists.save(wishlist)
    return wishlist


class GetWishlistQuery(Request):
    pass


class AddToWishlistCommand(Request):
    product_id: UUID
    note: Optional[str] = None
    priority: int = 0


class RemoveFromWishlistCommand(Request):
    product_id: UUID


class ClearWishlistCommand(Request):
    pass


class SetWishlistVisibilityCommand(Request):
    is_public: bool


class GetSharedWishlistQuery(Request):
    share_token: str


@validates(AddToWishlistCommand)
class AddToWishlistValidator(RequestValidator[AddToWishlistCommand]):
    def validate(self, request: AddToWishlistCommand) -> List[str]:
        errors: List[str] = []
        check_max_length(errors, request.note, "Note", 500)
        return errors


class WishlistHandler(RequestHandler):
    """Shared rendering for the authenticated wishlist operations."""

    async def render(self, uow: UnitOfWork, wishlist: Wishlist) -> WishlistDto:
        return WishlistDto.from_entity(wishlist, await products_of(uow, wishlist))


@handles(GetWishlistQuery)
class GetWishlistHandler(WishlistHandler):
    async def handle(self, request: GetWishlistQuery) -> Result[WishlistDto]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        async with self.context.uow() as uow:
            wishlist = await get_or_create(uow, self.user.user_id)
            await uow.commit()
            return Result.success(await self.render(uow, wishlist))


@handles(AddToWishlistCommand)
class AddToWishlistHandler(WishlistHandler):
    """Saves a product; saving one already on the list changes nothing."""

    async def handle(self, request: AddToWishlistCommand) -> Result[WishlistDto]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        async with self.context.uow() as uow:
            product = await uow.products.get(request.product_id)
            if product is None or not product.is_active:
                return Result.not_found("Product not found")

            wishlist = await get_or_create(uow, self.user.user_id)
            wishlist.add_item(product.id, note=request.note, priority=request.priority)
            await uow.wishlists.save(wishlist)
            await uow.commit()

            return Result.success(await self.render(uow, wishlist))


@handles(RemoveFromWishlistCommand)
class RemoveFromWishlistHandler(WishlistHandler):
    async def handle(self, request: RemoveFromWishlistCommand) -> Result[WishlistDto]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        async with self.context.uow() as uow:
            wishlist = await get_or_create(uow, self.user.user_id)
            if wishlist.remove_item(request.product_id):
                await uow.wishlists.save(wishlist)
            await uow.commit()

            return Result.success(await self.render(uow, wishlist))


@handles(ClearWishlistCommand)
class ClearWishlistHandler(WishlistHandler):
    async def handle(self, request: ClearWishlistCommand) -> Result[WishlistDto]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        async with self.context.uow() as uow:
            wishlist = await get_or_create(uow, self.user.user_id)
            wishlist.clear()
            await uow.wishlists.save(wishlist)
            await uow.commit()

            return Result.success(await self.render(uow, wishlist))


@handles(SetWishlistVisibilityCommand)
class SetWishlistVisibilityHandler(WishlistHandler):
    """
    Publishes or hides the wishlist.

    Going public creates a share token once; going private keeps the token
    so that re-publishing restores the same link.
    """

    async def handle(self, request: SetWishlistVisibilityCommand) -> Result[WishlistDto]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        async with self.context.uow() as uow:
            wishlist = await get_or_create(uow, self.user.user_id)
            wishlist.set_public(request.is_public)
            await uow.wishlists.save(wishlist)
            await uow.commit()

            logger.info(f"Wishlist {wishlist.id} is now {'public' if wishlist.is_public else 'private'}")
            return Result.success(await self.render(uow, wishlist))


@handles(GetSharedWishlistQuery)
class GetSharedWishlistHandler(WishlistHandler):
    async def handle(self, request: GetSharedWishlistQuery) -> Result[WishlistDto]:
        async with self.context.uow() as uow:
            wishlist = await uow.wishlists.get_by_share_token(request.share_token)
            if wishlist is None or not wishlist.is_public:
                return Result.not_found("Wishlist not found")

            return Result.success(await self.render(uow, wishlist))
