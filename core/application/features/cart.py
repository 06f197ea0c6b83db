"""
Shopping cart commands and queries.

The cart belongs to the signed-in user or, for guests, to the session id
sent by the storefront. Unit prices are captured when an item is added.
"""
from typing import Dict, List, Optional
from uuid import UUID

from core.application.dtos.cart_dto import CartDto
from core.application.mediator import CurrentUser, Request, RequestHandler, RequestValidator, handles, validates
from core.application.result import Result
from core.data.uow import UnitOfWork
from core.domain.entities.cart import Cart, CartItem
from core.domain.entities.product import Product
from core.infrastructure.logging import get_logger

logger = get_logger(__name__)

CART_SESSION_REQUIRED = "Cart session required"
CART_NOT_FOUND = "Cart not found"
CART_ITEM_NOT_FOUND = "Cart item not found"


# =============================================================================
# SHARED HELPERS
# =============================================================================

def has_cart_identity(user: CurrentUser) -> bool:
    return user.is_authenticated or bool(user.session_id)


async def find_guest_cart(uow: UnitOfWork, session_id: Optional[str]) -> Optional[Cart]:
    """The session's guest cart, unless it has expired."""
    if not session_id:
        return None
    cart = await uow.carts.get_for_session(session_id)
    if cart is None or cart.is_expired:
        return None
    return cart


async def find_cart(uow: UnitOfWork, user: CurrentUser) -> Optional[Cart]:
    """The caller's cart: the user's own, else the guest session's."""
    if user.is_authenticated:
        return await uow.carts.get_for_user(user.user_id)
    return await find_guest_cart(uow, user.session_id)


def open_cart(user: CurrentUser, expiry_days: int) -> Cart:
    return Cart.open(user_id=user.user_id, session_id=user.session_id, expiry_days=expiry_days)


async def products_of(uow: UnitOfWork, cart: Cart) -> Dict[UUID, Product]:
    product_ids = {item.product_id for item in cart.items}
    if not product_ids:
        return {}
    return {p.id: p for p in await uow.products.list_by_ids(product_ids)}


async def build_cart_dto(uow: UnitOfWork, cart: Optional[Cart], tax_rate) -> CartDto:
    if cart is None:
        return CartDto.empty()
    return CartDto.from_entity(cart, await products_of(uow, cart), tax_rate)


# =============================================================================
# REQUESTS
# =============================================================================

class GetCartQuery(Request):
    pass


class AddToCartCommand(Request):
    product_id: UUID
    variant_id: Optional[UUID] = None
    quantity: int = 1


class UpdateCartItemCommand(Request):
    item_id: UUID
    quantity: int


class RemoveFromCartCommand(Request):
    item_id: UUID


class ClearCartCommand(Request):
    pass


class MergeGuestCartCommand(Request):
    session_id: Optional[str] = None


# =============================================================================
# VALIDATORS
# =============================================================================

@validates(AddToCartCommand)
class AddToCartValidator(RequestValidator[AddToCartCommand]):
    def validate(self, request: AddToCartCommand) -> List[str]:
        maximum = self.context.settings.max_cart_quantity
        if not 1 <= request.quantity <= maximum:
            return [f"Quantity must be between 1 and {maximum}"]
        return []


@validates(UpdateCartItemCommand)
class UpdateCartItemValidator(RequestValidator[UpdateCartItemCommand]):
    def validate(self, request: UpdateCartItemCommand) -> List[str]:
        maximum = self.context.settings.max_cart_quantity
        if not 0 <= request.quantity <= maximum:
            return [f"Quantity must be between 0 and {maximum}"]
        return []


# =============================================================================
# HANDLERS
# =============================================================================

@handles(GetCartQuery)
class GetCartHandler(RequestHandler[GetCartQuery, Result[CartDto]]):
    async def handle(self, request: GetCartQuery) -> Result[CartDto]:
        if not has_cart_identity(self.user):
            return Result.failure(CART_SESSION_REQUIRED)

        async with self.context.uow() as uow:
            cart = await find_cart(uow, self.user)
            return Result.success(await build_cart_dto(uow, cart, self.settings.tax_rate))


@handles(AddToCartCommand)
class AddToCartHandler(RequestHandler[AddToCartCommand, Result[CartDto]]):
    """
    Adds a product to the cart, creating the cart on first use.

    The requested variant is used when it is active; otherwise the first
    active variant by sort order.
    """

    async def handle(self, request: AddToCartCommand) -> Result[CartDto]:
        if not has_cart_identity(self.user):
            return Result.failure(CART_SESSION_REQUIRED)

        async with self.context.uow() as uow:
            product = await uow.products.get(request.product_id)
            if product is None or not product.is_active:
                return Result.not_found("Product not found")

            variant = product.purchasable_variant(request.variant_id)
            if variant is None:
                return Result.failure("No available variants for this product.")

            if request.quantity > variant.stock_quantity:
                return Result.failure(f"Only {variant.stock_quantity} items available in stock.")

            cart = await find_cart(uow, self.user)
            if cart is None:
                cart = open_cart(self.user, self.settings.cart_expiry_days)

            existing = cart.get_item(variant.id)
            if existing is not None and existing.quantity + request.quantity > variant.stock_quantity:
                return Result.failure(f"Cannot add more items. Only {variant.stock_quantity} available.")

            cart.add_item(product.id, variant.id, request.quantity, variant.get_price(product.base_price))
            cart.extend_expiration(self.settings.cart_expiry_days)
            await uow.carts.save(cart)
            await uow.commit()

            logger.info(f"Cart {cart.id}: +{request.quantity} x {variant.sku}")
            return Result.success(await build_cart_dto(uow, cart, self.settings.tax_rate))


@handles(UpdateCartItemCommand)
class UpdateCartItemHandler(RequestHandler[UpdateCartItemCommand, Result[CartDto]]):
    async def handle(self, request: UpdateCartItemCommand) -> Result[CartDto]:
        if not has_cart_identity(self.user):
            return Result.failure(CART_SESSION_REQUIRED)

        async with self.context.uow() as uow:
            cart = await find_cart(uow, self.user)
            if cart is None:
                return Result.not_found(CART_NOT_FOUND)

            item = cart.find_item(request.item_id)
            if item is None:
                return Result.not_found(CART_ITEM_NOT_FOUND)

            if request.quantity > 0:
                stock = await self._available_stock(uow, item)
                if request.quantity > stock:
                    return Result.failure(f"Only {stock} items available in stock.")

            cart.update_item_quantity(item.variant_id, request.quantity)
            await uow.carts.save(cart)
            await uow.commit()

            return Result.success(await build_cart_dto(uow, cart, self.settings.tax_rate))

    @staticmethod
    async def _available_stock(uow: UnitOfWork, item: CartItem) -> int:
        product = await uow.products.get(item.product_id)
        variant = product.get_variant(item.variant_id) if product else None
        if variant is None or not variant.is_active:
            return 0
        return variant.stock_quantity


@handles(RemoveFromCartCommand)
class RemoveFromCartHandler(RequestHandler[RemoveFromCartCommand, Result[CartDto]]):
    async def handle(self, request: RemoveFromCartCommand) -> Result[CartDto]:
        if not has_cart_identity(self.user):
            return Result.failure(CART_SESSION_REQUIRED)

        async with self.context.uow() as uow:
            cart = await find_cart(uow, self.user)
            if cart is None:
                return Result.not_found(CART_NOT_FOUND)

            item = cart.find_item(request.item_id)
            if item is None:
                return Result.not_found(CART_ITEM_NOT_FOUND)

            cart.remove_item(item.variant_id)
            await uow.carts.save(cart)
            await uow.commit()

            return Result.success(await build_cart_dto(uow, cart, self.settings.tax_rate))


@handles(ClearCartCommand)
class ClearCartHandler(RequestHandler[ClearCartCommand, Result[CartDto]]):
    async def handle(self, request: ClearCartCommand) -> Result[CartDto]:
        if not has_cart_identity(self.user):
            return Result.failure(CART_SESSION_REQUIRED)

        async with self.context.uow() as uow:
            cart = await find_cart(uow, self.user)
            if cart is None:
                return Result.success(CartDto.empty())

            cart.clear()
            await uow.carts.save(cart)
            await uow.commit()

            return Result.success(await build_cart_dto(uow, cart, self.settings.tax_rate))


@handles(MergeGuestCartCommand)
class MergeGuestCartHandler(RequestHandler[MergeGuestCartCommand, Result[CartDto]]):
    """
    Moves a guest session cart into the signed-in user's cart.

    Quantities are capped at the available stock and lines whose variant
    can no longer be bought are dropped. The guest cart is deleted.
    """

    async def handle(self, request: MergeGuestCartCommand) -> Result[CartDto]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        session_id = request.session_id or self.user.session_id

        async with self.context.uow() as uow:
            user_cart = await uow.carts.get_for_user(self.user.user_id)
            guest_cart = await find_guest_cart(uow, session_id)
            if guest_cart is None:
                return Result.success(await build_cart_dto(uow, user_cart, self.settings.tax_rate))

            if user_cart is None:
                user_cart = Cart.open(user_id=self.user.user_id, expiry_days=self.settings.cart_expiry_days)

            products = await products_of(uow, guest_cart)

            def available_stock(item: CartItem) -> Optional[int]:
                product = products.get(item.product_id)
                if product is None or not product.is_active:
                    return None
                variant = product.get_variant(item.variant_id)
                if variant is None or not variant.is_active:
                    return None
                return variant.stock_quantity

            merged = user_cart.merge_from(guest_cart, available_stock)
            await uow.carts.delete(guest_cart)
            await uow.carts.save(user_cart)
            await uow.commit()

            logger.info(
                f"Merged {merged} of {len(guest_cart.items)} guest line(s) into cart {user_cart.id} "
                f"for user {self.user.user_id}"
            )
            return Result.success(await build_cart_dto(uow, user_cart, self.settings.tax_rate))
