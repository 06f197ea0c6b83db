"""
Checkout and customer order operations.

Flow of checkout (CreateOrderCommand):
1. Load the caller's cart (user or guest session)
2. Check every line is still purchasable and in stock
3. Number the order (ORD-YYYY-NNNNNN) and price shipping and tax
4. Decrement stock, place the order, clear the cart
5. Commit (OrderPlacedEvent and StockAdjustedEvents are stored, then published)
"""
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from pydantic import Field

from core.application.dtos.cart_dto import ReorderResultDto
from core.application.dtos.order_dto import OrderDto, OrderListDto
from core.application.features.cart import (
    CART_SESSION_REQUIRED,
    build_cart_dto,
    find_cart,
    has_cart_identity,
    products_of,
)
from core.application.mediator import CurrentUser, Request, RequestHandler, RequestValidator, handles, validates
from core.application.result import Result
from core.application.validation import check_required, is_valid_email
from core.data.uow import UnitOfWork
from core.domain.clock import utcnow
from core.domain.entities.cart import Cart
from core.domain.entities.order import Order, OrderItem
from core.domain.entities.product import Product, ProductVariant
from core.domain.enums import OrderStatus
from core.domain.value_objects import Money, OrderNumber
from core.infrastructure.logging import get_logger

logger = get_logger(__name__)

ORDER_NOT_FOUND = "Order not found"
MAX_PAGE_SIZE = 100


# =============================================================================
# SHARED HELPERS
# =============================================================================

def can_view_order(user: CurrentUser, order: Order) -> bool:
    """Admins see every order; customers only their own."""
    if user.is_admin:
        return True
    return user.is_authenticated and order.user_id == user.user_id


async def next_order_number(uow: UnitOfWork) -> OrderNumber:
    year = utcnow().year
    return OrderNumber.for_sequence(year, await uow.orders.count_for_year(year) + 1)


async def restore_stock(uow: UnitOfWork, order: Order, reason: str) -> List[Product]:
    """Put the quantities of an order back on its variants; returns the touched products."""
    products = {p.id: p for p in await uow.products.list_by_ids({i.product_id for i in order.items})}
    touched: Dict[UUID, Product] = {}
    for item in order.items:
        product = products.get(item.product_id)
        if product is None or product.get_variant(item.variant_id) is None:
            logger.warning(f"⚠️ Cannot restore stock of {item.sku} for order {order.order_number}: variant is gone")
            continue
        product.adjust_stock(item.variant_id, item.quantity, reason)
        touched[product.id] = product

    for product in touched.values():
        await uow.products.save(product)
    return list(touched.values())


def page_errors(page: int, page_size: int) -> List[str]:
    errors: List[str] = []
    if page < 1:
        errors.append("Page must be at least 1")
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        errors.append(f"Page size must be between 1 and {MAX_PAGE_SIZE}")
    return errors


# =============================================================================
# REQUESTS
# =============================================================================

class OrderAddressInput(Request):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None


class CreateOrderCommand(Request):
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    shipping_address: OrderAddressInput = Field(default_factory=OrderAddressInput)
    billing_address: Optional[OrderAddressInput] = None
    shipping_method: Optional[str] = None
    notes: Optional[str] = None


class GetOrderQuery(Request):
    order_id: UUID


class GetOrderByNumberQuery(Request):
    order_number: str


class GetUserOrdersQuery(Request):
    page: int = 1
    page_size: int = 10
    status: Optional[str] = None


class CancelOrderCommand(Request):
    order_id: UUID
    reason: Optional[str] = None


class ReorderCommand(Request):
    order_id: UUID


# =============================================================================
# VALIDATORS
# =============================================================================

@validates(CreateOrderCommand)
class CreateOrderValidator(RequestValidator[CreateOrderCommand]):
    def validate(self, request: CreateOrderCommand) -> List[str]:
        errors: List[str] = []
        if not request.customer_email or not request.customer_email.strip():
            errors.append("Email is required")
        elif not is_valid_email(request.customer_email):
            errors.append("Invalid email format")

        address = request.shipping_address
        check_required(errors, address.first_name, "First name", 100)
        check_required(errors, address.last_name, "Last name", 100)
        check_required(errors, address.address_line1, "Address line 1", 200)
        check_required(errors, address.city, "City", 100)
        check_required(errors, address.postal_code, "Postal code", 20)
        check_required(errors, address.country, "Country", 100)

        if not request.shipping_method or not request.shipping_method.strip():
            errors.append("Shipping method is required")
        return errors


@validates(GetUserOrdersQuery)
class GetUserOrdersValidator(RequestValidator[GetUserOrdersQuery]):
    def validate(self, request: GetUserOrdersQuery) -> List[str]:
        return page_errors(request.page, request.page_size)


# =============================================================================
# HANDLERS
# =============================================================================

@handles(CreateOrderCommand)
class CreateOrderHandler(RequestHandler[CreateOrderCommand, Result[OrderDto]]):
    """
    Turns the caller's cart into a pending order.

    Guests may check out with their session cart; the order then has no
    user id.
    """

    async def handle(self, request: CreateOrderCommand) -> Result[OrderDto]:
        if not has_cart_identity(self.user):
            return Result.failure(CART_SESSION_REQUIRED)

        async with self.context.uow() as uow:
            cart = await find_cart(uow, self.user)
            if cart is None or cart.is_empty:
                return Result.failure("Cart is empty")

            lines, error = self._resolve_lines(cart, await products_of(uow, cart))
            if error is not None:
                return Result.failure(error)

            order_number = await next_order_number(uow)
            pricing = self.settings.order_pricing()
            currency = self.settings.currency

            items = [
                OrderItem(
                    product_id=product.id,
                    variant_id=variant.id,
                    product_name=product.name,
                    variant_name=variant.name,
                    sku=variant.sku,
                    quantity=quantity,
                    unit_price=Money(amount=unit_price, currency=currency),
                )
                for product, variant, quantity, unit_price in lines
            ]
            subtotal = sum((item.line_total.amount for item in items), Decimal("0.00"))

            order = Order.place(
                order_number=order_number,
                customer_email=request.customer_email,
                items=items,
                shipping_address=request.shipping_address.model_dump(),
                shipping_method=request.shipping_method.strip(),
                shipping_cost=pricing.shipping_cost(request.shipping_method),
                tax_amount=pricing.tax(subtotal),
                user_id=self.user.user_id,
                customer_phone=request.customer_phone,
                billing_address=request.billing_address.model_dump() if request.billing_address else None,
                notes=request.notes,
                currency=currency,
            )

            touched: Dict[UUID, Product] = {}
            for product, variant, quantity, _ in lines:
                product.adjust_stock(variant.id, -quantity, f"Order {order_number}")
                touched[product.id] = product
            for product in touched.values():
                await uow.products.save(product)

            await uow.orders.save(order)
            cart.clear()
            await uow.carts.save(cart)

            uow.collect(order, *touched.values())
            await uow.commit()

            logger.info(
                f"[{uow.execution_id}] ✅ Order {order.order_number} placed: "
                f"{len(items)} line(s), total {order.total}"
            )

        return Result.success(OrderDto.from_entity(order))

    @staticmethod
    def _resolve_lines(
        cart: Cart, products: Dict[UUID, Product]
    ) -> Tuple[List[Tuple[Product, ProductVariant, int, Decimal]], Optional[str]]:
        """(product, variant, quantity, unit price) per cart line, or the first problem found."""
        lines = []
        for item in cart.items:
            product = products.get(item.product_id)
            if product is None or not product.is_active:
                return [], f"Product '{item.product_id}' is no longer available"

            variant = product.get_variant(item.variant_id)
            if variant is None or not variant.is_active:
                return [], "Product variant is no longer available"

            if item.quantity > variant.stock_quantity:
                return [], f"Insufficient stock for '{product.name}'"

            lines.append((product, variant, item.quantity, item.unit_price))
        return lines, None


@handles(GetOrderQuery)
class GetOrderHandler(RequestHandler[GetOrderQuery, Result[OrderDto]]):
    async def handle(self, request: GetOrderQuery) -> Result[OrderDto]:
        async with self.context.uow() as uow:
            order = await uow.orders.get(request.order_id)

        if order is None or not can_view_order(self.user, order):
            return Result.not_found(ORDER_NOT_FOUND)
        return Result.success(OrderDto.from_entity(order))


@handles(GetOrderByNumberQuery)
class GetOrderByNumberHandler(RequestHandler[GetOrderByNumberQuery, Result[OrderDto]]):
    async def handle(self, request: GetOrderByNumberQuery) -> Result[OrderDto]:
        try:
            order_number = OrderNumber(value=request.order_number)
        except ValueError:
            return Result.not_found(ORDER_NOT_FOUND)

        async with self.context.uow() as uow:
            order = await uow.orders.get_by_number(order_number)

        if order is None or not can_view_order(self.user, order):
            return Result.not_found(ORDER_NOT_FOUND)
        return Result.success(OrderDto.from_entity(order))


@handles(GetUserOrdersQuery)
class GetUserOrdersHandler(RequestHandler[GetUserOrdersQuery, Result[OrderListDto]]):
    async def handle(self, request: GetUserOrdersQuery) -> Result[OrderListDto]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        status = None
        if request.status:
            status = OrderStatus.parse(request.status)
            if status is None:
                return Result.failure("Invalid order status")

        async with self.context.uow() as uow:
            page = await uow.orders.list_for_user(
                self.user.user_id, page=request.page, page_size=request.page_size, status=status
            )
        return Result.success(OrderListDto.from_page(page))


@handles(CancelOrderCommand)
class CancelOrderHandler(RequestHandler[CancelOrderCommand, Result[OrderDto]]):
    """Cancels a pending or paid order and puts its stock back."""

    async def handle(self, request: CancelOrderCommand) -> Result[OrderDto]:
        async with self.context.uow() as uow:
            order = await uow.orders.get(request.order_id)
            if order is None:
                return Result.not_found(ORDER_NOT_FOUND)
            if not can_view_order(self.user, order):
                return Result.forbidden("Access denied")
            if not order.can_be_cancelled:
                return Result.failure(f"Order cannot be cancelled. Current status: {order.status.value}")

            products = await restore_stock(uow, order, f"Order {order.order_number} cancelled")
            order.cancel(request.reason)
            await uow.orders.save(order)

            uow.collect(order, *products)
            await uow.commit()

            logger.info(f"[{uow.execution_id}] Order {order.order_number} cancelled")

        return Result.success(OrderDto.from_entity(order))


@handles(ReorderCommand)
class ReorderHandler(RequestHandler[ReorderCommand, Result[ReorderResultDto]]):
    """
    Copies the lines of a past order into the user's cart.

    Lines are capped at what the stock still allows next to the cart's
    current contents; every skipped or reduced line gets a reason.
    """

    async def handle(self, request: ReorderCommand) -> Result[ReorderResultDto]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        async with self.context.uow() as uow:
            order = await uow.orders.get(request.order_id)
            if order is None or not can_view_order(self.user, order):
                return Result.not_found(ORDER_NOT_FOUND)

            cart = await uow.carts.get_for_user(self.user.user_id)
            if cart is None:
                cart = Cart.open(user_id=self.user.user_id, expiry_days=self.settings.cart_expiry_days)

            products = {
                p.id: p for p in await uow.products.list_by_ids({i.product_id for i in order.items})
            }
            added = 0
            reasons: List[str] = []
            for item in order.items:
                name = item.product_name
                product = products.get(item.product_id)
                if product is None or not product.is_active:
                    reasons.append(f"'{name}' is no longer available")
                    continue

                variant = product.purchasable_variant(item.variant_id)
                if variant is None:
                    reasons.append(f"'{name}' has no available variants")
                    continue

                existing = cart.get_item(variant.id)
                room = variant.stock_quantity - (existing.quantity if existing else 0)
                if room <= 0:
                    reasons.append(f"'{name}' is already at max quantity in cart")
                    continue

                quantity = min(item.quantity, room)
                if quantity < item.quantity:
                    reasons.append(f"'{name}': only {quantity} of {item.quantity} added (limited stock)")

                cart.add_item(product.id, variant.id, quantity, variant.get_price(product.base_price))
                added += 1

            if added:
                cart.extend_expiration(self.settings.cart_expiry_days)
                await uow.carts.save(cart)
                await uow.commit()

            cart_dto = await build_cart_dto(uow, cart if cart.items else None, self.settings.tax_rate)

        skipped = len(order.items) - added
        logger.info(f"Reorder of {order.order_number}: {added} added, {skipped} skipped")
        return Result.success(
            ReorderResultDto(
                cart=cart_dto,
                items_added=added,
                items_skipped=skipped,
                skipped_reasons=reasons,
            )
        )
