"""Cart, checkout and customer order flows through the mediator."""

from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

import pytest
import pytest_asyncio

from core.application.features.cart import (
    AddToCartCommand,
    ClearCartCommand,
    GetCartQuery,
    MergeGuestCartCommand,
    RemoveFromCartCommand,
    UpdateCartItemCommand,
)
from core.application.features.orders import (
    CancelOrderCommand,
    CreateOrderCommand,
    GetOrderByNumberQuery,
    GetOrderQuery,
    GetUserOrdersQuery,
    ReorderCommand,
)
from core.application.features.products import GetProductBySlugQuery
from core.application.mediator import CurrentUser
from core.application.result import ResultKind
from core.domain.clock import utcnow
from core.domain.events.order_events import OrderCancelledEvent, OrderPlacedEvent
from core.domain.events.product_events import StockAdjustedEvent
from core.domain.exceptions import ValidationException


def checkout_command(**overrides) -> CreateOrderCommand:
    fields = {
        "customer_email": "jane@example.com",
        "shipping_address": {
            "first_name": "Jane",
            "last_name": "Doe",
            "address_line1": "1 Main Street",
            "city": "Lyon",
            "postal_code": "69001",
            "country": "FR",
        },
        "shipping_method": "standard",
    }
    fields.update(overrides)
    return CreateOrderCommand(**fields)


async def stock_of(mediator, product) -> int:
    result = await mediator.send(GetProductBySlugQuery(slug=product.slug))
    return result.value.variants[0].stock_quantity


async def expire_guest_cart(mediator, session_id: str) -> None:
    async with mediator.context.uow() as uow:
        cart = await uow.carts.get_for_session(session_id)
        cart.expires_at = utcnow() - timedelta(days=30)
        await uow.carts.save(cart)
        await uow.commit()


class TestCart:
    @pytest.mark.asyncio
    async def test_add_to_cart_prices_the_line(self, as_customer, make_product):
        product = await make_product(base_price=Decimal("1000.00"))

        result = await as_customer.send(AddToCartCommand(product_id=product.id, quantity=2))

        cart = result.value
        assert cart.item_count == 2
        assert cart.items[0].sku == product.variants[0].sku
        assert cart.items[0].unit_price == Decimal("1000.00")
        assert cart.subtotal == Decimal("2000.00")
        assert cart.tax == Decimal("400.00")
        assert cart.total == Decimal("2400.00")

    @pytest.mark.asyncio
    async def test_adding_again_increments_the_line(self, as_guest, make_product):
        product = await make_product()

        await as_guest.send(AddToCartCommand(product_id=product.id, quantity=1))
        cart = (await as_guest.send(AddToCartCommand(product_id=product.id, quantity=2))).value

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    @pytest.mark.asyncio
    async def test_cannot_exceed_stock(self, as_customer, make_product):
        product = await make_product()

        over = await as_customer.send(AddToCartCommand(product_id=product.id, quantity=60))
        await as_customer.send(AddToCartCommand(product_id=product.id, quantity=30))
        again = await as_customer.send(AddToCartCommand(product_id=product.id, quantity=30))

        assert over.error == "Only 50 items available in stock."
        assert again.error == "Cannot add more items. Only 50 available."

    @pytest.mark.asyncio
    async def test_quantity_limits(self, as_customer):
        with pytest.raises(ValidationException, match="Quantity must be between 1 and 100"):
            await as_customer.send(AddToCartCommand(product_id=uuid4(), quantity=0))

    @pytest.mark.asyncio
    async def test_requires_user_or_session(self, mediator, make_product):
        product = await make_product()

        result = await mediator.send(AddToCartCommand(product_id=product.id))

        assert result.kind == ResultKind.FAILURE
        assert result.error == "Cart session required"

    @pytest.mark.asyncio
    async def test_unknown_product(self, as_customer):
        result = await as_customer.send(AddToCartCommand(product_id=uuid4()))

        assert result.kind == ResultKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_update_and_remove(self, as_customer, make_product):
        first = await make_product()
        second = await make_product()
        await as_customer.send(AddToCartCommand(product_id=first.id))
        cart = (await as_customer.send(AddToCartCommand(product_id=second.id))).value
        first_line = next(i for i in cart.items if i.product_id == first.id)
        second_line = next(i for i in cart.items if i.product_id == second.id)

        updated = (await as_customer.send(UpdateCartItemCommand(item_id=first_line.id, quantity=4))).value
        too_many = await as_customer.send(UpdateCartItemCommand(item_id=first_line.id, quantity=51))
        zeroed = (await as_customer.send(UpdateCartItemCommand(item_id=first_line.id, quantity=0))).value
        removed = (await as_customer.send(RemoveFromCartCommand(item_id=second_line.id))).value

        assert updated.item_count == 5
        assert too_many.error == "Only 50 items available in stock."
        assert [i.product_id for i in zeroed.items] == [second.id]
        assert removed.items == []

    @pytest.mark.asyncio
    async def test_missing_line(self, as_customer, make_product):
        product = await make_product()
        await as_customer.send(AddToCartCommand(product_id=product.id))

        result = await as_customer.send(RemoveFromCartCommand(item_id=uuid4()))

        assert result.kind == ResultKind.NOT_FOUND
        assert result.error == "Cart item not found"

    @pytest.mark.asyncio
    async def test_clear(self, as_customer, make_product):
        product = await make_product()
        await as_customer.send(AddToCartCommand(product_id=product.id, quantity=2))

        cleared = (await as_customer.send(ClearCartCommand())).value
        fetched = (await as_customer.send(GetCartQuery())).value

        assert cleared.items == []
        assert fetched.id == cleared.id
        assert fetched.total == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_no_cart_yet(self, as_customer):
        cart = (await as_customer.send(GetCartQuery())).value

        assert cart.id is None
        assert cart.items == []

    @pytest.mark.asyncio
    async def test_merge_guest_cart(self, mediator, as_guest, guest, customer, make_product):
        product = await make_product()
        await as_guest.send(AddToCartCommand(product_id=product.id, quantity=3))
        signed_in = mediator.for_user(CurrentUser(user_id=customer.user_id, session_id=guest.session_id))

        merged = (await signed_in.send(MergeGuestCartCommand())).value
        guest_cart = (await as_guest.send(GetCartQuery())).value

        assert merged.item_count == 3
        assert guest_cart.id is None

    @pytest.mark.asyncio
    async def test_expired_guest_cart_is_gone(self, mediator, as_guest, guest, make_product):
        product = await make_product()
        await as_guest.send(AddToCartCommand(product_id=product.id, quantity=2))
        await expire_guest_cart(mediator, guest.session_id)

        cart = (await as_guest.send(GetCartQuery())).value

        assert cart.id is None
        assert cart.item_count == 0

    @pytest.mark.asyncio
    async def test_adding_after_expiry_starts_a_new_cart(self, mediator, as_guest, guest, make_product):
        product = await make_product()
        old = (await as_guest.send(AddToCartCommand(product_id=product.id, quantity=2))).value
        await expire_guest_cart(mediator, guest.session_id)

        fresh = (await as_guest.send(AddToCartCommand(product_id=product.id, quantity=1))).value

        assert fresh.id != old.id
        assert fresh.item_count == 1

    @pytest.mark.asyncio
    async def test_expired_guest_cart_is_not_merged(self, mediator, as_guest, guest, customer, make_product):
        product = await make_product()
        await as_guest.send(AddToCartCommand(product_id=product.id, quantity=3))
        await expire_guest_cart(mediator, guest.session_id)
        signed_in = mediator.for_user(CurrentUser(user_id=customer.user_id, session_id=guest.session_id))

        merged = (await signed_in.send(MergeGuestCartCommand())).value

        assert merged.id is None
        assert merged.item_count == 0

    @pytest.mark.asyncio
    async def test_merge_requires_sign_in(self, as_guest):
        result = await as_guest.send(MergeGuestCartCommand())

        assert result.kind == ResultKind.UNAUTHORIZED


class TestCheckout:
    @pytest.mark.asyncio
    async def test_checkout_places_order(self, as_customer, mediator, make_product, published_events):
        product = await make_product(base_price=Decimal("1000.00"))
        await as_customer.send(AddToCartCommand(product_id=product.id, quantity=2))

        result = await as_customer.send(checkout_command())

        order = result.value
        assert order.status == "Pending"
        assert order.order_number == f"ORD-{utcnow().year}-000001"
        assert order.subtotal == Decimal("2000.00")
        assert order.shipping_cost == Decimal("5.99")
        assert order.tax_amount == Decimal("400.00")
        assert order.total == Decimal("2405.99")
        assert order.items[0].product_name == product.name
        assert [t.description for t in order.timeline] == ["Order placed"]

        assert await stock_of(mediator, product) == 48
        assert (await as_customer.send(GetCartQuery())).value.items == []

        types = [type(e) for e in published_events]
        assert OrderPlacedEvent in types
        assert StockAdjustedEvent in types

    @pytest.mark.asyncio
    async def test_order_numbers_are_sequential(self, as_customer, make_product):
        product = await make_product()
        numbers = []
        for _ in range(2):
            await as_customer.send(AddToCartCommand(product_id=product.id))
            numbers.append((await as_customer.send(checkout_command())).value.order_number)

        assert [n[-6:] for n in numbers] == ["000001", "000002"]

    @pytest.mark.asyncio
    async def test_unknown_shipping_method_uses_fallback_rate(self, as_guest, make_product):
        product = await make_product(base_price=Decimal("100.00"))
        await as_guest.send(AddToCartCommand(product_id=product.id))

        order = (await as_guest.send(checkout_command(shipping_method="Pallet"))).value

        assert order.user_id is None
        assert order.shipping_cost == Decimal("9.99")

    @pytest.mark.asyncio
    async def test_empty_cart(self, as_customer):
        result = await as_customer.send(checkout_command())

        assert result.error == "Cart is empty"

    @pytest.mark.asyncio
    async def test_stock_is_checked_again(self, as_customer, as_admin, make_product):
        from core.application.features.products import AdjustStockCommand

        product = await make_product()
        await as_customer.send(AddToCartCommand(product_id=product.id, quantity=10))
        await as_admin.send(AdjustStockCommand(variant_id=product.variants[0].id, adjustment=-45))

        result = await as_customer.send(checkout_command())

        assert result.error == f"Insufficient stock for '{product.name}'"

    @pytest.mark.asyncio
    async def test_checkout_validation(self, as_customer):
        with pytest.raises(ValidationException) as exc_info:
            await as_customer.send(CreateOrderCommand(customer_email="not-an-email"))

        assert exc_info.value.errors[0] == "Invalid email format"
        assert "Shipping method is required" in exc_info.value.errors


class TestCustomerOrders:
    @pytest_asyncio.fixture
    async def placed_order(self, as_customer, make_product):
        product = await make_product(base_price=Decimal("500.00"))
        await as_customer.send(AddToCartCommand(product_id=product.id, quantity=3))
        order = (await as_customer.send(checkout_command())).value
        return product, order

    @pytest.mark.asyncio
    async def test_get_order(self, as_customer, placed_order):
        _, order = placed_order

        by_id = await as_customer.send(GetOrderQuery(order_id=order.id))
        by_number = await as_customer.send(GetOrderByNumberQuery(order_number=order.order_number.lower()))

        assert by_id.value.id == order.id
        assert by_number.value.id == order.id

    @pytest.mark.asyncio
    async def test_other_customers_cannot_see_it(self, mediator, as_admin, placed_order):
        _, order = placed_order
        stranger = mediator.for_user(CurrentUser(user_id=uuid4()))

        hidden = await stranger.send(GetOrderQuery(order_id=order.id))
        visible = await as_admin.send(GetOrderQuery(order_id=order.id))

        assert hidden.kind == ResultKind.NOT_FOUND
        assert visible.succeeded

    @pytest.mark.asyncio
    async def test_malformed_order_number(self, as_customer):
        result = await as_customer.send(GetOrderByNumberQuery(order_number="12345"))

        assert result.kind == ResultKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_list_orders(self, as_customer, placed_order):
        pending = (await as_customer.send(GetUserOrdersQuery(status="pending"))).value
        shipped = (await as_customer.send(GetUserOrdersQuery(status="shipped"))).value
        bogus = await as_customer.send(GetUserOrdersQuery(status="lost"))

        assert pending.total_count == 1
        assert pending.items[0].item_count == 3
        assert shipped.items == []
        assert bogus.error == "Invalid order status"

    @pytest.mark.asyncio
    async def test_list_requires_sign_in(self, as_guest):
        result = await as_guest.send(GetUserOrdersQuery())

        assert result.kind == ResultKind.UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_cancel_restores_stock(self, as_customer, mediator, placed_order, published_events):
        product, order = placed_order
        assert await stock_of(mediator, product) == 47

        cancelled = (await as_customer.send(CancelOrderCommand(order_id=order.id, reason="Changed my mind"))).value
        again = await as_customer.send(CancelOrderCommand(order_id=order.id))

        assert cancelled.status == "Cancelled"
        assert cancelled.cancellation_reason == "Changed my mind"
        assert cancelled.can_be_cancelled is False
        assert await stock_of(mediator, product) == 50
        assert any(isinstance(e, OrderCancelledEvent) for e in published_events)
        assert again.error == "Order cannot be cancelled. Current status: Cancelled"

    @pytest.mark.asyncio
    async def test_cancel_someone_elses_order(self, mediator, placed_order):
        _, order = placed_order
        stranger = mediator.for_user(CurrentUser(user_id=uuid4()))

        result = await stranger.send(CancelOrderCommand(order_id=order.id))

        assert result.kind == ResultKind.FORBIDDEN

    @pytest.mark.asyncio
    async def test_reorder(self, as_customer, placed_order):
        product, order = placed_order

        result = (await as_customer.send(ReorderCommand(order_id=order.id))).value

        assert result.items_added == 1
        assert result.items_skipped == 0
        assert result.cart.items[0].product_id == product.id
        assert result.cart.items[0].quantity == 3

    @pytest.mark.asyncio
    async def test_reorder_is_capped_by_stock(self, as_customer, as_admin, placed_order):
        from core.application.features.products import AdjustStockCommand

        product, order = placed_order
        await as_admin.send(AdjustStockCommand(variant_id=product.variants[0].id, adjustment=-45))

        result = (await as_customer.send(ReorderCommand(order_id=order.id))).value

        assert result.cart.items[0].quantity == 2
        assert result.skipped_reasons == [f"'{product.name}': only 2 of 3 added (limited stock)"]
