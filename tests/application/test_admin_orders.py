"""Back-office order management."""

from decimal import Decimal
from uuid import uuid4

import pytest
import pytest_asyncio

from core.application.features.admin_orders import (
    GetAdminOrdersQuery,
    GetOrderEventsQuery,
    UpdateOrderStatusCommand,
    UpdateShippingInfoCommand,
)
from core.application.features.cart import AddToCartCommand
from core.application.features.orders import CreateOrderCommand
from core.application.features.products import GetProductBySlugQuery
from core.application.result import ResultKind
from core.domain.events.order_events import OrderCancelledEvent, OrderStatusChangedEvent


@pytest_asyncio.fixture
async def order(as_customer, make_product):
    product = await make_product(base_price=Decimal("800.00"))
    await as_customer.send(AddToCartCommand(product_id=product.id, quantity=2))
    result = await as_customer.send(
        CreateOrderCommand(
            customer_email="max@example.com",
            shipping_address={
                "first_name": "Max",
                "last_name": "Moss",
                "address_line1": "5 Harbour Road",
                "city": "Bristol",
                "postal_code": "BS1 4DJ",
                "country": "GB",
            },
            shipping_method="express",
        )
    )
    assert result.succeeded, result.error
    return result.value


class TestStatusWorkflow:
    @pytest.mark.asyncio
    async def test_walks_the_happy_path(self, as_admin, order, published_events):
        for status in ("Paid", "processing", "SHIPPED", "Delivered"):
            result = await as_admin.send(UpdateOrderStatusCommand(order_id=order.id, status=status))
            assert result.succeeded, result.error

        final = result.value
        assert final.status == "Delivered"
        assert final.paid_at is not None
        assert final.shipped_at is not None
        assert final.delivered_at is not None
        assert len(final.timeline) == 5
        changes = [e for e in published_events if isinstance(e, OrderStatusChangedEvent)]
        assert [(e.previous_status, e.new_status) for e in changes][-1] == ("Shipped", "Delivered")

    @pytest.mark.asyncio
    async def test_rejects_skipping_steps(self, as_admin, order):
        result = await as_admin.send(UpdateOrderStatusCommand(order_id=order.id, status="Shipped"))

        assert result.kind == ResultKind.FAILURE
        assert result.error == "Cannot transition order from Pending to Shipped"

    @pytest.mark.asyncio
    async def test_unknown_status(self, as_admin, order):
        result = await as_admin.send(UpdateOrderStatusCommand(order_id=order.id, status="Teleported"))

        assert result.error == "Invalid order status"

    @pytest.mark.asyncio
    async def test_note_is_appended(self, as_admin, order):
        result = await as_admin.send(
            UpdateOrderStatusCommand(order_id=order.id, status="Paid", note="Bank transfer received")
        )

        assert result.value.notes.endswith("Status changed to Paid: Bank transfer received")
        assert result.value.timeline[-1].notes == "Bank transfer received"

    @pytest.mark.asyncio
    async def test_cancelling_restores_stock(self, as_admin, mediator, order, published_events):
        result = await as_admin.send(
            UpdateOrderStatusCommand(order_id=order.id, status="Cancelled", note="  Customer called  ")
        )
        product = (
            await mediator.send(GetProductBySlugQuery(slug=order.items[0].product_name.lower().replace(" ", "-")))
        ).value

        assert result.value.status == "Cancelled"
        assert result.value.cancellation_reason == "Customer called"
        assert product.variants[0].stock_quantity == 50
        cancelled = [e for e in published_events if isinstance(e, OrderCancelledEvent)]
        assert len(cancelled) == 1
        assert cancelled[0].reason == "Customer called"
        assert cancelled[0].order_number == order.order_number

    @pytest.mark.asyncio
    async def test_admin_only(self, as_customer, order):
        result = await as_customer.send(UpdateOrderStatusCommand(order_id=order.id, status="Paid"))

        assert result.kind == ResultKind.FORBIDDEN

    @pytest.mark.asyncio
    async def test_unknown_order(self, as_admin):
        result = await as_admin.send(UpdateOrderStatusCommand(order_id=uuid4(), status="Paid"))

        assert result.kind == ResultKind.NOT_FOUND


class TestShipping:
    @pytest.mark.asyncio
    async def test_tracking_and_ship(self, as_admin, order):
        await as_admin.send(UpdateOrderStatusCommand(order_id=order.id, status="Paid"))
        await as_admin.send(UpdateOrderStatusCommand(order_id=order.id, status="Processing"))

        result = await as_admin.send(
            UpdateShippingInfoCommand(order_id=order.id, tracking_number="1Z999AA10123456784", mark_as_shipped=True)
        )

        shipped = result.value
        assert shipped.status == "Shipped"
        assert shipped.tracking_number == "1Z999AA10123456784"
        assert shipped.timeline[-1].description == "Shipped with tracking number 1Z999AA10123456784"

    @pytest.mark.asyncio
    async def test_cannot_ship_pending_order(self, as_admin, order):
        result = await as_admin.send(UpdateShippingInfoCommand(order_id=order.id, mark_as_shipped=True))

        assert result.error == "Cannot transition order from Pending to Shipped"

    @pytest.mark.asyncio
    async def test_update_method_only(self, as_admin, order):
        result = await as_admin.send(UpdateShippingInfoCommand(order_id=order.id, shipping_method="Courier"))

        assert result.value.shipping_method == "Courier"
        assert result.value.status == "Pending"


class TestListingAndAudit:
    @pytest.mark.asyncio
    async def test_search_and_filter(self, as_admin, order):
        by_email = (await as_admin.send(GetAdminOrdersQuery(search="MAX@"))).value
        by_number = (await as_admin.send(GetAdminOrdersQuery(search=order.order_number))).value
        paid = (await as_admin.send(GetAdminOrdersQuery(status="paid"))).value

        assert [o.id for o in by_email.items] == [order.id]
        assert by_number.total_count == 1
        assert paid.total_count == 0

    @pytest.mark.asyncio
    async def test_events_are_stored_in_sequence(self, as_admin, order):
        await as_admin.send(UpdateOrderStatusCommand(order_id=order.id, status="Paid"))

        events = (await as_admin.send(GetOrderEventsQuery(order_id=order.id))).value

        assert [e.event_type for e in events] == ["OrderPlacedEvent", "OrderStatusChangedEvent"]
        assert [e.sequence_number for e in events] == [1, 2]
        assert events[1].data["new_status"] == "Paid"

    @pytest.mark.asyncio
    async def test_listing_is_admin_only(self, as_customer):
        result = await as_customer.send(GetAdminOrdersQuery())

        assert result.kind == ResultKind.FORBIDDEN
