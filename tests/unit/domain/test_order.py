"""Tests for the Order aggregate and its status workflow."""

from decimal import Decimal
from uuid import uuid4

import pytest

from core.domain.entities.order import Order, OrderItem
from core.domain.enums import OrderStatus
from core.domain.events.order_events import OrderCancelledEvent, OrderPlacedEvent, OrderStatusChangedEvent
from core.domain.exceptions import InvalidOrderTransitionError
from core.domain.value_objects import Money, OrderNumber


def place_order() -> Order:
    items = [
        OrderItem(
            product_id=uuid4(),
            variant_id=uuid4(),
            product_name="Arctic Split 12000",
            variant_name="Default",
            sku="AC-12K-DEFAULT",
            quantity=2,
            unit_price=Money(Decimal("100.00")),
        ),
        OrderItem(
            product_id=uuid4(),
            variant_id=uuid4(),
            product_name="Wall Bracket",
            variant_name="Default",
            sku="BR-1-DEFAULT",
            quantity=1,
            unit_price=Money(Decimal("25.50")),
        ),
    ]
    return Order.place(
        order_number=OrderNumber.for_sequence(2026, 1),
        customer_email="Buyer@Example.com",
        items=items,
        shipping_address={"city": "Lisbon"},
        shipping_method="standard",
        shipping_cost=Money(Decimal("5.99")),
        tax_amount=Money(Decimal("45.10")),
    )


class TestOrderPlacement:
    def test_totals(self):
        order = place_order()

        assert order.subtotal.amount == Decimal("225.50")
        assert order.total.amount == Decimal("276.59")
        assert order.customer_email == "buyer@example.com"

    def test_place_records_event_and_timeline(self):
        order = place_order()

        assert order.status == OrderStatus.PENDING
        assert order.timeline[0].description == "Order placed"
        event = order.get_domain_events()[0]
        assert isinstance(event, OrderPlacedEvent)
        assert event.order_number == "ORD-2026-000001"
        assert event.item_skus == ["AC-12K-DEFAULT", "BR-1-DEFAULT"]

    def test_item_currency_must_match(self):
        order = place_order()
        item = OrderItem(
            product_id=uuid4(),
            variant_id=uuid4(),
            product_name="Filter",
            variant_name="Default",
            sku="F-1",
            quantity=1,
            unit_price=Money(Decimal("9.00"), "USD"),
        )

        with pytest.raises(ValueError, match="does not match order currency"):
            order.add_item(item)


class TestOrderWorkflow:
    def test_happy_path_sets_timestamps(self):
        order = place_order()

        order.set_status(OrderStatus.PAID)
        order.set_status(OrderStatus.PROCESSING)
        order.set_status(OrderStatus.SHIPPED)
        order.set_status(OrderStatus.DELIVERED)

        assert order.paid_at is not None
        assert order.shipped_at is not None
        assert order.delivered_at is not None
        assert [t.status for t in order.timeline][-1] == OrderStatus.DELIVERED

    def test_invalid_transition_raises(self):
        order = place_order()

        with pytest.raises(InvalidOrderTransitionError) as exc_info:
            order.set_status(OrderStatus.SHIPPED)

        assert exc_info.value.message == "Cannot transition order from Pending to Shipped"

    def test_cancel_records_events(self):
        order = place_order()
        order.clear_domain_events()

        order.cancel("Changed my mind")

        assert order.status == OrderStatus.CANCELLED
        assert order.cancellation_reason == "Changed my mind"
        assert order.cancelled_at is not None
        kinds = [type(e) for e in order.get_domain_events()]
        assert kinds == [OrderStatusChangedEvent, OrderCancelledEvent]

    def test_shipped_order_cannot_be_cancelled(self):
        order = place_order()
        order.set_status(OrderStatus.PAID)
        order.set_status(OrderStatus.PROCESSING)
        order.set_status(OrderStatus.SHIPPED)

        assert order.can_be_cancelled is False
        with pytest.raises(InvalidOrderTransitionError):
            order.cancel()

    def test_append_note_keeps_history(self):
        order = place_order()

        order.append_note("Gate code 1234")
        order.append_note("Call before delivery")

        lines = order.notes.split("\n")
        assert len(lines) == 2
        assert lines[1].endswith("Call before delivery")

    def test_status_parse_is_case_insensitive(self):
        assert OrderStatus.parse("shipped") == OrderStatus.SHIPPED
        assert OrderStatus.parse("lost") is None


class TestOrderNumber:
    def test_for_sequence_pads_to_six_digits(self):
        number = OrderNumber.for_sequence(2026, 415)

        assert str(number) == "ORD-2026-000415"
        assert number.year == 2026
        assert number.sequence == 415

    def test_normalizes_case(self):
        assert OrderNumber("ord-2026-000001").value == "ORD-2026-000001"

    @pytest.mark.parametrize("value", ["", "ORD-26-000001", "ORDER-2026-000001", "ORD-2026-12"])
    def test_rejects_malformed_numbers(self, value):
        with pytest.raises(ValueError):
            OrderNumber(value)

    def test_sequence_starts_at_one(self):
        with pytest.raises(ValueError):
            OrderNumber.for_sequence(2026, 0)
