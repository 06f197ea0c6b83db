"""Static mappers for the Order aggregate ↔ database models."""

from decimal import Decimal

from core.domain.entities.order import Order, OrderItem, OrderTimelineEntry
from core.domain.enums import OrderStatus
from core.domain.value_objects import Money, OrderNumber

from ..models.order_model import OrderItemModel, OrderModel, OrderTimelineModel
from .collections import sync_children


class OrderItemMapper:
    """Static mapper for OrderItem ↔ OrderItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderItemModel, currency: str) -> OrderItem:
        """Convert ORM model to domain entity.

        Args:
            model: OrderItemModel instance
            currency: Currency of the owning order

        Returns:
            OrderItem domain entity
        """
        return OrderItem(
            id=model.id,
            product_id=model.product_id,
            variant_id=model.variant_id,
            product_name=model.product_name,
            variant_name=model.variant_name,
            sku=model.sku,
            quantity=model.quantity,
            unit_price=Money(amount=Decimal(str(model.unit_price)), currency=currency),
        )

    @staticmethod
    def to_persistence(entity: OrderItem) -> OrderItemModel:
        """Convert domain entity to ORM model.

        Order lines are immutable once placed, so there is no update path.

        Args:
            entity: OrderItem domain entity

        Returns:
            OrderItemModel instance
        """
        return OrderItemModel(
            id=entity.id,
            product_id=entity.product_id,
            variant_id=entity.variant_id,
            product_name=entity.product_name,
            variant_name=entity.variant_name,
            sku=entity.sku,
            quantity=entity.quantity,
            unit_price=entity.unit_price.amount,
            line_total=entity.line_total.amount,
        )


class OrderTimelineMapper:

    @staticmethod
    def to_domain(model: OrderTimelineModel) -> OrderTimelineEntry:
        return OrderTimelineEntry(
            id=model.id,
            status=OrderStatus(model.status),
            description=model.description,
            notes=model.notes,
            created_at=model.created_at,
        )

    @staticmethod
    def to_persistence(entity: OrderTimelineEntry) -> OrderTimelineModel:
        return OrderTimelineModel(
            id=entity.id,
            status=entity.status.value,
            description=entity.description,
            notes=entity.notes,
            created_at=entity.created_at,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested items."""

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain aggregate (with items and timeline).

        Args:
            model: OrderModel instance

        Returns:
            Order domain aggregate
        """
        currency = model.currency

        def money(value) -> Money:
            return Money(amount=Decimal(str(value)), currency=currency)

        return Order(
            id=model.id,
            order_number=OrderNumber(model.order_number),
            user_id=model.user_id,
            customer_email=model.customer_email,
            customer_phone=model.customer_phone,
            status=OrderStatus(model.status),
            currency=currency,
            items=[OrderItemMapper.to_domain(item, currency) for item in model.items],
            timeline=[OrderTimelineMapper.to_domain(entry) for entry in model.timeline],
            shipping_address=dict(model.shipping_address or {}),
            billing_address=dict(model.billing_address) if model.billing_address else None,
            shipping_method=model.shipping_method,
            tracking_number=model.tracking_number,
            subtotal=money(model.subtotal),
            shipping_cost=money(model.shipping_cost),
            tax_amount=money(model.tax_amount),
            discount_amount=money(model.discount_amount),
            paid_at=model.paid_at,
            shipped_at=model.shipped_at,
            delivered_at=model.delivered_at,
            cancelled_at=model.cancelled_at,
            cancellation_reason=model.cancellation_reason,
            notes=model.notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert domain aggregate to ORM model (with nested items).

        Args:
            entity: Order domain aggregate

        Returns:
            OrderModel instance
        """
        model = OrderModel(
            id=entity.id,
            order_number=str(entity.order_number),
            created_at=entity.created_at,
        )
        model.items = [OrderItemMapper.to_persistence(item) for item in entity.items]
        model.timeline = []
        return OrderMapper.update_persistence(entity, model)

    @staticmethod
    def update_persistence(entity: Order, model: OrderModel) -> OrderModel:
        """Update existing ORM model from domain entity (for updates).

        Timeline entries are append-only: new entries are added, existing
        rows are kept as they are.

        Args:
            entity: Order domain aggregate
            model: Existing OrderModel instance

        Returns:
            Updated OrderModel instance
        """
        model.user_id = entity.user_id
        model.customer_email = entity.customer_email
        model.customer_phone = entity.customer_phone
        model.status = entity.status.value
        model.currency = entity.currency
        model.subtotal = entity.subtotal.amount
        model.shipping_cost = entity.shipping_cost.amount
        model.tax_amount = entity.tax_amount.amount
        model.discount_amount = entity.discount_amount.amount
        model.total = entity.total.amount
        model.shipping_address = dict(entity.shipping_address)
        model.billing_address = dict(entity.billing_address) if entity.billing_address else None
        model.shipping_method = entity.shipping_method
        model.tracking_number = entity.tracking_number
        model.paid_at = entity.paid_at
        model.shipped_at = entity.shipped_at
        model.delivered_at = entity.delivered_at
        model.cancelled_at = entity.cancelled_at
        model.cancellation_reason = entity.cancellation_reason
        model.notes = entity.notes
        model.updated_at = entity.updated_at

        model.timeline = sync_children(
            model.timeline,
            entity.timeline,
            key=lambda e: e.id,
            create=OrderTimelineMapper.to_persistence,
            update=lambda entry, row: row,
        )
        return model
