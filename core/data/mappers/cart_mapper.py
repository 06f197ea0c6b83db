"""Static mappers for Cart ↔ CartModel."""

from decimal import Decimal

from core.domain.entities.cart import Cart, CartItem

from ..models.cart_model import CartItemModel, CartModel
from .collections import sync_children


class CartItemMapper:

    @staticmethod
    def to_domain(model: CartItemModel) -> CartItem:
        return CartItem(
            id=model.id,
            product_id=model.product_id,
            variant_id=model.variant_id,
            quantity=model.quantity,
            unit_price=Decimal(str(model.unit_price)),
            created_at=model.created_at,
        )

    @staticmethod
    def to_persistence(entity: CartItem) -> CartItemModel:
        model = CartItemModel(id=entity.id, created_at=entity.created_at)
        return CartItemMapper.update_persistence(entity, model)

    @staticmethod
    def update_persistence(entity: CartItem, model: CartItemModel) -> CartItemModel:
        model.product_id = entity.product_id
        model.variant_id = entity.variant_id
        model.quantity = entity.quantity
        model.unit_price = entity.unit_price
        return model


class CartMapper:
    """Static mapper for Cart ↔ CartModel transformation with nested items."""

    @staticmethod
    def to_domain(model: CartModel) -> Cart:
        return Cart(
            id=model.id,
            user_id=model.user_id,
            session_id=model.session_id,
            expires_at=model.expires_at,
            items=[CartItemMapper.to_domain(item) for item in model.items],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: Cart) -> CartModel:
        model = CartModel(id=entity.id, created_at=entity.created_at)
        model.items = []
        return CartMapper.update_persistence(entity, model)

    @staticmethod
    def update_persistence(entity: Cart, model: CartModel) -> CartModel:
        model.user_id = entity.user_id
        model.session_id = entity.session_id
        model.expires_at = entity.expires_at
        model.updated_at = entity.updated_at
        model.items = sync_children(
            model.items,
            entity.items,
            key=lambda i: i.id,
            create=CartItemMapper.to_persistence,
            update=CartItemMapper.update_persistence,
        )
        return model
