"""Static mappers for Wishlist ↔ WishlistModel."""

from core.domain.entities.wishlist import Wishlist, WishlistItem

from ..models.wishlist_model import WishlistItemModel, WishlistModel
from .collections import sync_children


class WishlistItemMapper:

    @staticmethod
    def to_domain(model: WishlistItemModel) -> WishlistItem:
        return WishlistItem(
            id=model.id,
            product_id=model.product_id,
            note=model.note,
            priority=model.priority,
            added_at=model.added_at,
        )

    @staticmethod
    def to_persistence(entity: WishlistItem) -> WishlistItemModel:
        return WishlistItemModel(
            id=entity.id,
            product_id=entity.product_id,
            note=entity.note,
            priority=entity.priority,
            added_at=entity.added_at,
        )

    @staticmethod
    def update_persistence(entity: WishlistItem, model: WishlistItemModel) -> WishlistItemModel:
        model.note = entity.note
        model.priority = entity.priority
        return model


class WishlistMapper:
    """Static mapper for Wishlist ↔ WishlistModel transformation with nested items."""

    @staticmethod
    def to_domain(model: WishlistModel) -> Wishlist:
        return Wishlist(
            id=model.id,
            user_id=model.user_id,
            is_public=model.is_public,
            share_token=model.share_token,
            items=[WishlistItemMapper.to_domain(item) for item in model.items],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: Wishlist) -> WishlistModel:
        model = WishlistModel(id=entity.id, user_id=entity.user_id, created_at=entity.created_at)
        model.items = []
        return WishlistMapper.update_persistence(entity, model)

    @staticmethod
    def update_persistence(entity: Wishlist, model: WishlistModel) -> WishlistModel:
        model.is_public = entity.is_public
        model.share_token = entity.share_token
        model.updated_at = entity.updated_at
        model.items = sync_children(
            model.items,
            entity.items,
            key=lambda i: i.id,
            create=WishlistItemMapper.to_persistence,
            update=WishlistItemMapper.update_persistence,
        )
        return model
