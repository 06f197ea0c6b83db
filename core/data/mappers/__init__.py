"""Static mappers for domain entities ↔ database models."""

from .address_mapper import AddressMapper
from .cart_mapper import CartItemMapper, CartMapper
from .order_mapper import OrderItemMapper, OrderMapper, OrderTimelineMapper
from .product_mapper import (
    PriceHistoryMapper,
    ProductMapper,
    ProductTranslationMapper,
    ProductVariantMapper,
)
from .question_mapper import AnswerMapper, QuestionMapper
from .wishlist_mapper import WishlistItemMapper, WishlistMapper

__all__ = [
    "AddressMapper",
    "AnswerMapper",
    "CartItemMapper",
    "CartMapper",
    "OrderItemMapper",
    "OrderMapper",
    "OrderTimelineMapper",
    "PriceHistoryMapper",
    "ProductMapper",
    "ProductTranslationMapper",
    "ProductVariantMapper",
    "QuestionMapper",
    "WishlistItemMapper",
    "WishlistMapper",
]
