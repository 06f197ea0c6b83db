"""Database models."""

from .address_model import AddressModel
from .base import Base
from .cart_model import CartItemModel, CartModel
from .event_model import EventModel
from .order_model import OrderItemModel, OrderModel, OrderTimelineModel
from .product_model import (
    PriceHistoryModel,
    ProductModel,
    ProductTagModel,
    ProductTranslationModel,
    ProductVariantModel,
)
from .question_model import AnswerModel, QuestionModel
from .wishlist_model import WishlistItemModel, WishlistModel

__all__ = [
    "AddressModel",
    "AnswerModel",
    "Base",
    "CartItemModel",
    "CartModel",
    "EventModel",
    "OrderItemModel",
    "OrderModel",
    "OrderTimelineModel",
    "PriceHistoryModel",
    "ProductModel",
    "ProductTagModel",
    "ProductTranslationModel",
    "ProductVariantModel",
    "QuestionModel",
    "WishlistItemModel",
    "WishlistModel",
]
