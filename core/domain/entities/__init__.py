"""Domain entities and aggregates."""
from .address import Address
from .cart import Cart, CartItem
from .order import Order, OrderItem, OrderTimelineEntry
from .price_history import PriceHistoryEntry
from .product import (
    Product,
    ProductFeature,
    ProductTranslation,
    ProductVariant,
    TranslatedContent,
    slugify,
)
from .question import ProductAnswer, ProductQuestion
from .wishlist import Wishlist, WishlistItem

__all__ = [
    "Address",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderTimelineEntry",
    "PriceHistoryEntry",
    "Product",
    "ProductAnswer",
    "ProductFeature",
    "ProductQuestion",
    "ProductTranslation",
    "ProductVariant",
    "TranslatedContent",
    "Wishlist",
    "WishlistItem",
    "slugify",
]
