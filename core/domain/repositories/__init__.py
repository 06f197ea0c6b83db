"""Repository interfaces (implemented in core.data.repositories)."""
from .address_repository import AddressRepository
from .cart_repository import CartRepository
from .order_repository import OrderRepository
from .paging import Page
from .product_repository import (
    SORT_OPTIONS,
    PriceHistoryRepository,
    ProductRepository,
    ProductSearchCriteria,
)
from .question_repository import QuestionPage, QuestionRepository
from .wishlist_repository import WishlistRepository

__all__ = [
    "AddressRepository",
    "CartRepository",
    "OrderRepository",
    "Page",
    "PriceHistoryRepository",
    "ProductRepository",
    "ProductSearchCriteria",
    "QuestionPage",
    "QuestionRepository",
    "SORT_OPTIONS",
    "WishlistRepository",
]
