"""SQLAlchemy repository implementations."""

from .address_repository_impl import SqlAlchemyAddressRepository
from .cart_repository_impl import SqlAlchemyCartRepository
from .order_repository_impl import SqlAlchemyOrderRepository
from .product_repository_impl import (
    SqlAlchemyPriceHistoryRepository,
    SqlAlchemyProductRepository,
)
from .question_repository_impl import SqlAlchemyQuestionRepository
from .wishlist_repository_impl import SqlAlchemyWishlistRepository

__all__ = [
    "SqlAlchemyAddressRepository",
    "SqlAlchemyCartRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyPriceHistoryRepository",
    "SqlAlchemyProductRepository",
    "SqlAlchemyQuestionRepository",
    "SqlAlchemyWishlistRepository",
]
