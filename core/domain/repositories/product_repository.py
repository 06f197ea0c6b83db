"""Repository interfaces for the Product aggregate and its price history."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

from ..entities.price_history import PriceHistoryEntry
from ..entities.product import Product
from .paging import Page

SORT_OPTIONS = ("newest", "price_asc", "price_desc", "name")


@dataclass(frozen=True)
class ProductSearchCriteria:
    """Filters for the public catalogue listing (active products only)."""
    page: int = 1
    page_size: int = 20
    category: Optional[str] = None
    brand: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    search: Optional[str] = None
    tag: Optional[str] = None
    in_stock: Optional[bool] = None
    sort: str = "newest"


class ProductRepository(ABC):
    """Abstract repository for Product aggregate persistence."""

    @abstractmethod
    async def get(self, product_id: UUID) -> Optional[Product]:
        """Load a product with variants and translations.

        Args:
            product_id: Product identifier

        Returns:
            Product if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Product]:
        pass

    @abstractmethod
    async def get_by_variant(self, variant_id: UUID) -> Optional[Product]:
        """Load the product owning a variant."""
        pass

    @abstractmethod
    async def list_by_ids(self, product_ids: Iterable[UUID]) -> List[Product]:
        pass

    @abstractmethod
    async def list_active(self, category: Optional[str] = None) -> List[Product]:
        pass

    @abstractmethod
    async def search(self, criteria: ProductSearchCriteria) -> Page[Product]:
        """Page through active products matching ``criteria``."""
        pass

    @abstractmethod
    async def sku_exists(self, sku: str) -> bool:
        """Check product SKU uniqueness (case-insensitive)."""
        pass

    @abstractmethod
    async def slug_exists(self, slug: str) -> bool:
        """Check whether a product already uses ``slug``."""
        pass

    @abstractmethod
    async def variant_sku_exists(self, sku: str) -> bool:
        pass

    @abstractmethod
    async def save(self, product: Product) -> None:
        """Insert or update a product with its variants, tags and translations."""
        pass


class PriceHistoryRepository(ABC):
    """Append-only store of product price observations."""

    @abstractmethod
    async def add(self, entry: PriceHistoryEntry) -> None:
        pass

    @abstractmethod
    async def list_for_product(self, product_id: UUID, since: datetime) -> List[PriceHistoryEntry]:
        """Entries recorded at or after ``since``, oldest first."""
        pass
