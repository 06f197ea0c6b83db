"""SQLAlchemy implementations of ProductRepository and PriceHistoryRepository."""

from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import and_, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.price_history import PriceHistoryEntry
from core.domain.entities.product import Product
from core.domain.repositories.paging import Page
from core.domain.repositories.product_repository import (
    PriceHistoryRepository,
    ProductRepository,
    ProductSearchCriteria,
)

from ..mappers import PriceHistoryMapper, ProductMapper
from ..models.product_model import (
    PriceHistoryModel,
    ProductModel,
    ProductTagModel,
    ProductVariantModel,
)

_SORT_COLUMNS = {
    "newest": (ProductModel.created_at.desc(),),
    "price_asc": (ProductModel.base_price.asc(),),
    "price_desc": (ProductModel.base_price.desc(),),
    "name": (ProductModel.name.asc(),),
}


def _has_stock():
    return exists().where(
        and_(
            ProductVariantModel.product_id == ProductModel.id,
            ProductVariantModel.is_active.is_(True),
            ProductVariantModel.stock_quantity > 0,
        )
    )


class SqlAlchemyProductRepository(ProductRepository):
    """Concrete implementation of ProductRepository using SQLAlchemy.

    Variants, tags and translations are loaded eagerly through the
    relationship ``selectin`` strategy.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, product_id: UUID) -> Optional[Product]:
        model = await self._session.get(ProductModel, product_id)
        if model is None:
            return None
        return ProductMapper.to_domain(model)

    async def get_by_slug(self, slug: str) -> Optional[Product]:
        result = await self._session.execute(
            select(ProductModel).where(ProductModel.slug == slug.strip().lower())
        )
        model = result.scalar_one_or_none()
        return ProductMapper.to_domain(model) if model else None

    async def get_by_variant(self, variant_id: UUID) -> Optional[Product]:
        result = await self._session.execute(
            select(ProductModel)
            .join(ProductVariantModel, ProductVariantModel.product_id == ProductModel.id)
            .where(ProductVariantModel.id == variant_id)
        )
        model = result.scalar_one_or_none()
        return ProductMapper.to_domain(model) if model else None

    async def list_by_ids(self, product_ids: Iterable[UUID]) -> List[Product]:
        ids = list(set(product_ids))
        if not ids:
            return []
        result = await self._session.execute(
            select(ProductModel).where(ProductModel.id.in_(ids))
        )
        return [ProductMapper.to_domain(model) for model in result.scalars().all()]

    async def list_active(self, category: Optional[str] = None) -> List[Product]:
        query = select(ProductModel).where(ProductModel.is_active.is_(True))
        if category:
            query = query.where(ProductModel.category == category)
        result = await self._session.execute(query.order_by(ProductModel.name))
        return [ProductMapper.to_domain(model) for model in result.scalars().all()]

    async def search(self, criteria: ProductSearchCriteria) -> Page[Product]:
        """Page through active products matching ``criteria``.

        Args:
            criteria: Filters, sort key and paging

        Returns:
            Page of Product aggregates with the total match count
        """
        query = select(ProductModel).where(ProductModel.is_active.is_(True))

        if criteria.category:
            query = query.where(ProductModel.category == criteria.category)
        if criteria.brand:
            query = query.where(func.lower(ProductModel.brand) == criteria.brand.strip().lower())
        if criteria.min_price is not None:
            query = query.where(ProductModel.base_price >= criteria.min_price)
        if criteria.max_price is not None:
            query = query.where(ProductModel.base_price <= criteria.max_price)
        if criteria.search:
            pattern = f"%{criteria.search.strip().lower()}%"
            query = query.where(
                or_(
                    func.lower(ProductModel.name).like(pattern),
                    func.lower(ProductModel.sku).like(pattern),
                    func.lower(ProductModel.brand).like(pattern),
                )
            )
        if criteria.tag:
            query = query.where(
                exists().where(
                    and_(
                        ProductTagModel.product_id == ProductModel.id,
                        ProductTagModel.tag == criteria.tag.strip().lower(),
                    )
                )
            )
        if criteria.in_stock is True:
            query = query.where(_has_stock())
        elif criteria.in_stock is False:
            query = query.where(~_has_stock())

        total = await self._session.scalar(
            select(func.count()).select_from(query.subquery())
        )

        page = Page(items=[], total_count=total or 0, page=criteria.page, page_size=criteria.page_size)
        order_by = _SORT_COLUMNS.get(criteria.sort, _SORT_COLUMNS["newest"])
        result = await self._session.execute(
            query.order_by(*order_by, ProductModel.sku)
            .offset(page.offset)
            .limit(criteria.page_size)
        )
        page.items = [ProductMapper.to_domain(model) for model in result.scalars().all()]
        return page

    async def sku_exists(self, sku: str) -> bool:
        result = await self._session.execute(
            select(ProductModel.id).where(func.upper(ProductModel.sku) == sku.strip().upper())
        )
        return result.first() is not None

    async def slug_exists(self, slug: str) -> bool:
        result = await self._session.execute(
            select(ProductModel.id).where(ProductModel.slug == slug.strip().lower())
        )
        return result.first() is not None

    async def variant_sku_exists(self, sku: str) -> bool:
        result = await self._session.execute(
            select(ProductVariantModel.id).where(
                func.upper(ProductVariantModel.sku) == sku.strip().upper()
            )
        )
        return result.first() is not None

    async def save(self, product: Product) -> None:
        """Persist product aggregate with its children.

        Args:
            product: Product domain aggregate
        """
        existing = await self._session.get(ProductModel, product.id)

        if existing:
            ProductMapper.update_persistence(product, existing)
        else:
            self._session.add(ProductMapper.to_persistence(product))

        await self._session.flush()


class SqlAlchemyPriceHistoryRepository(PriceHistoryRepository):
    """Append-only price history backed by the product_price_history table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, entry: PriceHistoryEntry) -> None:
        self._session.add(PriceHistoryMapper.to_persistence(entry))
        await self._session.flush()

    async def list_for_product(self, product_id: UUID, since: datetime) -> List[PriceHistoryEntry]:
        result = await self._session.execute(
            select(PriceHistoryModel)
            .where(
                PriceHistoryModel.product_id == product_id,
                PriceHistoryModel.recorded_at >= since,
            )
            .order_by(PriceHistoryModel.recorded_at)
        )
        return [PriceHistoryMapper.to_domain(model) for model in result.scalars().all()]
