"""SQLAlchemy implementation of OrderRepository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.repositories.order_repository import OrderRepository
from core.domain.repositories.paging import Page
from core.domain.value_objects import OrderNumber

from ..mappers import OrderMapper
from ..models.order_model import OrderModel


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    async def save(self, order: Order) -> None:
        """Persist order aggregate.

        Args:
            order: Order domain aggregate
        """
        # Check if exists (upsert logic)
        existing = await self._session.get(OrderModel, order.id)

        if existing:
            OrderMapper.update_persistence(order, existing)
        else:
            self._session.add(OrderMapper.to_persistence(order))

        await self._session.flush()  # Propagate to DB without committing

    async def get(self, order_id: UUID) -> Optional[Order]:
        """Retrieve order by unique identifier.

        Args:
            order_id: Order UUID

        Returns:
            Order if found, None otherwise
        """
        model = await self._session.get(OrderModel, order_id)
        if not model:
            return None
        return OrderMapper.to_domain(model)

    async def get_by_number(self, order_number: OrderNumber) -> Optional[Order]:
        result = await self._session.execute(
            select(OrderModel).where(OrderModel.order_number == order_number.value)
        )
        model = result.scalar_one_or_none()
        return OrderMapper.to_domain(model) if model else None

    async def count_for_year(self, year: int) -> int:
        total = await self._session.scalar(
            select(func.count(OrderModel.id)).where(
                OrderModel.order_number.like(f"ORD-{year:04d}-%")
            )
        )
        return total or 0

    async def list_for_user(
        self,
        user_id: UUID,
        page: int = 1,
        page_size: int = 10,
        status: Optional[OrderStatus] = None,
    ) -> Page[Order]:
        query = select(OrderModel).where(OrderModel.user_id == user_id)
        if status is not None:
            query = query.where(OrderModel.status == status.value)
        return await self._paginate(query, page, page_size)

    async def search(
        self,
        page: int = 1,
        page_size: int = 20,
        status: Optional[OrderStatus] = None,
        search: Optional[str] = None,
    ) -> Page[Order]:
        query = select(OrderModel)
        if status is not None:
            query = query.where(OrderModel.status == status.value)
        if search:
            pattern = f"%{search.strip().lower()}%"
            query = query.where(
                or_(
                    func.lower(OrderModel.order_number).like(pattern),
                    func.lower(OrderModel.customer_email).like(pattern),
                )
            )
        return await self._paginate(query, page, page_size)

    async def _paginate(self, query, page: int, page_size: int) -> Page[Order]:
        total = await self._session.scalar(
            select(func.count()).select_from(query.subquery())
        )
        result_page = Page(items=[], total_count=total or 0, page=page, page_size=page_size)
        result = await self._session.execute(
            query.order_by(OrderModel.created_at.desc(), OrderModel.order_number.desc())
            .offset(result_page.offset)
            .limit(page_size)
        )
        result_page.items = [OrderMapper.to_domain(model) for model in result.scalars().all()]
        return result_page
