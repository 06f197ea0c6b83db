"""Repository interface for Order aggregate."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from ..entities.order import Order
from ..enums import OrderStatus
from ..value_objects import OrderNumber
from .paging import Page


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def save(self, order: Order) -> None:
        """Persist order aggregate (items and timeline included).

        Args:
            order: Order aggregate to persist
        """
        pass

    @abstractmethod
    async def get(self, order_id: UUID) -> Optional[Order]:
        """Retrieve order by identifier.

        Args:
            order_id: Order UUID

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_number(self, order_number: OrderNumber) -> Optional[Order]:
        pass

    @abstractmethod
    async def count_for_year(self, year: int) -> int:
        """Number of orders created in ``year`` (drives order numbering)."""
        pass

    @abstractmethod
    async def list_for_user(
        self,
        user_id: UUID,
        page: int = 1,
        page_size: int = 10,
        status: Optional[OrderStatus] = None,
    ) -> Page[Order]:
        """A user's orders, newest first."""
        pass

    @abstractmethod
    async def search(
        self,
        page: int = 1,
        page_size: int = 20,
        status: Optional[OrderStatus] = None,
        search: Optional[str] = None,
    ) -> Page[Order]:
        """All orders for the back office, newest first.

        Args:
            search: Matches order number or customer email (case-insensitive)
        """
        pass
