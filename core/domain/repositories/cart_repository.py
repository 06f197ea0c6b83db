"""Repository interface for shopping carts."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from ..entities.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    async def get_for_user(self, user_id: UUID) -> Optional[Cart]:
        pass

    @abstractmethod
    async def get_for_session(self, session_id: str) -> Optional[Cart]:
        """Guest cart for an anonymous session (user-owned carts excluded)."""
        pass

    @abstractmethod
    async def save(self, cart: Cart) -> None:
        pass

    @abstractmethod
    async def delete(self, cart: Cart) -> None:
        pass
