"""Repository interface for wishlists."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from ..entities.wishlist import Wishlist


class WishlistRepository(ABC):

    @abstractmethod
    async def get_for_user(self, user_id: UUID) -> Optional[Wishlist]:
        pass

    @abstractmethod
    async def get_by_share_token(self, token: str) -> Optional[Wishlist]:
        pass

    @abstractmethod
    async def save(self, wishlist: Wishlist) -> None:
        pass
