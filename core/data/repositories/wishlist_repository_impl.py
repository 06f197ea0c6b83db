"""SQLAlchemy implementation of WishlistRepository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.wishlist import Wishlist
from core.domain.repositories.wishlist_repository import WishlistRepository

from ..mappers import WishlistMapper
from ..models.wishlist_model import WishlistModel


class SqlAlchemyWishlistRepository(WishlistRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_user(self, user_id: UUID) -> Optional[Wishlist]:
        result = await self._session.execute(
            select(WishlistModel).where(WishlistModel.user_id == user_id)
        )
        model = result.scalar_one_or_none()
        return WishlistMapper.to_domain(model) if model else None

    async def get_by_share_token(self, token: str) -> Optional[Wishlist]:
        result = await self._session.execute(
            select(WishlistModel).where(WishlistModel.share_token == token)
        )
        model = result.scalar_one_or_none()
        return WishlistMapper.to_domain(model) if model else None

    async def save(self, wishlist: Wishlist) -> None:
        existing = await self._session.get(WishlistModel, wishlist.id)

        if existing:
            WishlistMapper.update_persistence(wishlist, existing)
        else:
            self._session.add(WishlistMapper.to_persistence(wishlist))

        await self._session.flush()
