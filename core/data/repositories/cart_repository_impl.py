"""SQLAlchemy implementation of CartRepository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.cart import Cart
from core.domain.repositories.cart_repository import CartRepository

from ..mappers import CartMapper
from ..models.cart_model import CartModel


class SqlAlchemyCartRepository(CartRepository):
    """Concrete implementation of CartRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_user(self, user_id: UUID) -> Optional[Cart]:
        result = await self._session.execute(
            select(CartModel)
            .where(CartModel.user_id == user_id)
            .order_by(CartModel.created_at.desc())
            .limit(1)
        )
        model = result.scalar_one_or_none()
        return CartMapper.to_domain(model) if model else None

    async def get_for_session(self, session_id: str) -> Optional[Cart]:
        result = await self._session.execute(
            select(CartModel)
            .where(CartModel.session_id == session_id, CartModel.user_id.is_(None))
            .order_by(CartModel.created_at.desc())
            .limit(1)
        )
        model = result.scalar_one_or_none()
        return CartMapper.to_domain(model) if model else None

    async def save(self, cart: Cart) -> None:
        existing = await self._session.get(CartModel, cart.id)

        if existing:
            CartMapper.update_persistence(cart, existing)
        else:
            self._session.add(CartMapper.to_persistence(cart))

        await self._session.flush()

    async def delete(self, cart: Cart) -> None:
        model = await self._session.get(CartModel, cart.id)
        if model is not None:
            await self._session.delete(model)
            await self._session.flush()
