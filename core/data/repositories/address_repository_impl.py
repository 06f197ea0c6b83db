"""SQLAlchemy implementation of AddressRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.address import Address
from core.domain.repositories.address_repository import AddressRepository

from ..mappers import AddressMapper
from ..models.address_model import AddressModel


class SqlAlchemyAddressRepository(AddressRepository):
    """Concrete implementation of AddressRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    async def list_for_user(self, user_id: UUID) -> List[Address]:
        result = await self._session.execute(
            select(AddressModel)
            .where(AddressModel.user_id == user_id)
            .order_by(AddressModel.created_at, AddressModel.id)
        )
        return [AddressMapper.to_domain(model) for model in result.scalars().all()]

    async def get(self, address_id: UUID) -> Optional[Address]:
        model = await self._session.get(AddressModel, address_id)
        if model is None:
            return None
        return AddressMapper.to_domain(model)

    async def save(self, address: Address) -> None:
        """Insert or update an address.

        Args:
            address: Address domain entity
        """
        existing = await self._session.get(AddressModel, address.id)

        if existing:
            AddressMapper.update_persistence(address, existing)
        else:
            self._session.add(AddressMapper.to_persistence(address))

        await self._session.flush()  # Propagate to DB without committing

    async def delete(self, address: Address) -> None:
        model = await self._session.get(AddressModel, address.id)
        if model is not None:
            await self._session.delete(model)
            await self._session.flush()
