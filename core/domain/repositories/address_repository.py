"""Repository interface for addresses."""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from ..entities.address import Address


class AddressRepository(ABC):
    """Abstract repository for Address persistence."""

    @abstractmethod
    async def list_for_user(self, user_id: UUID) -> List[Address]:
        """All addresses of a user, oldest first."""
        pass

    @abstractmethod
    async def get(self, address_id: UUID) -> Optional[Address]:
        pass

    @abstractmethod
    async def save(self, address: Address) -> None:
        """Insert or update an address."""
        pass

    @abstractmethod
    async def delete(self, address: Address) -> None:
        pass
