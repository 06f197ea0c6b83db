"""
Address book domain service.

Keeps the default-address invariant for a single user: whenever the user
has at least one address, exactly one of them is the default.
"""
from typing import Dict, List, Optional
from uuid import UUID

from ..entities.address import Address


class AddressBook:
    """
    All addresses of one user, with default-address bookkeeping.

    Every mutation records the addresses it touched so the caller only has
    to persist ``changed`` (and delete ``removed``).
    """

    def __init__(self, user_id: UUID, addresses: List[Address]):
        self.user_id = user_id
        self._addresses: List[Address] = sorted(addresses, key=lambda a: a.created_at)
        self._changed: Dict[UUID, Address] = {}
        self.removed: Optional[Address] = None

    @property
    def addresses(self) -> List[Address]:
        return list(self._addresses)

    @property
    def changed(self) -> List[Address]:
        return list(self._changed.values())

    @property
    def default(self) -> Optional[Address]:
        return next((a for a in self._addresses if a.is_default), None)

    def get(self, address_id: UUID) -> Optional[Address]:
        return next((a for a in self._addresses if a.id == address_id), None)

    def add(self, address: Address, make_default: bool = False) -> Address:
        """Add an address; the first address always becomes the default."""
        if address.user_id != self.user_id:
            raise ValueError("Address belongs to a different user")

        if make_default:
            self._clear_defaults()
            address.set_default(True)
        elif not self._addresses:
            address.set_default(True)
        else:
            address.is_default = False

        self._addresses.append(address)
        self._mark(address)
        return address

    def update(self, address_id: UUID, make_default: bool) -> Address:
        """Apply the default flag requested by an address update."""
        address = self._require(address_id)

        if make_default and not address.is_default:
            self._clear_defaults()
            address.set_default(True)
        elif not make_default and address.is_default:
            successor = self._oldest_other(address)
            if successor is not None:
                address.set_default(False)
                successor.set_default(True)
                self._mark(successor)

        self._mark(address)
        return address

    def set_default(self, address_id: UUID) -> Address:
        address = self._require(address_id)
        if address.is_default:
            return address

        self._clear_defaults()
        address.set_default(True)
        self._mark(address)
        return address

    def remove(self, address_id: UUID) -> Address:
        """Remove an address, promoting the oldest remaining one if needed."""
        address = self._require(address_id)
        self._addresses.remove(address)
        self._changed.pop(address.id, None)
        self.removed = address

        if address.is_default and self._addresses:
            successor = self._addresses[0]
            successor.set_default(True)
            self._mark(successor)
        return address

    def _require(self, address_id: UUID) -> Address:
        address = self.get(address_id)
        if address is None:
            raise KeyError(address_id)
        return address

    def _oldest_other(self, address: Address) -> Optional[Address]:
        return next((a for a in self._addresses if a.id != address.id), None)

    def _clear_defaults(self) -> None:
        for other in self._addresses:
            if other.is_default:
                other.set_default(False)
                self._mark(other)

    def _mark(self, address: Address) -> None:
        self._changed[address.id] = address
