"""
Address entity.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from ..clock import utcnow
from ..enums import AddressType
from .rules import optional_text, required_text


@dataclass
class Address:
    """A postal address saved in a customer's address book."""
    user_id: UUID
    full_name: str
    address_line1: str
    city: str
    postal_code: str
    country: str
    country_code: str
    address_line2: Optional[str] = None
    state: Optional[str] = None
    phone: Optional[str] = None
    is_default: bool = False
    type: AddressType = AddressType.SHIPPING
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        user_id: UUID,
        full_name: str,
        address_line1: str,
        city: str,
        postal_code: str,
        country: str,
        country_code: str,
        address_line2: Optional[str] = None,
        state: Optional[str] = None,
        phone: Optional[str] = None,
        type: AddressType = AddressType.SHIPPING,
    ) -> "Address":
        """Build a validated, non-default address."""
        address = cls(
            user_id=user_id,
            full_name="",
            address_line1="",
            city="",
            postal_code="",
            country="",
            country_code="",
            type=type,
        )
        address.update_details(
            full_name=full_name,
            address_line1=address_line1,
            address_line2=address_line2,
            city=city,
            state=state,
            postal_code=postal_code,
            country=country,
            country_code=country_code,
            phone=phone,
            type=type,
        )
        address.updated_at = None
        return address

    def update_details(
        self,
        full_name: str,
        address_line1: str,
        city: str,
        postal_code: str,
        country: str,
        country_code: str,
        address_line2: Optional[str] = None,
        state: Optional[str] = None,
        phone: Optional[str] = None,
        type: Optional[AddressType] = None,
    ) -> None:
        """Replace every descriptive field, validating the required ones."""
        self.full_name = required_text(full_name, "Full name", 100)
        self.address_line1 = required_text(address_line1, "Address line 1", 200)
        self.address_line2 = optional_text(address_line2, "Address line 2", 200)
        self.city = required_text(city, "City", 100)
        self.state = optional_text(state, "State", 100)
        self.postal_code = required_text(postal_code, "Postal code", 20)
        self.country = required_text(country, "Country", 100)
        self.country_code = required_text(country_code, "Country code", 3).upper()
        self.phone = optional_text(phone, "Phone", 30)
        if type is not None:
            self.type = type
        self.touch()

    def set_default(self, is_default: bool) -> None:
        self.is_default = is_default
        self.touch()

    def touch(self) -> None:
        self.updated_at = utcnow()

    def to_formatted_string(self) -> str:
        """Multi-line label suitable for shipping documents."""
        parts = [self.full_name, self.address_line1]
        if self.address_line2:
            parts.append(self.address_line2)
        locality = f"{self.city}, {self.state} {self.postal_code}" if self.state \
            else f"{self.city}, {self.postal_code}"
        parts.append(locality.strip())
        parts.append(self.country)
        return "\n".join(parts)
