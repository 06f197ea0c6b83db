"""Application DTOs for address book operations."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from core.domain.entities.address import Address


class AddressDto(BaseModel):
    """Response DTO for a saved address."""

    id: UUID
    full_name: str
    address_line1: str
    address_line2: Optional[str] = None
    city: str
    state: Optional[str] = None
    postal_code: str
    country: str
    country_code: str
    phone: Optional[str] = None
    is_default: bool = False
    type: str = Field(..., description="Shipping or Billing")
    formatted: str = Field(..., description="Multi-line postal representation")
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, address: Address) -> "AddressDto":
        return cls(
            id=address.id,
            full_name=address.full_name,
            address_line1=address.address_line1,
            address_line2=address.address_line2,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
            country_code=address.country_code,
            phone=address.phone,
            is_default=address.is_default,
            type=address.type.value,
            formatted=address.to_formatted_string(),
            created_at=address.created_at,
            updated_at=address.updated_at,
        )
