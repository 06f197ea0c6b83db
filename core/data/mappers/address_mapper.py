"""Static mapper for Address ↔ AddressModel."""

from core.domain.entities.address import Address
from core.domain.enums import AddressType

from ..models.address_model import AddressModel


class AddressMapper:
    """Static mapper for Address ↔ AddressModel transformation."""

    @staticmethod
    def to_domain(model: AddressModel) -> Address:
        """Convert ORM model to domain entity.

        Args:
            model: AddressModel instance

        Returns:
            Address domain entity
        """
        return Address(
            id=model.id,
            user_id=model.user_id,
            full_name=model.full_name,
            address_line1=model.address_line1,
            address_line2=model.address_line2,
            city=model.city,
            state=model.state,
            postal_code=model.postal_code,
            country=model.country,
            country_code=model.country_code,
            phone=model.phone,
            is_default=model.is_default,
            type=AddressType(model.type),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: Address) -> AddressModel:
        model = AddressModel(id=entity.id, created_at=entity.created_at)
        return AddressMapper.update_persistence(entity, model)

    @staticmethod
    def update_persistence(entity: Address, model: AddressModel) -> AddressModel:
        """Copy mutable fields of the entity onto an existing row."""
        model.user_id = entity.user_id
        model.full_name = entity.full_name
        model.address_line1 = entity.address_line1
        model.address_line2 = entity.address_line2
        model.city = entity.city
        model.state = entity.state
        model.postal_code = entity.postal_code
        model.country = entity.country
        model.country_code = entity.country_code
        model.phone = entity.phone
        model.is_default = entity.is_default
        model.type = entity.type.value
        model.updated_at = entity.updated_at
        return model
