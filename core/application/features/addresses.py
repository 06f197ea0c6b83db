"""
Address book commands and queries.

Every operation acts on the addresses of the authenticated user; another
user's address is reported as not found.
"""
from typing import List, Optional
from uuid import UUID

from core.application.dtos.address_dto import AddressDto
from core.application.mediator import Request, RequestHandler, RequestValidator, handles, validates
from core.application.result import Result
from core.application.validation import check_max_length, check_required
from core.domain.entities.address import Address
from core.domain.enums import AddressType
from core.domain.services.address_book import AddressBook
from core.infrastructure.logging import get_logger

logger = get_logger(__name__)

ADDRESS_NOT_FOUND = "Address not found"


# =============================================================================
# REQUESTS
# =============================================================================

class GetUserAddressesQuery(Request):
    pass


class GetAddressQuery(Request):
    address_id: UUID


class AddressFields(Request):
    """Descriptive fields shared by create and update."""

    full_name: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    phone: Optional[str] = None
    type: AddressType = AddressType.SHIPPING
    is_default: bool = False


class CreateAddressCommand(AddressFields):
    pass


class UpdateAddressCommand(AddressFields):
    address_id: UUID


class DeleteAddressCommand(Request):
    address_id: UUID


class SetDefaultAddressCommand(Request):
    address_id: UUID


# =============================================================================
# VALIDATORS
# =============================================================================

def address_errors(request: AddressFields) -> List[str]:
    errors: List[str] = []
    check_required(errors, request.full_name, "Full name", 100)
    check_required(errors, request.address_line1, "Address line 1", 200)
    check_max_length(errors, request.address_line2, "Address line 2", 200)
    check_required(errors, request.city, "City", 100)
    check_max_length(errors, request.state, "State", 100)
    check_required(errors, request.postal_code, "Postal code", 20)
    check_required(errors, request.country, "Country", 100)
    if not request.country_code or not request.country_code.strip():
        errors.append("Country code is required")
    elif len(request.country_code.strip()) != 2:
        errors.append("Country code must be exactly 2 characters")
    check_max_length(errors, request.phone, "Phone", 30)
    return errors


@validates(CreateAddressCommand)
class CreateAddressValidator(RequestValidator[CreateAddressCommand]):
    def validate(self, request: CreateAddressCommand) -> List[str]:
        return address_errors(request)


@validates(UpdateAddressCommand)
class UpdateAddressValidator(RequestValidator[UpdateAddressCommand]):
    def validate(self, request: UpdateAddressCommand) -> List[str]:
        return address_errors(request)


# =============================================================================
# HANDLERS
# =============================================================================

def default_first(addresses: List[Address]) -> List[Address]:
    """Default address first, then newest first."""
    newest = sorted(addresses, key=lambda a: a.created_at, reverse=True)
    return sorted(newest, key=lambda a: not a.is_default)


@handles(GetUserAddressesQuery)
class GetUserAddressesHandler(RequestHandler[GetUserAddressesQuery, Result[List[AddressDto]]]):
    async def handle(self, request: GetUserAddressesQuery) -> Result[List[AddressDto]]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        async with self.context.uow() as uow:
            addresses = await uow.addresses.list_for_user(self.user.user_id)

        return Result.success([AddressDto.from_entity(a) for a in default_first(addresses)])


@handles(GetAddressQuery)
class GetAddressHandler(RequestHandler[GetAddressQuery, Result[AddressDto]]):
    async def handle(self, request: GetAddressQuery) -> Result[AddressDto]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        async with self.context.uow() as uow:
            address = await uow.addresses.get(request.address_id)

        if address is None or address.user_id != self.user.user_id:
            return Result.not_found(ADDRESS_NOT_FOUND)
        return Result.success(AddressDto.from_entity(address))


@handles(CreateAddressCommand)
class CreateAddressHandler(RequestHandler[CreateAddressCommand, Result[AddressDto]]):
    """Adds an address; the user's first address always becomes the default."""

    async def handle(self, request: CreateAddressCommand) -> Result[AddressDto]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        async with self.context.uow() as uow:
            book = AddressBook(self.user.user_id, await uow.addresses.list_for_user(self.user.user_id))
            address = Address.create(
                user_id=self.user.user_id,
                full_name=request.full_name,
                address_line1=request.address_line1,
                address_line2=request.address_line2,
                city=request.city,
                state=request.state,
                postal_code=request.postal_code,
                country=request.country,
                country_code=request.country_code,
                phone=request.phone,
                type=request.type,
            )
            book.add(address, make_default=request.is_default)

            for changed in book.changed:
                await uow.addresses.save(changed)
            await uow.commit()

        logger.info(f"Address {address.id} created for user {self.user.user_id} (default={address.is_default})")
        return Result.success(AddressDto.from_entity(address))


@handles(UpdateAddressCommand)
class UpdateAddressHandler(RequestHandler[UpdateAddressCommand, Result[AddressDto]]):
    async def handle(self, request: UpdateAddressCommand) -> Result[AddressDto]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        async with self.context.uow() as uow:
            book = AddressBook(self.user.user_id, await uow.addresses.list_for_user(self.user.user_id))
            address = book.get(request.address_id)
            if address is None:
                return Result.not_found(ADDRESS_NOT_FOUND)

            address.update_details(
                full_name=request.full_name,
                address_line1=request.address_line1,
                address_line2=request.address_line2,
                city=request.city,
                state=request.state,
                postal_code=request.postal_code,
                country=request.country,
                country_code=request.country_code,
                phone=request.phone,
                type=request.type,
            )
            book.update(address.id, make_default=request.is_default)

            for changed in book.changed:
                await uow.addresses.save(changed)
            await uow.commit()

        return Result.success(AddressDto.from_entity(address))


@handles(DeleteAddressCommand)
class DeleteAddressHandler(RequestHandler[DeleteAddressCommand, Result[bool]]):
    async def handle(self, request: DeleteAddressCommand) -> Result[bool]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        async with self.context.uow() as uow:
            book = AddressBook(self.user.user_id, await uow.addresses.list_for_user(self.user.user_id))
            if book.get(request.address_id) is None:
                return Result.not_found(ADDRESS_NOT_FOUND)

            removed = book.remove(request.address_id)
            await uow.addresses.delete(removed)
            for changed in book.changed:
                await uow.addresses.save(changed)
            await uow.commit()

        if removed.is_default and book.default is not None:
            logger.info(f"Address {book.default.id} promoted to default for user {self.user.user_id}")
        return Result.success(True)


@handles(SetDefaultAddressCommand)
class SetDefaultAddressHandler(RequestHandler[SetDefaultAddressCommand, Result[AddressDto]]):
    async def handle(self, request: SetDefaultAddressCommand) -> Result[AddressDto]:
        if not self.user.is_authenticated:
            return Result.unauthorized()

        async with self.context.uow() as uow:
            book = AddressBook(self.user.user_id, await uow.addresses.list_for_user(self.user.user_id))
            if book.get(request.address_id) is None:
                return Result.not_found(ADDRESS_NOT_FOUND)

            address = book.set_default(request.address_id)
            for changed in book.changed:
                await uow.addresses.save(changed)
            await uow.commit()

        return Result.success(AddressDto.from_entity(address))
