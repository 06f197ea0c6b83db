"""Address book handlers run through the mediator."""

from uuid import uuid4

import pytest

from core.application.features.addresses import (
    CreateAddressCommand,
    DeleteAddressCommand,
    GetAddressQuery,
    GetUserAddressesQuery,
    SetDefaultAddressCommand,
    UpdateAddressCommand,
)
from core.application.mediator import CurrentUser
from core.application.result import ResultKind
from core.domain.exceptions import ValidationException


def address_command(**overrides) -> CreateAddressCommand:
    fields = {
        "full_name": "Jane Doe",
        "address_line1": "12 Harbour Street",
        "city": "Lisbon",
        "postal_code": "1100-001",
        "country": "Portugal",
        "country_code": "pt",
    }
    fields.update(overrides)
    return CreateAddressCommand(**fields)


async def defaults_of(mediator):
    result = await mediator.send(GetUserAddressesQuery())
    return [a for a in result.value if a.is_default]


class TestCreateAddress:
    @pytest.mark.asyncio
    async def test_first_address_is_default(self, as_customer):
        result = await as_customer.send(address_command())

        assert result.succeeded
        assert result.value.is_default is True
        assert result.value.country_code == "PT"

    @pytest.mark.asyncio
    async def test_new_default_replaces_old(self, as_customer):
        first = (await as_customer.send(address_command())).value
        second = (await as_customer.send(address_command(full_name="Work", is_default=True))).value

        default_ids = [a.id for a in await defaults_of(as_customer)]

        assert default_ids == [second.id]
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_validation_messages(self, as_customer):
        with pytest.raises(ValidationException) as exc_info:
            await as_customer.send(address_command(full_name=" ", country_code="PRT"))

        assert "Full name is required" in exc_info.value.errors
        assert "Country code must be exactly 2 characters" in exc_info.value.errors

    @pytest.mark.asyncio
    async def test_requires_authentication(self, mediator):
        result = await mediator.send(address_command())

        assert result.kind == ResultKind.UNAUTHORIZED
        assert result.error == "User not authenticated"


class TestAddressQueries:
    @pytest.mark.asyncio
    async def test_list_puts_default_first(self, as_customer):
        home = (await as_customer.send(address_command(full_name="Home"))).value
        await as_customer.send(address_command(full_name="Work"))

        addresses = (await as_customer.send(GetUserAddressesQuery())).value

        assert [a.full_name for a in addresses] == ["Home", "Work"]
        assert addresses[0].id == home.id

    @pytest.mark.asyncio
    async def test_other_users_address_is_not_found(self, as_customer, mediator):
        address = (await as_customer.send(address_command())).value
        stranger = mediator.for_user(CurrentUser(user_id=uuid4()))

        result = await stranger.send(GetAddressQuery(address_id=address.id))

        assert result.kind == ResultKind.NOT_FOUND
        assert result.error == "Address not found"


class TestDefaultInvariant:
    @pytest.mark.asyncio
    async def test_delete_default_promotes_oldest(self, as_customer):
        home = (await as_customer.send(address_command(full_name="Home"))).value
        parents = (await as_customer.send(address_command(full_name="Parents"))).value
        await as_customer.send(address_command(full_name="Work"))

        result = await as_customer.send(DeleteAddressCommand(address_id=home.id))

        assert result.succeeded
        assert [a.id for a in await defaults_of(as_customer)] == [parents.id]

    @pytest.mark.asyncio
    async def test_undefault_via_update_promotes_other(self, as_customer):
        home = (await as_customer.send(address_command(full_name="Home"))).value
        work = (await as_customer.send(address_command(full_name="Work"))).value

        update = UpdateAddressCommand(
            address_id=home.id,
            **address_command(full_name="Home sweet home", is_default=False).model_dump(),
        )
        result = await as_customer.send(update)

        assert result.value.full_name == "Home sweet home"
        assert result.value.is_default is False
        assert [a.id for a in await defaults_of(as_customer)] == [work.id]

    @pytest.mark.asyncio
    async def test_set_default(self, as_customer):
        await as_customer.send(address_command(full_name="Home"))
        work = (await as_customer.send(address_command(full_name="Work"))).value

        result = await as_customer.send(SetDefaultAddressCommand(address_id=work.id))

        assert result.value.is_default is True
        assert [a.id for a in await defaults_of(as_customer)] == [work.id]

    @pytest.mark.asyncio
    async def test_delete_unknown_address(self, as_customer):
        result = await as_customer.send(DeleteAddressCommand(address_id=uuid4()))

        assert result.kind == ResultKind.NOT_FOUND
