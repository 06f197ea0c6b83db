"""Address book endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from apps.api.deps import get_mediator
from apps.api.errors import unwrap
from core.application.dtos.address_dto import AddressDto
from core.application.features.addresses import (
    AddressFields,
    CreateAddressCommand,
    DeleteAddressCommand,
    GetAddressQuery,
    GetUserAddressesQuery,
    SetDefaultAddressCommand,
    UpdateAddressCommand,
)
from core.application.mediator import Mediator

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.get("", response_model=List[AddressDto])
async def list_addresses(mediator: Mediator = Depends(get_mediator)) -> List[AddressDto]:
    """Addresses of the current user, default first."""
    return unwrap(await mediator.send(GetUserAddressesQuery()))


@router.get("/{address_id}", response_model=AddressDto)
async def get_address(address_id: UUID, mediator: Mediator = Depends(get_mediator)) -> AddressDto:
    return unwrap(await mediator.send(GetAddressQuery(address_id=address_id)))


@router.post("", response_model=AddressDto, status_code=status.HTTP_201_CREATED)
async def create_address(
    command: CreateAddressCommand,
    mediator: Mediator = Depends(get_mediator),
) -> AddressDto:
    """Add an address; the first one becomes the default."""
    return unwrap(await mediator.send(command))


@router.put("/{address_id}", response_model=AddressDto)
async def update_address(
    address_id: UUID,
    body: AddressFields,
    mediator: Mediator = Depends(get_mediator),
) -> AddressDto:
    command = UpdateAddressCommand(address_id=address_id, **body.model_dump())
    return unwrap(await mediator.send(command))


@router.delete("/{address_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_address(address_id: UUID, mediator: Mediator = Depends(get_mediator)) -> Response:
    unwrap(await mediator.send(DeleteAddressCommand(address_id=address_id)))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{address_id}/default", response_model=AddressDto)
async def set_default_address(address_id: UUID, mediator: Mediator = Depends(get_mediator)) -> AddressDto:
    return unwrap(await mediator.send(SetDefaultAddressCommand(address_id=address_id)))
