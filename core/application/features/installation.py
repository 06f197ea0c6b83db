"""Installation packages offered with a product."""
from uuid import UUID

from core.application.dtos.catalog_dto import InstallationOptionDto, InstallationOptionsDto
from core.application.mediator import Request, RequestHandler, handles
from core.domain.exceptions import NotFoundException
from core.domain.services.installation import installation_options


class GetInstallationOptionsQuery(Request):
    product_id: UUID


@handles(GetInstallationOptionsQuery)
class GetInstallationOptionsHandler(RequestHandler[GetInstallationOptionsQuery, InstallationOptionsDto]):
    async def handle(self, request: GetInstallationOptionsQuery) -> InstallationOptionsDto:
        async with self.context.uow() as uow:
            product = await uow.products.get(request.product_id)

        if product is None:
            raise NotFoundException.for_entity("Product", request.product_id)

        options = installation_options(product.base_price, self.settings.installation_min_price)
        return InstallationOptionsDto(
            product_id=product.id,
            product_name=product.name,
            requires_installation=product.requires_installation,
            is_available=bool(options),
            options=[InstallationOptionDto.from_option(o) for o in options],
        )
