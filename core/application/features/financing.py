"""Financing quotes for a price or a product."""
from decimal import Decimal
from typing import List
from uuid import UUID

from core.application.dtos.catalog_dto import FinancingQuoteDto
from core.application.mediator import Request, RequestHandler, RequestValidator, handles, validates
from core.domain.exceptions import NotFoundException
from core.domain.services.financing import quote


class GetFinancingQuoteQuery(Request):
    price: Decimal


class GetProductFinancingQuery(Request):
    product_id: UUID


@validates(GetFinancingQuoteQuery)
class GetFinancingQuoteValidator(RequestValidator[GetFinancingQuoteQuery]):
    def validate(self, request: GetFinancingQuoteQuery) -> List[str]:
        if request.price <= 0:
            return ["Price must be greater than zero"]
        return []


@handles(GetFinancingQuoteQuery)
class GetFinancingQuoteHandler(RequestHandler[GetFinancingQuoteQuery, FinancingQuoteDto]):
    async def handle(self, request: GetFinancingQuoteQuery) -> FinancingQuoteDto:
        return FinancingQuoteDto.from_quote(quote(request.price))


@handles(GetProductFinancingQuery)
class GetProductFinancingHandler(RequestHandler[GetProductFinancingQuery, FinancingQuoteDto]):
    """
    Quote for a product's base price.

    Raises:
        NotFoundException: If the product does not exist
        ValueError: If the product is free (nothing to finance)
    """

    async def handle(self, request: GetProductFinancingQuery) -> FinancingQuoteDto:
        async with self.context.uow() as uow:
            product = await uow.products.get(request.product_id)

        if product is None:
            raise NotFoundException.for_entity("Product", request.product_id)
        return FinancingQuoteDto.from_quote(quote(product.base_price), product_id=product.id)
