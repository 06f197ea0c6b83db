"""Price history of a product over a trailing window."""
from datetime import timedelta
from typing import List, Optional
from uuid import UUID

from core.application.dtos.catalog_dto import PriceHistoryDto
from core.application.mediator import Request, RequestHandler, RequestValidator, handles, validates
from core.domain.clock import utcnow
from core.domain.exceptions import NotFoundException
from core.domain.services.price_trend import summarize

MAX_DAYS_BACK = 365


class GetProductPriceHistoryQuery(Request):
    product_id: UUID
    days_back: Optional[int] = None


@validates(GetProductPriceHistoryQuery)
class GetProductPriceHistoryValidator(RequestValidator[GetProductPriceHistoryQuery]):
    def validate(self, request: GetProductPriceHistoryQuery) -> List[str]:
        if request.days_back is not None and not 1 <= request.days_back <= MAX_DAYS_BACK:
            return [f"Days back must be between 1 and {MAX_DAYS_BACK}"]
        return []


@handles(GetProductPriceHistoryQuery)
class GetProductPriceHistoryHandler(RequestHandler[GetProductPriceHistoryQuery, PriceHistoryDto]):
    """
    Lowest, highest and average price of a product.

    Raises:
        NotFoundException: If the product does not exist
    """

    async def handle(self, request: GetProductPriceHistoryQuery) -> PriceHistoryDto:
        days_back = request.days_back or self.settings.price_history_days

        async with self.context.uow() as uow:
            product = await uow.products.get(request.product_id)
            if product is None:
                raise NotFoundException.for_entity("Product", request.product_id)
            entries = await uow.price_history.list_for_product(
                product.id, since=utcnow() - timedelta(days=days_back)
            )

        return PriceHistoryDto.from_trend(product.id, product.name, days_back, summarize(product, entries))
