"""Product page extras: price history, installation options and financing."""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from apps.api.deps import get_mediator
from core.application.dtos.catalog_dto import FinancingQuoteDto, InstallationOptionsDto, PriceHistoryDto
from core.application.features.financing import GetFinancingQuoteQuery, GetProductFinancingQuery
from core.application.features.installation import GetInstallationOptionsQuery
from core.application.features.price_history import GetProductPriceHistoryQuery
from core.application.mediator import Mediator

router = APIRouter(tags=["catalog"])


@router.get("/price-history/{product_id}", response_model=PriceHistoryDto)
async def get_price_history(
    product_id: UUID,
    days_back: Optional[int] = Query(default=None, alias="daysBack", description="Window in days (default 90)"),
    mediator: Mediator = Depends(get_mediator),
) -> PriceHistoryDto:
    return await mediator.send(GetProductPriceHistoryQuery(product_id=product_id, days_back=days_back))


@router.get("/installation/options/{product_id}", response_model=InstallationOptionsDto)
async def get_installation_options(
    product_id: UUID,
    mediator: Mediator = Depends(get_mediator),
) -> InstallationOptionsDto:
    return await mediator.send(GetInstallationOptionsQuery(product_id=product_id))


@router.get("/financing/quote", response_model=FinancingQuoteDto)
async def get_financing_quote(
    price: Decimal = Query(..., description="Amount to finance"),
    mediator: Mediator = Depends(get_mediator),
) -> FinancingQuoteDto:
    return await mediator.send(GetFinancingQuoteQuery(price=price))


@router.get("/financing/products/{product_id}", response_model=FinancingQuoteDto)
async def get_product_financing(
    product_id: UUID,
    mediator: Mediator = Depends(get_mediator),
) -> FinancingQuoteDto:
    return await mediator.send(GetProductFinancingQuery(product_id=product_id))
