"""Back-office catalogue endpoints: products, variants, stock and translations."""

from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from apps.api.deps import get_mediator, require_admin
from apps.api.errors import unwrap
from core.application.dtos.product_dto import (
    ProductDto,
    ProductTranslationDto,
    ProductTranslationsDto,
    StockAdjustmentDto,
)
from core.application.features.products import (
    AddProductVariantCommand,
    AdjustStockCommand,
    CreateProductCommand,
    UpdateProductPriceCommand,
)
from core.application.features.translations import (
    AddProductTranslationCommand,
    DeleteProductTranslationCommand,
    GetProductTranslationsQuery,
    TranslationFields,
    UpdateProductTranslationCommand,
)
from core.application.mediator import Mediator
from core.domain.enums import PriceChangeReason

router = APIRouter(prefix="/admin", tags=["admin-products"], dependencies=[Depends(require_admin)])


class PriceUpdateBody(BaseModel):
    base_price: Decimal
    compare_at_price: Optional[Decimal] = None
    reason: PriceChangeReason = PriceChangeReason.PRICE_CHANGE


class VariantBody(BaseModel):
    sku: Optional[str] = None
    name: Optional[str] = None
    price_adjustment: Decimal = Decimal("0")
    attributes: Dict[str, Any] = Field(default_factory=dict)
    stock_quantity: int = 0
    low_stock_threshold: int = 5
    is_active: bool = True
    sort_order: int = 0


class TranslationBody(TranslationFields):
    language_code: str


@router.post("/products", response_model=ProductDto, status_code=status.HTTP_201_CREATED)
async def create_product(
    command: CreateProductCommand,
    mediator: Mediator = Depends(get_mediator),
) -> ProductDto:
    """Create a product with its default variant."""
    return unwrap(await mediator.send(command))


@router.put("/products/{product_id}/price", response_model=ProductDto)
async def update_price(
    product_id: UUID,
    body: PriceUpdateBody,
    mediator: Mediator = Depends(get_mediator),
) -> ProductDto:
    command = UpdateProductPriceCommand(product_id=product_id, **body.model_dump())
    return unwrap(await mediator.send(command))


@router.post("/products/{product_id}/variants", response_model=ProductDto, status_code=status.HTTP_201_CREATED)
async def add_variant(
    product_id: UUID,
    body: VariantBody,
    mediator: Mediator = Depends(get_mediator),
) -> ProductDto:
    command = AddProductVariantCommand(product_id=product_id, **body.model_dump())
    return unwrap(await mediator.send(command))


@router.post("/inventory/adjust", response_model=StockAdjustmentDto)
async def adjust_stock(
    command: AdjustStockCommand,
    mediator: Mediator = Depends(get_mediator),
) -> StockAdjustmentDto:
    """Apply a signed stock delta to a variant."""
    return unwrap(await mediator.send(command))


@router.get("/products/{product_id}/translations", response_model=ProductTranslationsDto)
async def get_translations(product_id: UUID, mediator: Mediator = Depends(get_mediator)) -> ProductTranslationsDto:
    return unwrap(await mediator.send(GetProductTranslationsQuery(product_id=product_id)))


@router.post(
    "/products/{product_id}/translations",
    response_model=ProductTranslationDto,
    status_code=status.HTTP_201_CREATED,
)
async def add_translation(
    product_id: UUID,
    body: TranslationBody,
    mediator: Mediator = Depends(get_mediator),
) -> ProductTranslationDto:
    command = AddProductTranslationCommand(product_id=product_id, **body.model_dump())
    return unwrap(await mediator.send(command))


@router.put("/products/{product_id}/translations/{language_code}", response_model=ProductTranslationDto)
async def update_translation(
    product_id: UUID,
    language_code: str,
    body: TranslationFields,
    mediator: Mediator = Depends(get_mediator),
) -> ProductTranslationDto:
    command = UpdateProductTranslationCommand(
        product_id=product_id, language_code=language_code, **body.model_dump()
    )
    return unwrap(await mediator.send(command))


@router.delete("/products/{product_id}/translations/{language_code}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_translation(
    product_id: UUID,
    language_code: str,
    mediator: Mediator = Depends(get_mediator),
) -> Response:
    command = DeleteProductTranslationCommand(product_id=product_id, language_code=language_code)
    unwrap(await mediator.send(command))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
