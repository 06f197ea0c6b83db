"""Public catalogue endpoints."""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query

from apps.api.deps import get_mediator
from apps.api.errors import unwrap
from core.application.dtos.product_dto import FilterOptionsDto, ProductDto, ProductListDto
from core.application.features.products import (
    GetFilterOptionsQuery,
    GetProductBySlugQuery,
    GetProductsQuery,
)
from core.application.mediator import Mediator

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductListDto)
async def list_products(
    page: int = Query(default=1, description="1-based page number"),
    page_size: int = Query(default=20, description="Products per page (max 100)"),
    category: Optional[str] = None,
    brand: Optional[str] = None,
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
    search: Optional[str] = Query(default=None, description="Matches name, SKU or brand"),
    in_stock: Optional[bool] = None,
    tag: Optional[str] = None,
    sort: str = Query(default="newest", description="newest, price_asc, price_desc or name"),
    mediator: Mediator = Depends(get_mediator),
) -> ProductListDto:
    query = GetProductsQuery(
        page=page,
        page_size=page_size,
        category=category,
        brand=brand,
        min_price=min_price,
        max_price=max_price,
        search=search,
        in_stock=in_stock,
        tag=tag,
        sort=sort,
    )
    return unwrap(await mediator.send(query))


@router.get("/filters", response_model=FilterOptionsDto)
async def get_filter_options(
    category: Optional[str] = None,
    mediator: Mediator = Depends(get_mediator),
) -> FilterOptionsDto:
    """Brand, price, tag and specification facets."""
    return unwrap(await mediator.send(GetFilterOptionsQuery(category=category)))


@router.get("/{slug}", response_model=ProductDto)
async def get_product(
    slug: str,
    lang: Optional[str] = Query(default=None, description="ISO 639-1 language code"),
    mediator: Mediator = Depends(get_mediator),
) -> ProductDto:
    return unwrap(await mediator.send(GetProductBySlugQuery(slug=slug, language_code=lang)))
