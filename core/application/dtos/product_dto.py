"""Application DTOs for the product catalogue."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from core.domain.entities.product import Product, ProductTranslation, ProductVariant
from core.domain.repositories.paging import Page
from core.domain.services.filter_options import FilterOptions


class ProductVariantDto(BaseModel):
    """DTO for a purchasable variant."""

    id: UUID
    sku: str
    name: str
    price: Decimal = Field(..., description="Base price plus adjustment")
    price_adjustment: Decimal
    attributes: Dict[str, Any] = Field(default_factory=dict)
    stock_quantity: int
    in_stock: bool
    is_low_stock: bool
    is_active: bool
    sort_order: int

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, variant: ProductVariant, base_price: Decimal) -> "ProductVariantDto":
        return cls(
            id=variant.id,
            sku=variant.sku,
            name=variant.name,
            price=variant.get_price(base_price),
            price_adjustment=variant.price_adjustment,
            attributes=dict(variant.attributes),
            stock_quantity=variant.stock_quantity,
            in_stock=variant.in_stock,
            is_low_stock=variant.is_low_stock,
            is_active=variant.is_active,
            sort_order=variant.sort_order,
        )


class ProductFeatureDto(BaseModel):
    title: str
    description: str
    icon: Optional[str] = None

    model_config = {"frozen": True}


class ProductSummaryDto(BaseModel):
    """DTO for a product in listings."""

    id: UUID
    sku: str
    name: str
    slug: str
    short_description: Optional[str] = None
    base_price: Decimal
    compare_at_price: Optional[Decimal] = None
    is_on_sale: bool
    discount_percentage: Decimal
    min_price: Decimal
    max_price: Decimal
    brand: Optional[str] = None
    category: Optional[str] = None
    is_featured: bool
    in_stock: bool
    tags: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, product: Product) -> "ProductSummaryDto":
        return cls(
            id=product.id,
            sku=product.sku,
            name=product.name,
            slug=product.slug,
            short_description=product.short_description,
            base_price=product.base_price,
            compare_at_price=product.compare_at_price,
            is_on_sale=product.is_on_sale,
            discount_percentage=product.discount_percentage,
            min_price=product.min_price,
            max_price=product.max_price,
            brand=product.brand,
            category=product.category,
            is_featured=product.is_featured,
            in_stock=product.in_stock,
            tags=list(product.tags),
        )


class ProductDto(ProductSummaryDto):
    """DTO for the product detail page (content in the requested language)."""

    language_code: str
    description: Optional[str] = None
    model: Optional[str] = None
    cost_price: Optional[Decimal] = None
    is_active: bool
    requires_installation: bool
    warranty_months: int
    weight_kg: Optional[Decimal] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    specifications: Dict[str, Any] = Field(default_factory=dict)
    features: List[ProductFeatureDto] = Field(default_factory=list)
    variants: List[ProductVariantDto] = Field(default_factory=list)
    total_stock: int
    available_languages: List[str] = Field(default_factory=list)
    created_at: datetime

    @classmethod
    def from_entity(
        cls,
        product: Product,
        language_code: Optional[str] = None,
        include_cost: bool = False,
    ) -> "ProductDto":
        content = product.get_translated_content(language_code)
        summary = ProductSummaryDto.from_entity(product).model_dump()
        summary.update(
            name=content.name,
            short_description=content.short_description,
        )
        return cls(
            **summary,
            language_code=content.language_code,
            description=content.description,
            model=product.model,
            cost_price=product.cost_price if include_cost else None,
            is_active=product.is_active,
            requires_installation=product.requires_installation,
            warranty_months=product.warranty_months,
            weight_kg=product.weight_kg,
            meta_title=content.meta_title,
            meta_description=content.meta_description,
            specifications=dict(product.specifications),
            features=[
                ProductFeatureDto(title=f.title, description=f.description, icon=f.icon)
                for f in product.features
            ],
            variants=[
                ProductVariantDto.from_entity(v, product.base_price)
                for v in product.active_variants
            ],
            total_stock=product.total_stock,
            available_languages=sorted(t.language_code for t in product.translations),
            created_at=product.created_at,
        )


class ProductListDto(BaseModel):
    """One page of the catalogue."""

    items: List[ProductSummaryDto] = Field(default_factory=list)
    total_count: int = Field(..., ge=0)
    page: int
    page_size: int
    total_pages: int

    model_config = {"frozen": True}

    @classmethod
    def from_page(cls, page: Page[Product]) -> "ProductListDto":
        return cls(
            items=[ProductSummaryDto.from_entity(p) for p in page.items],
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )


class CountedOptionDto(BaseModel):
    name: str
    count: int

    model_config = {"frozen": True}


class PriceRangeDto(BaseModel):
    min: Decimal
    max: Decimal

    model_config = {"frozen": True}


class SpecificationOptionDto(BaseModel):
    value: str
    label: str
    count: int

    model_config = {"frozen": True}


class FilterOptionsDto(BaseModel):
    """Facets for the catalogue sidebar; specifications are keyed by spec name."""

    brands: List[CountedOptionDto] = Field(default_factory=list)
    price_range: PriceRangeDto
    specifications: Dict[str, List[SpecificationOptionDto]] = Field(default_factory=dict)
    tags: List[CountedOptionDto] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def from_options(cls, options: FilterOptions) -> "FilterOptionsDto":
        return cls(
            brands=[CountedOptionDto(name=o.name, count=o.count) for o in options.brands],
            price_range=PriceRangeDto(min=options.min_price, max=options.max_price),
            specifications={
                key: [
                    SpecificationOptionDto(value=o.value, label=o.label, count=o.count)
                    for o in values
                ]
                for key, values in options.specifications.items()
            },
            tags=[CountedOptionDto(name=o.name, count=o.count) for o in options.tags],
        )


class ProductTranslationDto(BaseModel):
    id: UUID
    language_code: str
    name: str
    short_description: Optional[str] = None
    description: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, translation: ProductTranslation) -> "ProductTranslationDto":
        return cls(
            id=translation.id,
            language_code=translation.language_code,
            name=translation.name,
            short_description=translation.short_description,
            description=translation.description,
            meta_title=translation.meta_title,
            meta_description=translation.meta_description,
        )


class ProductTranslationsDto(BaseModel):
    product_id: UUID
    default_language: str
    translations: List[ProductTranslationDto] = Field(default_factory=list)

    model_config = {"frozen": True}


class StockAdjustmentDto(BaseModel):
    """Outcome of an inventory adjustment."""

    product_id: UUID
    variant_id: UUID
    sku: str
    previous_quantity: int
    new_quantity: int
    is_low_stock: bool

    model_config = {"frozen": True}
