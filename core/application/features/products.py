"""
Product catalogue: admin maintenance and the public listing.

Flow of a price update:
1. Load the product aggregate
2. Apply the new prices (the aggregate records ProductPriceChangedEvent)
3. Append the returned history entry
4. Commit (events are stored, then published)
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import Field

from core.application.dtos.product_dto import (
    FilterOptionsDto,
    ProductDto,
    ProductListDto,
    StockAdjustmentDto,
)
from core.application.mediator import Request, RequestHandler, RequestValidator, handles, validates
from core.application.result import Result
from core.application.validation import check_max_length, check_non_negative, check_required
from core.data.uow import UnitOfWork
from core.domain.entities.product import Product, ProductFeature, ProductVariant, slugify
from core.domain.enums import PriceChangeReason
from core.domain.exceptions import InsufficientStockError
from core.domain.repositories.product_repository import SORT_OPTIONS, ProductSearchCriteria
from core.domain.services.filter_options import build_filter_options
from core.infrastructure.logging import get_logger

logger = get_logger(__name__)

MAX_PAGE_SIZE = 100
PRODUCT_NOT_FOUND = "Product not found"


# =============================================================================
# REQUESTS
# =============================================================================

class ProductFeatureInput(Request):
    title: str
    description: str
    icon: Optional[str] = None


class CreateProductCommand(Request):
    sku: Optional[str] = None
    name: Optional[str] = None
    base_price: Decimal = Decimal("0")
    slug: Optional[str] = None
    short_description: Optional[str] = None
    description: Optional[str] = None
    compare_at_price: Optional[Decimal] = None
    cost_price: Optional[Decimal] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    is_active: bool = True
    is_featured: bool = False
    requires_installation: bool = False
    warranty_months: int = 12
    weight_kg: Optional[Decimal] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    specifications: Dict[str, Any] = Field(default_factory=dict)
    features: List[ProductFeatureInput] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class UpdateProductPriceCommand(Request):
    product_id: UUID
    base_price: Decimal
    compare_at_price: Optional[Decimal] = None
    reason: PriceChangeReason = PriceChangeReason.PRICE_CHANGE


class AddProductVariantCommand(Request):
    product_id: UUID
    sku: Optional[str] = None
    name: Optional[str] = None
    price_adjustment: Decimal = Decimal("0")
    attributes: Dict[str, Any] = Field(default_factory=dict)
    stock_quantity: int = 0
    low_stock_threshold: int = 5
    is_active: bool = True
    sort_order: int = 0


class AdjustStockCommand(Request):
    variant_id: UUID
    adjustment: int
    reason: Optional[str] = None


class GetProductBySlugQuery(Request):
    slug: str
    language_code: Optional[str] = None


class GetProductsQuery(Request):
    page: int = 1
    page_size: int = 20
    category: Optional[str] = None
    brand: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    search: Optional[str] = None
    in_stock: Optional[bool] = None
    tag: Optional[str] = None
    sort: str = "newest"


class GetFilterOptionsQuery(Request):
    category: Optional[str] = None


# =============================================================================
# VALIDATORS
# =============================================================================

@validates(CreateProductCommand)
class CreateProductValidator(RequestValidator[CreateProductCommand]):
    def validate(self, request: CreateProductCommand) -> List[str]:
        errors: List[str] = []
        check_required(errors, request.sku, "SKU", 50)
        check_required(errors, request.name, "Product name", 255)
        check_non_negative(errors, request.base_price, "Base price")
        check_non_negative(errors, request.compare_at_price, "Compare at price")
        check_non_negative(errors, request.cost_price, "Cost price")
        check_non_negative(errors, request.weight_kg, "Weight")
        check_max_length(errors, request.short_description, "Short description", 500)
        check_max_length(errors, request.brand, "Brand", 100)
        check_max_length(errors, request.model, "Model", 100)
        check_max_length(errors, request.meta_title, "Meta title", 200)
        check_max_length(errors, request.meta_description, "Meta description", 500)
        if request.warranty_months < 0:
            errors.append("Warranty months must be non-negative")
        return errors


@validates(UpdateProductPriceCommand)
class UpdateProductPriceValidator(RequestValidator[UpdateProductPriceCommand]):
    def validate(self, request: UpdateProductPriceCommand) -> List[str]:
        errors: List[str] = []
        check_non_negative(errors, request.base_price, "Base price")
        check_non_negative(errors, request.compare_at_price, "Compare at price")
        return errors


@validates(AddProductVariantCommand)
class AddProductVariantValidator(RequestValidator[AddProductVariantCommand]):
    def validate(self, request: AddProductVariantCommand) -> List[str]:
        errors: List[str] = []
        check_required(errors, request.sku, "Variant SKU", 50)
        check_required(errors, request.name, "Variant name", 100)
        if request.stock_quantity < 0:
            errors.append("Stock quantity must be non-negative")
        if request.low_stock_threshold < 0:
            errors.append("Low stock threshold must be non-negative")
        return errors


@validates(AdjustStockCommand)
class AdjustStockValidator(RequestValidator[AdjustStockCommand]):
    def validate(self, request: AdjustStockCommand) -> List[str]:
        if request.adjustment == 0:
            return ["Adjustment cannot be zero"]
        return []


@validates(GetProductsQuery)
class GetProductsValidator(RequestValidator[GetProductsQuery]):
    def validate(self, request: GetProductsQuery) -> List[str]:
        errors: List[str] = []
        if request.page < 1:
            errors.append("Page must be at least 1")
        if not 1 <= request.page_size <= MAX_PAGE_SIZE:
            errors.append(f"Page size must be between 1 and {MAX_PAGE_SIZE}")
        if request.sort not in SORT_OPTIONS:
            errors.append(f"Sort must be one of: {', '.join(SORT_OPTIONS)}")
        check_non_negative(errors, request.min_price, "Minimum price")
        check_non_negative(errors, request.max_price, "Maximum price")
        if (
            request.min_price is not None
            and request.max_price is not None
            and request.min_price > request.max_price
        ):
            errors.append("Minimum price cannot exceed maximum price")
        return errors


# =============================================================================
# ADMIN HANDLERS
# =============================================================================

async def unique_slug(uow: UnitOfWork, name: str) -> str:
    """Slug for ``name``, suffixed with -1, -2, ... until no product uses it."""
    base = slugify(name)
    slug = base
    suffix = 1
    while await uow.products.slug_exists(slug):
        slug = f"{base}-{suffix}"
        suffix += 1
    return slug


@handles(CreateProductCommand)
class CreateProductHandler(RequestHandler[CreateProductCommand, Result[ProductDto]]):
    """
    Creates a product with a default variant and its initial price entry.

    The default variant ``{SKU}-DEFAULT`` holds the configured opening stock
    so the product can be bought straight away.
    """

    async def handle(self, request: CreateProductCommand) -> Result[ProductDto]:
        if not self.user.is_admin:
            return Result.forbidden()

        async with self.context.uow() as uow:
            if await uow.products.sku_exists(request.sku):
                return Result.conflict("SKU already exists")

            slug = (request.slug or "").strip().lower()
            if slug:
                if await uow.products.slug_exists(slug):
                    return Result.conflict("Slug already exists")
            else:
                slug = await unique_slug(uow, request.name)

            default_sku = f"{request.sku.strip().upper()}-DEFAULT"
            if await uow.products.variant_sku_exists(default_sku):
                return Result.conflict("Variant SKU already exists")

            product = Product(
                sku=request.sku,
                name=request.name,
                base_price=request.base_price,
                slug=slug,
                short_description=request.short_description,
                description=request.description,
                compare_at_price=request.compare_at_price,
                cost_price=request.cost_price,
                category=request.category,
                brand=request.brand,
                model=request.model,
                is_active=request.is_active,
                is_featured=request.is_featured,
                requires_installation=request.requires_installation,
                warranty_months=request.warranty_months,
                weight_kg=request.weight_kg,
                meta_title=request.meta_title,
                meta_description=request.meta_description,
                specifications=dict(request.specifications),
                features=[
                    ProductFeature(title=f.title, description=f.description, icon=f.icon)
                    for f in request.features
                ],
                tags=list(request.tags),
            )
            product.add_variant(
                ProductVariant(
                    sku=default_sku,
                    name="Default",
                    stock_quantity=self.settings.default_variant_stock,
                )
            )

            await uow.products.save(product)
            await uow.price_history.add(product.initial_price_entry())
            await uow.commit()

            logger.info(
                f"[{uow.execution_id}] ✅ Product {product.sku} created "
                f"(price={product.base_price}, stock={product.total_stock})"
            )

        return Result.success(ProductDto.from_entity(product, include_cost=True))


@handles(UpdateProductPriceCommand)
class UpdateProductPriceHandler(RequestHandler[UpdateProductPriceCommand, Result[ProductDto]]):
    async def handle(self, request: UpdateProductPriceCommand) -> Result[ProductDto]:
        if not self.user.is_admin:
            return Result.forbidden()

        async with self.context.uow() as uow:
            product = await uow.products.get(request.product_id)
            if product is None:
                return Result.not_found(PRODUCT_NOT_FOUND)

            entry = product.change_price(request.base_price, request.compare_at_price, request.reason)
            if entry is not None:
                await uow.products.save(product)
                await uow.price_history.add(entry)
                uow.collect(product)
                await uow.commit()
                logger.info(f"[{uow.execution_id}] {product.sku}: {entry.notes}")

        return Result.success(ProductDto.from_entity(product, include_cost=True))


@handles(AddProductVariantCommand)
class AddProductVariantHandler(RequestHandler[AddProductVariantCommand, Result[ProductDto]]):
    async def handle(self, request: AddProductVariantCommand) -> Result[ProductDto]:
        if not self.user.is_admin:
            return Result.forbidden()

        async with self.context.uow() as uow:
            product = await uow.products.get(request.product_id)
            if product is None:
                return Result.not_found(PRODUCT_NOT_FOUND)
            if await uow.products.variant_sku_exists(request.sku):
                return Result.conflict("Variant SKU already exists")

            product.add_variant(
                ProductVariant(
                    sku=request.sku,
                    name=request.name,
                    price_adjustment=request.price_adjustment,
                    attributes=dict(request.attributes),
                    stock_quantity=request.stock_quantity,
                    low_stock_threshold=request.low_stock_threshold,
                    is_active=request.is_active,
                    sort_order=request.sort_order,
                )
            )
            await uow.products.save(product)
            await uow.commit()

        return Result.success(ProductDto.from_entity(product, include_cost=True))


@handles(AdjustStockCommand)
class AdjustStockHandler(RequestHandler[AdjustStockCommand, Result[StockAdjustmentDto]]):
    async def handle(self, request: AdjustStockCommand) -> Result[StockAdjustmentDto]:
        if not self.user.is_admin:
            return Result.forbidden()

        async with self.context.uow() as uow:
            product = await uow.products.get_by_variant(request.variant_id)
            if product is None:
                return Result.not_found("Product variant not found")

            variant = product.get_variant(request.variant_id)
            previous = variant.stock_quantity
            try:
                product.adjust_stock(variant.id, request.adjustment, request.reason)
            except InsufficientStockError as e:
                return Result.failure(e.message)

            await uow.products.save(product)
            uow.collect(product)
            await uow.commit()

            logger.info(
                f"[{uow.execution_id}] Stock of {variant.sku} adjusted {previous} -> "
                f"{variant.stock_quantity} ({request.reason or 'no reason given'})"
            )

        return Result.success(
            StockAdjustmentDto(
                product_id=product.id,
                variant_id=variant.id,
                sku=variant.sku,
                previous_quantity=previous,
                new_quantity=variant.stock_quantity,
                is_low_stock=variant.is_low_stock,
            )
        )


# =============================================================================
# STOREFRONT HANDLERS
# =============================================================================

@handles(GetProductBySlugQuery)
class GetProductBySlugHandler(RequestHandler[GetProductBySlugQuery, Result[ProductDto]]):
    async def handle(self, request: GetProductBySlugQuery) -> Result[ProductDto]:
        async with self.context.uow() as uow:
            product = await uow.products.get_by_slug(request.slug.strip().lower())

        if product is None or not product.is_active:
            return Result.not_found(PRODUCT_NOT_FOUND)
        language = request.language_code or self.settings.default_language
        return Result.success(ProductDto.from_entity(product, language_code=language))


@handles(GetProductsQuery)
class GetProductsHandler(RequestHandler[GetProductsQuery, Result[ProductListDto]]):
    async def handle(self, request: GetProductsQuery) -> Result[ProductListDto]:
        criteria = ProductSearchCriteria(
            page=request.page,
            page_size=request.page_size,
            category=request.category,
            brand=request.brand,
            min_price=request.min_price,
            max_price=request.max_price,
            search=request.search,
            tag=request.tag,
            in_stock=request.in_stock,
            sort=request.sort,
        )
        async with self.context.uow() as uow:
            page = await uow.products.search(criteria)

        return Result.success(ProductListDto.from_page(page))


@handles(GetFilterOptionsQuery)
class GetFilterOptionsHandler(RequestHandler[GetFilterOptionsQuery, Result[FilterOptionsDto]]):
    async def handle(self, request: GetFilterOptionsQuery) -> Result[FilterOptionsDto]:
        async with self.context.uow() as uow:
            products = await uow.products.list_active(category=request.category)

        return Result.success(FilterOptionsDto.from_options(build_filter_options(products)))
