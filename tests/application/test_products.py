"""Catalogue handlers: admin maintenance, listing, translations and product extras."""

from decimal import Decimal
from uuid import uuid4

import pytest

from core.application.features.financing import GetFinancingQuoteQuery, GetProductFinancingQuery
from core.application.features.installation import GetInstallationOptionsQuery
from core.application.features.price_history import GetProductPriceHistoryQuery
from core.application.features.products import (
    AddProductVariantCommand,
    AdjustStockCommand,
    CreateProductCommand,
    GetFilterOptionsQuery,
    GetProductBySlugQuery,
    GetProductsQuery,
    UpdateProductPriceCommand,
)
from core.application.features.translations import (
    AddProductTranslationCommand,
    DeleteProductTranslationCommand,
    GetProductTranslationsQuery,
    UpdateProductTranslationCommand,
)
from core.application.result import ResultKind
from core.domain.events.product_events import ProductPriceChangedEvent, StockAdjustedEvent
from core.domain.exceptions import NotFoundException, ValidationException

from tests.conftest import product_fields


class TestCreateProduct:
    @pytest.mark.asyncio
    async def test_creates_default_variant(self, make_product):
        product = await make_product(sku="ac-12k", base_price=Decimal("1299.00"))

        assert product.sku == "AC-12K"
        assert len(product.variants) == 1
        assert product.variants[0].sku == "AC-12K-DEFAULT"
        assert product.variants[0].name == "Default"
        assert product.variants[0].stock_quantity == 50
        assert product.total_stock == 50

    @pytest.mark.asyncio
    async def test_duplicate_sku_conflicts(self, as_admin, make_product):
        await make_product(sku="AC-12K")

        result = await as_admin.send(CreateProductCommand(**product_fields(sku="ac-12k")))

        assert result.kind == ResultKind.CONFLICT
        assert result.error == "SKU already exists"

    @pytest.mark.asyncio
    async def test_shared_name_gets_numbered_slug(self, make_product, mediator):
        first = await make_product(name="Arctic Split")
        second = await make_product(name="Arctic Split")
        third = await make_product(name="arctic split")

        assert first.slug == "arctic-split"
        assert second.slug == "arctic-split-1"
        assert third.slug == "arctic-split-2"
        found = await mediator.send(GetProductBySlugQuery(slug="arctic-split-1"))
        assert found.value.id == second.id

    @pytest.mark.asyncio
    async def test_explicit_slug_taken_conflicts(self, as_admin, make_product):
        await make_product(slug="arctic-split")

        result = await as_admin.send(CreateProductCommand(**product_fields(slug="Arctic-Split")))

        assert result.kind == ResultKind.CONFLICT
        assert result.error == "Slug already exists"

    @pytest.mark.asyncio
    async def test_default_variant_sku_taken_conflicts(self, as_admin, make_product):
        product = await make_product()
        added = await as_admin.send(
            AddProductVariantCommand(product_id=product.id, sku="AC-9K-DEFAULT", name="9K")
        )
        assert added.succeeded, added.error

        result = await as_admin.send(CreateProductCommand(**product_fields(sku="ac-9k")))

        assert result.kind == ResultKind.CONFLICT
        assert result.error == "Variant SKU already exists"

    @pytest.mark.asyncio
    async def test_validation(self, as_admin):
        with pytest.raises(ValidationException) as exc_info:
            await as_admin.send(CreateProductCommand(sku="", name="", base_price=Decimal("-1")))

        assert exc_info.value.errors == [
            "SKU is required",
            "Product name is required",
            "Base price must be non-negative",
        ]

    @pytest.mark.asyncio
    async def test_requires_admin(self, as_customer):
        result = await as_customer.send(CreateProductCommand(**product_fields()))

        assert result.kind == ResultKind.FORBIDDEN


class TestPricesAndStock:
    @pytest.mark.asyncio
    async def test_price_change_is_recorded(self, as_admin, make_product, mediator, published_events):
        product = await make_product(base_price=Decimal("1000.00"))

        result = await as_admin.send(
            UpdateProductPriceCommand(product_id=product.id, base_price=Decimal("899.00"))
        )
        history = await mediator.send(GetProductPriceHistoryQuery(product_id=product.id))

        assert result.value.base_price == Decimal("899.00")
        assert [p.reason for p in history.points] == ["Initial", "PriceChange"]
        assert history.lowest_price == Decimal("899.00")
        assert history.highest_price == Decimal("1000.00")
        assert history.days_back == 90
        assert any(isinstance(e, ProductPriceChangedEvent) for e in published_events)

    @pytest.mark.asyncio
    async def test_adjust_stock(self, as_admin, make_product, published_events):
        product = await make_product()
        variant_id = product.variants[0].id

        result = await as_admin.send(AdjustStockCommand(variant_id=variant_id, adjustment=-46, reason="Audit"))

        assert result.value.previous_quantity == 50
        assert result.value.new_quantity == 4
        assert result.value.is_low_stock is True
        assert any(isinstance(e, StockAdjustedEvent) for e in published_events)

    @pytest.mark.asyncio
    async def test_adjust_stock_below_zero_fails(self, as_admin, make_product):
        product = await make_product()

        result = await as_admin.send(AdjustStockCommand(variant_id=product.variants[0].id, adjustment=-51))

        assert result.kind == ResultKind.FAILURE
        assert result.error == "Cannot reduce stock below zero. Current stock: 50"

    @pytest.mark.asyncio
    async def test_zero_adjustment_is_invalid(self, as_admin):
        with pytest.raises(ValidationException, match="Adjustment cannot be zero"):
            await as_admin.send(AdjustStockCommand(variant_id=uuid4(), adjustment=0))

    @pytest.mark.asyncio
    async def test_unknown_variant(self, as_admin):
        result = await as_admin.send(AdjustStockCommand(variant_id=uuid4(), adjustment=5))

        assert result.kind == ResultKind.NOT_FOUND
        assert result.error == "Product variant not found"

    @pytest.mark.asyncio
    async def test_variant_sku_must_be_unique(self, as_admin, make_product):
        product = await make_product(sku="AC-12K")
        other = await make_product()

        ok = await as_admin.send(
            AddProductVariantCommand(
                product_id=product.id, sku="AC-12K-XL", name="XL", price_adjustment=Decimal("200")
            )
        )
        clash = await as_admin.send(AddProductVariantCommand(product_id=other.id, sku="ac-12k-xl", name="XL"))

        assert ok.succeeded
        assert ok.value.max_price == Decimal("1499.00")
        assert clash.kind == ResultKind.CONFLICT
        assert clash.error == "Variant SKU already exists"


class TestStorefrontQueries:
    @pytest.mark.asyncio
    async def test_get_by_slug(self, mediator, make_product):
        await make_product(name="Arctic Split 12000")

        result = await mediator.send(GetProductBySlugQuery(slug="Arctic-Split-12000"))

        assert result.value.name == "Arctic Split 12000"
        assert result.value.language_code == "en"

    @pytest.mark.asyncio
    async def test_inactive_product_is_hidden(self, mediator, make_product):
        await make_product(name="Retired Unit", is_active=False)

        result = await mediator.send(GetProductBySlugQuery(slug="retired-unit"))

        assert result.kind == ResultKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_listing_filters_and_sort(self, mediator, make_product):
        await make_product(name="Budget Fan", brand="Acme", base_price=Decimal("99.00"), tags=["portable"])
        await make_product(name="Split Pro", brand="Daikin", base_price=Decimal("1500.00"))
        await make_product(name="Split Lite", brand="Daikin", base_price=Decimal("700.00"))

        daikin = (await mediator.send(GetProductsQuery(brand="daikin", sort="price_asc"))).value
        tagged = (await mediator.send(GetProductsQuery(tag="Portable"))).value
        searched = (await mediator.send(GetProductsQuery(search="split", max_price=Decimal("1000")))).value

        assert [p.name for p in daikin.items] == ["Split Lite", "Split Pro"]
        assert daikin.total_count == 2
        assert [p.name for p in tagged.items] == ["Budget Fan"]
        assert [p.name for p in searched.items] == ["Split Lite"]

    @pytest.mark.asyncio
    async def test_listing_paging(self, mediator, make_product):
        for index in range(3):
            await make_product(name=f"Unit {index}")

        page = (await mediator.send(GetProductsQuery(page=2, page_size=2, sort="name"))).value

        assert page.total_count == 3
        assert page.total_pages == 2
        assert [p.name for p in page.items] == ["Unit 2"]

    @pytest.mark.asyncio
    async def test_listing_validation(self, mediator):
        with pytest.raises(ValidationException) as exc_info:
            await mediator.send(GetProductsQuery(page=0, page_size=101, sort="random"))

        assert "Page must be at least 1" in exc_info.value.errors
        assert "Page size must be between 1 and 100" in exc_info.value.errors

    @pytest.mark.asyncio
    async def test_filter_options(self, mediator, make_product):
        await make_product(brand="Daikin", base_price=Decimal("700"), specifications={"btu": "9000"})
        await make_product(brand="Daikin", base_price=Decimal("1500"), specifications={"btu": "12000"})

        options = (await mediator.send(GetFilterOptionsQuery(category="air-conditioners"))).value

        assert [(b.name, b.count) for b in options.brands] == [("Daikin", 2)]
        assert options.price_range.min == Decimal("700")
        assert options.price_range.max == Decimal("1500")
        assert [o.label for o in options.specifications["btu"]] == ["9000 BTU", "12000 BTU"]


class TestTranslations:
    @pytest.mark.asyncio
    async def test_translation_lifecycle(self, as_admin, mediator, make_product):
        product = await make_product(name="Arctic Split", short_description="Quiet inverter unit")

        added = await as_admin.send(
            AddProductTranslationCommand(product_id=product.id, language_code="de", name="Arktis Split")
        )
        duplicate = await as_admin.send(
            AddProductTranslationCommand(product_id=product.id, language_code="DE", name="Nochmal")
        )
        await as_admin.send(
            UpdateProductTranslationCommand(product_id=product.id, language_code="de", name="Arktis Split II")
        )
        localized = (await mediator.send(GetProductBySlugQuery(slug="arctic-split", language_code="de"))).value
        listing = (await as_admin.send(GetProductTranslationsQuery(product_id=product.id))).value

        assert added.succeeded
        assert duplicate.kind == ResultKind.CONFLICT
        assert duplicate.error == "Translation for language 'de' already exists. Use PUT to update."
        assert localized.name == "Arktis Split II"
        assert localized.short_description == "Quiet inverter unit"
        assert [t.language_code for t in listing.translations] == ["de"]

        deleted = await as_admin.send(DeleteProductTranslationCommand(product_id=product.id, language_code="de"))
        missing = await as_admin.send(DeleteProductTranslationCommand(product_id=product.id, language_code="de"))

        assert deleted.succeeded
        assert missing.kind == ResultKind.NOT_FOUND
        assert missing.error == "Translation for language 'de' not found"

    @pytest.mark.asyncio
    async def test_language_code_validation(self, as_admin):
        with pytest.raises(ValidationException, match="ISO 639-1"):
            await as_admin.send(
                AddProductTranslationCommand(product_id=uuid4(), language_code="deu", name="Klima")
            )


class TestProductExtras:
    @pytest.mark.asyncio
    async def test_installation_options(self, mediator, make_product):
        product = await make_product(base_price=Decimal("1000.00"))

        options = await mediator.send(GetInstallationOptionsQuery(product_id=product.id))

        assert options.is_available is True
        assert [o.price for o in options.options] == [Decimal("150.00"), Decimal("250.00"), Decimal("350.00")]

    @pytest.mark.asyncio
    async def test_installation_unavailable_for_cheap_products(self, mediator, make_product):
        product = await make_product(base_price=Decimal("49.00"))

        options = await mediator.send(GetInstallationOptionsQuery(product_id=product.id))

        assert options.is_available is False
        assert options.options == []

    @pytest.mark.asyncio
    async def test_missing_product_raises_not_found(self, mediator):
        with pytest.raises(NotFoundException):
            await mediator.send(GetInstallationOptionsQuery(product_id=uuid4()))
        with pytest.raises(NotFoundException):
            await mediator.send(GetProductPriceHistoryQuery(product_id=uuid4()))

    @pytest.mark.asyncio
    async def test_price_history_window_validation(self, mediator):
        with pytest.raises(ValidationException, match="Days back must be between 1 and 365"):
            await mediator.send(GetProductPriceHistoryQuery(product_id=uuid4(), days_back=400))

    @pytest.mark.asyncio
    async def test_financing(self, mediator, make_product):
        product = await make_product(base_price=Decimal("1200.00"))

        by_price = await mediator.send(GetFinancingQuoteQuery(price=Decimal("1200")))
        by_product = await mediator.send(GetProductFinancingQuery(product_id=product.id))

        assert by_product.product_id == product.id
        assert [o.months for o in by_product.offers] == [6, 12, 24, 36]
        assert by_product.offers[1].monthly_payment == Decimal("100.00")
        assert by_price.offers == by_product.offers

    @pytest.mark.asyncio
    async def test_financing_price_must_be_positive(self, mediator):
        with pytest.raises(ValidationException, match="Price must be greater than zero"):
            await mediator.send(GetFinancingQuoteQuery(price=Decimal("0")))
