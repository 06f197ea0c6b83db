"""Static mappers for the Product aggregate ↔ database models."""

from decimal import Decimal
from typing import Optional

from core.domain.entities.price_history import PriceHistoryEntry
from core.domain.entities.product import (
    Product,
    ProductFeature,
    ProductTranslation,
    ProductVariant,
)
from core.domain.enums import PriceChangeReason

from ..models.product_model import (
    PriceHistoryModel,
    ProductModel,
    ProductTagModel,
    ProductTranslationModel,
    ProductVariantModel,
)
from .collections import sync_children


def _decimal(value) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


class ProductVariantMapper:
    """Static mapper for ProductVariant ↔ ProductVariantModel transformation."""

    @staticmethod
    def to_domain(model: ProductVariantModel) -> ProductVariant:
        return ProductVariant(
            id=model.id,
            product_id=model.product_id,
            sku=model.sku,
            name=model.name,
            price_adjustment=_decimal(model.price_adjustment),
            attributes=dict(model.attributes or {}),
            stock_quantity=model.stock_quantity,
            low_stock_threshold=model.low_stock_threshold,
            is_active=model.is_active,
            sort_order=model.sort_order,
        )

    @staticmethod
    def to_persistence(entity: ProductVariant) -> ProductVariantModel:
        model = ProductVariantModel(id=entity.id)
        return ProductVariantMapper.update_persistence(entity, model)

    @staticmethod
    def update_persistence(entity: ProductVariant, model: ProductVariantModel) -> ProductVariantModel:
        model.sku = entity.sku
        model.name = entity.name
        model.price_adjustment = entity.price_adjustment
        model.attributes = dict(entity.attributes)
        model.stock_quantity = entity.stock_quantity
        model.low_stock_threshold = entity.low_stock_threshold
        model.is_active = entity.is_active
        model.sort_order = entity.sort_order
        return model


class ProductTranslationMapper:
    """Static mapper for ProductTranslation ↔ ProductTranslationModel."""

    @staticmethod
    def to_domain(model: ProductTranslationModel) -> ProductTranslation:
        return ProductTranslation(
            id=model.id,
            language_code=model.language_code,
            name=model.name,
            short_description=model.short_description,
            description=model.description,
            meta_title=model.meta_title,
            meta_description=model.meta_description,
        )

    @staticmethod
    def to_persistence(entity: ProductTranslation) -> ProductTranslationModel:
        model = ProductTranslationModel(id=entity.id)
        return ProductTranslationMapper.update_persistence(entity, model)

    @staticmethod
    def update_persistence(
        entity: ProductTranslation, model: ProductTranslationModel
    ) -> ProductTranslationModel:
        model.language_code = entity.language_code
        model.name = entity.name
        model.short_description = entity.short_description
        model.description = entity.description
        model.meta_title = entity.meta_title
        model.meta_description = entity.meta_description
        return model


class ProductMapper:
    """Static mapper for Product ↔ ProductModel with variants, tags and translations."""

    @staticmethod
    def to_domain(model: ProductModel) -> Product:
        """Convert ORM model to domain aggregate (with nested children).

        Args:
            model: ProductModel instance

        Returns:
            Product domain aggregate
        """
        tags = [t.tag for t in sorted(model.tags, key=lambda t: t.position)]
        features = [
            ProductFeature(
                title=f.get("title", ""),
                description=f.get("description", ""),
                icon=f.get("icon"),
            )
            for f in (model.features or [])
        ]

        return Product(
            id=model.id,
            sku=model.sku,
            name=model.name,
            slug=model.slug,
            short_description=model.short_description,
            description=model.description,
            base_price=_decimal(model.base_price),
            compare_at_price=_decimal(model.compare_at_price),
            cost_price=_decimal(model.cost_price),
            category=model.category,
            brand=model.brand,
            model=model.model,
            is_active=model.is_active,
            is_featured=model.is_featured,
            requires_installation=model.requires_installation,
            warranty_months=model.warranty_months,
            weight_kg=_decimal(model.weight_kg),
            meta_title=model.meta_title,
            meta_description=model.meta_description,
            specifications=dict(model.specifications or {}),
            features=features,
            tags=tags,
            variants=[ProductVariantMapper.to_domain(v) for v in model.variants],
            translations=[ProductTranslationMapper.to_domain(t) for t in model.translations],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: Product) -> ProductModel:
        """Convert domain aggregate to a new ORM model.

        Args:
            entity: Product domain aggregate

        Returns:
            ProductModel instance
        """
        model = ProductModel(id=entity.id, created_at=entity.created_at)
        model.variants = []
        model.tags = []
        model.translations = []
        return ProductMapper.update_persistence(entity, model)

    @staticmethod
    def update_persistence(entity: Product, model: ProductModel) -> ProductModel:
        """Update existing ORM model from domain aggregate.

        Child rows are matched by id (tags by value); rows that disappeared
        from the aggregate are orphaned and deleted on flush.

        Args:
            entity: Product domain aggregate
            model: Existing ProductModel instance

        Returns:
            Updated ProductModel instance
        """
        model.sku = entity.sku
        model.name = entity.name
        model.slug = entity.slug
        model.short_description = entity.short_description
        model.description = entity.description
        model.base_price = entity.base_price
        model.compare_at_price = entity.compare_at_price
        model.cost_price = entity.cost_price
        model.category = entity.category
        model.brand = entity.brand
        model.model = entity.model
        model.is_active = entity.is_active
        model.is_featured = entity.is_featured
        model.requires_installation = entity.requires_installation
        model.warranty_months = entity.warranty_months
        model.weight_kg = entity.weight_kg
        model.meta_title = entity.meta_title
        model.meta_description = entity.meta_description
        model.specifications = dict(entity.specifications)
        model.features = [
            {"title": f.title, "description": f.description, "icon": f.icon}
            for f in entity.features
        ]
        model.updated_at = entity.updated_at

        model.variants = sync_children(
            model.variants,
            entity.variants,
            key=lambda v: v.id,
            create=ProductVariantMapper.to_persistence,
            update=ProductVariantMapper.update_persistence,
        )
        model.translations = sync_children(
            model.translations,
            entity.translations,
            key=lambda t: t.id,
            create=ProductTranslationMapper.to_persistence,
            update=ProductTranslationMapper.update_persistence,
        )

        positions = {tag: index for index, tag in enumerate(entity.tags)}
        model.tags = sync_children(
            model.tags,
            entity.tags,
            key=lambda t: t if isinstance(t, str) else t.tag,
            create=lambda tag: ProductTagModel(tag=tag, position=positions[tag]),
            update=lambda tag, row: setattr(row, "position", positions[tag]),
        )
        return model


class PriceHistoryMapper:
    """Static mapper for PriceHistoryEntry ↔ PriceHistoryModel."""

    @staticmethod
    def to_domain(model: PriceHistoryModel) -> PriceHistoryEntry:
        return PriceHistoryEntry(
            id=model.id,
            product_id=model.product_id,
            price=_decimal(model.price),
            compare_at_price=_decimal(model.compare_at_price),
            reason=PriceChangeReason(model.reason),
            notes=model.notes,
            recorded_at=model.recorded_at,
        )

    @staticmethod
    def to_persistence(entity: PriceHistoryEntry) -> PriceHistoryModel:
        return PriceHistoryModel(
            id=entity.id,
            product_id=entity.product_id,
            price=entity.price,
            compare_at_price=entity.compare_at_price,
            reason=entity.reason.value,
            notes=entity.notes,
            recorded_at=entity.recorded_at,
        )
