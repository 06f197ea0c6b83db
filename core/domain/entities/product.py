"""
Product aggregate root with variants and translations.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from ..clock import utcnow
from ..enums import PriceChangeReason
from ..events.base import DomainEvent
from ..events.product_events import ProductPriceChangedEvent, StockAdjustedEvent
from ..exceptions import ConflictException, InsufficientStockError
from ..value_objects import round_money
from .price_history import PriceHistoryEntry
from .rules import (
    EventRecorder,
    non_negative,
    optional_non_negative,
    optional_text,
    required_text,
    to_decimal,
)

DEFAULT_LANGUAGE = "en"


def slugify(name: str) -> str:
    """URL slug for a product name."""
    return (
        name.strip().lower()
        .replace(" ", "-")
        .replace("&", "and")
        .replace("'", "")
        .replace('"', "")
    )


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """Lower-case, trim, drop empties and duplicates (keeping first order)."""
    result: List[str] = []
    for tag in tags or []:
        cleaned = (tag or "").strip().lower()
        if cleaned and cleaned not in result:
            result.append(cleaned)
    return result


@dataclass(frozen=True)
class ProductFeature:
    """Marketing bullet shown on the product page."""
    title: str
    description: str
    icon: Optional[str] = None


@dataclass(frozen=True)
class TranslatedContent:
    """Localised text of a product, with fallbacks already applied."""
    language_code: str
    name: str
    short_description: Optional[str]
    description: Optional[str]
    meta_title: Optional[str]
    meta_description: Optional[str]


@dataclass
class ProductTranslation:
    """Localised product copy for one ISO 639-1 language."""
    language_code: str
    name: str
    short_description: Optional[str] = None
    description: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        code = (self.language_code or "").strip().lower()
        if len(code) != 2 or not code.isalpha():
            raise ValueError("Language code must be 2 characters (ISO 639-1)")
        self.language_code = code
        self.name = required_text(self.name, "Name", 255)
        self.short_description = optional_text(self.short_description, "Short description", 500)
        self.meta_title = optional_text(self.meta_title, "Meta title", 200)
        self.meta_description = optional_text(self.meta_description, "Meta description", 500)

    def update(
        self,
        name: str,
        short_description: Optional[str] = None,
        description: Optional[str] = None,
        meta_title: Optional[str] = None,
        meta_description: Optional[str] = None,
    ) -> None:
        self.name = name
        self.short_description = short_description
        self.description = description
        self.meta_title = meta_title
        self.meta_description = meta_description
        self.__post_init__()


@dataclass
class ProductVariant:
    """Purchasable configuration of a product; owns the stock count."""
    sku: str
    name: str
    product_id: Optional[UUID] = None
    price_adjustment: Decimal = Decimal("0.00")
    attributes: Dict[str, Any] = field(default_factory=dict)
    stock_quantity: int = 0
    low_stock_threshold: int = 5
    is_active: bool = True
    sort_order: int = 0
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        self.sku = required_text(self.sku, "Variant SKU", 50).upper()
        self.name = required_text(self.name, "Variant name", 100)
        self.price_adjustment = to_decimal(self.price_adjustment)
        if self.stock_quantity < 0:
            raise ValueError("Stock quantity cannot be negative")
        if self.low_stock_threshold < 0:
            raise ValueError("Low stock threshold cannot be negative")

    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= self.low_stock_threshold

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0

    def get_price(self, base_price: Decimal) -> Decimal:
        return to_decimal(base_price) + self.price_adjustment

    def adjust_stock(self, adjustment: int) -> int:
        """Apply a signed stock delta; returns the new quantity."""
        new_quantity = self.stock_quantity + adjustment
        if new_quantity < 0:
            raise InsufficientStockError(self.stock_quantity)
        self.stock_quantity = new_quantity
        return new_quantity


@dataclass
class Product(EventRecorder):
    """
    Product aggregate root.

    Prices are Decimal amounts in the store currency. Variants carry the
    stock and a price adjustment relative to ``base_price``.
    """
    sku: str
    name: str
    base_price: Decimal
    slug: str = ""
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
    specifications: Dict[str, Any] = field(default_factory=dict)
    features: List[ProductFeature] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    variants: List[ProductVariant] = field(default_factory=list)
    translations: List[ProductTranslation] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    _domain_events: List[DomainEvent] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        self.sku = required_text(self.sku, "SKU", 50).upper()
        self.name = required_text(self.name, "Product name", 255)
        self.slug = (self.slug or slugify(self.name)).strip().lower()
        self.short_description = optional_text(self.short_description, "Short description", 500)
        self.brand = optional_text(self.brand, "Brand", 100)
        self.model = optional_text(self.model, "Model", 100)
        self.meta_title = optional_text(self.meta_title, "Meta title", 200)
        self.meta_description = optional_text(self.meta_description, "Meta description", 500)
        self.base_price = non_negative(self.base_price, "Base price")
        self.compare_at_price = optional_non_negative(self.compare_at_price, "Compare at price")
        self.cost_price = optional_non_negative(self.cost_price, "Cost price")
        self.weight_kg = optional_non_negative(self.weight_kg, "Weight")
        if self.warranty_months < 0:
            raise ValueError("Warranty months cannot be negative")
        self.tags = normalize_tags(self.tags)
        for variant in self.variants:
            variant.product_id = self.id

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    @property
    def is_on_sale(self) -> bool:
        return self.compare_at_price is not None and self.compare_at_price > self.base_price

    @property
    def discount_percentage(self) -> Decimal:
        if not self.is_on_sale:
            return Decimal("0")
        saving = self.compare_at_price - self.base_price
        return round_money(saving / self.compare_at_price * 100)

    @property
    def min_price(self) -> Decimal:
        prices = [v.get_price(self.base_price) for v in self.active_variants]
        return min(prices) if prices else self.base_price

    @property
    def max_price(self) -> Decimal:
        prices = [v.get_price(self.base_price) for v in self.active_variants]
        return max(prices) if prices else self.base_price

    def change_price(
        self,
        base_price: Decimal,
        compare_at_price: Optional[Decimal] = None,
        reason: PriceChangeReason = PriceChangeReason.PRICE_CHANGE,
    ) -> Optional[PriceHistoryEntry]:
        """
        Set new prices and return the history entry to store.

        Returns None when neither price actually changed.
        """
        new_base = non_negative(base_price, "Base price")
        new_compare = optional_non_negative(compare_at_price, "Compare at price")
        if new_base == self.base_price and new_compare == self.compare_at_price:
            return None

        previous = self.base_price
        self.base_price = new_base
        self.compare_at_price = new_compare
        self.touch()

        self._record_event(
            ProductPriceChangedEvent(
                product_id=str(self.id),
                sku=self.sku,
                previous_price=previous,
                new_price=new_base,
                compare_at_price=new_compare,
                reason=reason.value,
            )
        )
        return PriceHistoryEntry(
            product_id=self.id,
            price=new_base,
            compare_at_price=new_compare,
            reason=reason,
            notes=f"Price changed from {previous:.2f} to {new_base:.2f}",
        )

    def initial_price_entry(self) -> PriceHistoryEntry:
        return PriceHistoryEntry(
            product_id=self.id,
            price=self.base_price,
            compare_at_price=self.compare_at_price,
            reason=PriceChangeReason.INITIAL,
            recorded_at=self.created_at,
        )

    # ------------------------------------------------------------------
    # Variants and stock
    # ------------------------------------------------------------------

    @property
    def active_variants(self) -> List[ProductVariant]:
        return sorted((v for v in self.variants if v.is_active), key=lambda v: v.sort_order)

    @property
    def total_stock(self) -> int:
        return sum(v.stock_quantity for v in self.variants if v.is_active)

    @property
    def in_stock(self) -> bool:
        return self.total_stock > 0

    def get_variant(self, variant_id: UUID) -> Optional[ProductVariant]:
        return next((v for v in self.variants if v.id == variant_id), None)

    def purchasable_variant(self, variant_id: Optional[UUID] = None) -> Optional[ProductVariant]:
        """The requested variant when active, else the first active one."""
        if variant_id is not None:
            variant = self.get_variant(variant_id)
            if variant is not None and variant.is_active:
                return variant
        active = self.active_variants
        return active[0] if active else None

    def add_variant(self, variant: ProductVariant) -> ProductVariant:
        if any(v.sku == variant.sku for v in self.variants):
            raise ConflictException(f"Variant SKU '{variant.sku}' already exists")
        variant.product_id = self.id
        self.variants.append(variant)
        self.touch()
        return variant

    def adjust_stock(self, variant_id: UUID, adjustment: int, reason: Optional[str] = None) -> ProductVariant:
        """Adjust one variant's stock and record a StockAdjustedEvent."""
        variant = self.get_variant(variant_id)
        if variant is None:
            raise KeyError(variant_id)
        previous = variant.stock_quantity
        variant.adjust_stock(adjustment)
        self.touch()
        self._record_event(
            StockAdjustedEvent(
                product_id=str(self.id),
                variant_id=str(variant.id),
                variant_sku=variant.sku,
                previous_quantity=previous,
                new_quantity=variant.stock_quantity,
                low_stock_threshold=variant.low_stock_threshold,
                reason=reason,
            )
        )
        return variant

    # ------------------------------------------------------------------
    # Translations
    # ------------------------------------------------------------------

    def get_translation(self, language_code: str) -> Optional[ProductTranslation]:
        code = (language_code or "").strip().lower()
        return next((t for t in self.translations if t.language_code == code), None)

    def add_translation(self, translation: ProductTranslation) -> ProductTranslation:
        if self.get_translation(translation.language_code) is not None:
            raise ConflictException(
                f"Translation for language '{translation.language_code}' already exists. "
                "Use PUT to update."
            )
        self.translations.append(translation)
        self.touch()
        return translation

    def remove_translation(self, language_code: str) -> Optional[ProductTranslation]:
        translation = self.get_translation(language_code)
        if translation is not None:
            self.translations.remove(translation)
            self.touch()
        return translation

    def get_translated_content(self, language_code: Optional[str]) -> TranslatedContent:
        """Localised copy; English or unknown languages get the defaults."""
        default = TranslatedContent(
            language_code=DEFAULT_LANGUAGE,
            name=self.name,
            short_description=self.short_description,
            description=self.description,
            meta_title=self.meta_title,
            meta_description=self.meta_description,
        )
        if not language_code or language_code.strip().lower() == DEFAULT_LANGUAGE:
            return default

        translation = self.get_translation(language_code)
        if translation is None:
            return default

        return TranslatedContent(
            language_code=translation.language_code,
            name=translation.name,
            short_description=translation.short_description or self.short_description,
            description=translation.description or self.description,
            meta_title=translation.meta_title or self.meta_title,
            meta_description=translation.meta_description or self.meta_description,
        )

    def touch(self) -> None:
        self.updated_at = utcnow()
