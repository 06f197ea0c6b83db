"""Product and inventory domain events."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .base import DomainEvent


@dataclass
class ProductPriceChangedEvent(DomainEvent):
    """Base or compare-at price of a product changed."""

    product_id: str = ""
    sku: str = ""
    previous_price: Decimal = Decimal("0.00")
    new_price: Decimal = Decimal("0.00")
    compare_at_price: Optional[Decimal] = None
    reason: str = ""

    def __post_init__(self):
        if not self.aggregate_id and self.product_id:
            self.aggregate_id = self.product_id
        super().__post_init__()


@dataclass
class StockAdjustedEvent(DomainEvent):
    """Stock of a single variant was adjusted."""

    AGGREGATE_TYPE = "Product"

    product_id: str = ""
    variant_id: str = ""
    variant_sku: str = ""
    previous_quantity: int = 0
    new_quantity: int = 0
    low_stock_threshold: int = 0
    reason: Optional[str] = None

    def __post_init__(self):
        if not self.aggregate_id and self.product_id:
            self.aggregate_id = self.product_id
        super().__post_init__()

    @property
    def is_low_stock(self) -> bool:
        return self.new_quantity <= self.low_stock_threshold
