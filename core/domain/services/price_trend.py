"""Price history summary for product pages."""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence

from ..clock import utcnow
from ..entities.price_history import PriceHistoryEntry
from ..entities.product import Product
from ..value_objects import round_money


@dataclass(frozen=True)
class PricePoint:
    date: datetime
    price: Decimal
    compare_at_price: Optional[Decimal]
    reason: str


@dataclass(frozen=True)
class PriceTrend:
    current_price: Decimal
    current_compare_at_price: Optional[Decimal]
    lowest_price: Decimal
    highest_price: Decimal
    average_price: Decimal
    points: List[PricePoint]


def summarize(product: Product, entries: Sequence[PriceHistoryEntry]) -> PriceTrend:
    """
    Lowest, highest and average price over ``entries``.

    Without entries the trend is a single "Current" point at today's price.
    """
    if not entries:
        return PriceTrend(
            current_price=product.base_price,
            current_compare_at_price=product.compare_at_price,
            lowest_price=product.base_price,
            highest_price=product.base_price,
            average_price=product.base_price,
            points=[
                PricePoint(
                    date=utcnow(),
                    price=product.base_price,
                    compare_at_price=product.compare_at_price,
                    reason="Current",
                )
            ],
        )

    ordered = sorted(entries, key=lambda e: e.recorded_at)
    prices = [e.price for e in ordered]
    return PriceTrend(
        current_price=product.base_price,
        current_compare_at_price=product.compare_at_price,
        lowest_price=min(prices),
        highest_price=max(prices),
        average_price=round_money(sum(prices) / len(prices)),
        points=[
            PricePoint(
                date=e.recorded_at,
                price=e.price,
                compare_at_price=e.compare_at_price,
                reason=e.reason.value,
            )
            for e in ordered
        ],
    )
