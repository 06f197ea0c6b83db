"""Product price history entry."""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from ..clock import utcnow
from ..enums import PriceChangeReason


@dataclass
class PriceHistoryEntry:
    """A price observed for a product at a point in time."""
    product_id: UUID
    price: Decimal
    compare_at_price: Optional[Decimal] = None
    reason: PriceChangeReason = PriceChangeReason.PRICE_CHANGE
    notes: Optional[str] = None
    recorded_at: datetime = field(default_factory=utcnow)
    id: UUID = field(default_factory=uuid4)
