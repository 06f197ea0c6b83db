"""Checkout pricing rules: shipping by method and tax on the subtotal."""
from dataclasses import dataclass
from decimal import Decimal

from ..value_objects import Money, round_money


@dataclass(frozen=True)
class ShippingRates:
    """Flat shipping price per method; unknown methods use ``fallback``."""
    standard: Decimal = Decimal("5.99")
    express: Decimal = Decimal("15.99")
    free: Decimal = Decimal("0.00")
    fallback: Decimal = Decimal("9.99")

    def for_method(self, method: str) -> Decimal:
        key = (method or "").strip().lower()
        if key == "express":
            return self.express
        if key == "standard":
            return self.standard
        if key == "free":
            return self.free
        return self.fallback


@dataclass(frozen=True)
class OrderPricing:
    shipping_rates: ShippingRates
    tax_rate: Decimal = Decimal("0.20")
    currency: str = "EUR"

    def shipping_cost(self, method: str) -> Money:
        return Money(amount=round_money(self.shipping_rates.for_method(method)), currency=self.currency)

    def tax(self, subtotal: Decimal) -> Money:
        return Money(amount=round_money(subtotal * self.tax_rate), currency=self.currency)
