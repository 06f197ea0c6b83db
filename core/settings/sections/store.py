from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings

from core.domain.services.order_pricing import OrderPricing, ShippingRates
from core.settings.base import section_config


class StoreSettings(BaseSettings):
    """
    Storefront business settings.
    Loaded from STORE_* environment variables or the .env file.
    """

    currency: str = "EUR"
    tax_rate: Decimal = Decimal("0.20")

    # Shipping rates by method
    shipping_standard: Decimal = Decimal("5.99")
    shipping_express: Decimal = Decimal("15.99")
    shipping_free: Decimal = Decimal("0.00")
    shipping_other: Decimal = Decimal("9.99")

    cart_expiry_days: int = Field(default=7, ge=1)
    max_cart_quantity: int = Field(default=100, ge=1)

    installation_min_price: Decimal = Decimal("200")
    default_variant_stock: int = Field(default=50, ge=0)
    default_language: str = "en"
    price_history_days: int = Field(default=90, ge=1)

    low_stock_alerts: bool = True

    model_config = section_config("STORE_")

    @property
    def shipping_rates(self) -> ShippingRates:
        return ShippingRates(
            standard=self.shipping_standard,
            express=self.shipping_express,
            free=self.shipping_free,
            fallback=self.shipping_other,
        )

    def order_pricing(self) -> OrderPricing:
        return OrderPricing(
            shipping_rates=self.shipping_rates,
            tax_rate=self.tax_rate,
            currency=self.currency,
        )
