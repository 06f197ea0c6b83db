"""Domain services: rules spanning several entities or pure calculations."""
from .address_book import AddressBook
from .filter_options import FilterOptions, build_filter_options
from .financing import DEFAULT_PLANS, FinancingPlan, FinancingQuote, quote
from .installation import installation_options, is_installation_available
from .order_pricing import OrderPricing, ShippingRates
from .price_trend import PriceTrend, summarize

__all__ = [
    "AddressBook",
    "DEFAULT_PLANS",
    "FilterOptions",
    "FinancingPlan",
    "FinancingQuote",
    "OrderPricing",
    "PriceTrend",
    "ShippingRates",
    "build_filter_options",
    "installation_options",
    "is_installation_available",
    "quote",
    "summarize",
]
