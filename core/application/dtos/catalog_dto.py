"""DTOs for price history, installation options and financing quotes."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from core.domain.services.financing import FinancingQuote
from core.domain.services.installation import InstallationOption
from core.domain.services.price_trend import PriceTrend


class PricePointDto(BaseModel):
    date: datetime
    price: Decimal
    compare_at_price: Optional[Decimal] = None
    reason: str

    model_config = {"frozen": True}


class PriceHistoryDto(BaseModel):
    """Price trend of a product over a window of days."""

    product_id: UUID
    product_name: str
    days_back: int
    current_price: Decimal
    current_compare_at_price: Optional[Decimal] = None
    lowest_price: Decimal
    highest_price: Decimal
    average_price: Decimal
    points: List[PricePointDto] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def from_trend(cls, product_id: UUID, product_name: str, days_back: int, trend: PriceTrend) -> "PriceHistoryDto":
        return cls(
            product_id=product_id,
            product_name=product_name,
            days_back=days_back,
            current_price=trend.current_price,
            current_compare_at_price=trend.current_compare_at_price,
            lowest_price=trend.lowest_price,
            highest_price=trend.highest_price,
            average_price=trend.average_price,
            points=[
                PricePointDto(
                    date=p.date,
                    price=p.price,
                    compare_at_price=p.compare_at_price,
                    reason=p.reason,
                )
                for p in trend.points
            ],
        )


class InstallationOptionDto(BaseModel):
    type: str
    name: str
    description: str
    price: Decimal
    estimated_days: int
    features: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def from_option(cls, option: InstallationOption) -> "InstallationOptionDto":
        package = option.package
        return cls(
            type=package.type,
            name=package.name,
            description=package.description,
            price=option.price,
            estimated_days=package.estimated_days,
            features=list(package.features),
        )


class InstallationOptionsDto(BaseModel):
    product_id: UUID
    product_name: str
    requires_installation: bool
    is_available: bool
    options: List[InstallationOptionDto] = Field(default_factory=list)

    model_config = {"frozen": True}


class FinancingOfferDto(BaseModel):
    months: int
    annual_rate: Decimal
    label: str
    monthly_payment: Decimal
    total_cost: Decimal
    interest_cost: Decimal
    is_zero_interest: bool

    model_config = {"frozen": True}


class FinancingQuoteDto(BaseModel):
    """Monthly payment plans for a price."""

    product_id: Optional[UUID] = None
    price: Decimal
    offers: List[FinancingOfferDto] = Field(default_factory=list)
    lowest_monthly_payment: Decimal
    has_zero_interest_option: bool

    model_config = {"frozen": True}

    @classmethod
    def from_quote(cls, quote: FinancingQuote, product_id: Optional[UUID] = None) -> "FinancingQuoteDto":
        return cls(
            product_id=product_id,
            price=quote.price,
            offers=[
                FinancingOfferDto(
                    months=o.plan.months,
                    annual_rate=o.plan.annual_rate,
                    label=o.plan.label,
                    monthly_payment=o.monthly_payment,
                    total_cost=o.total_cost,
                    interest_cost=o.interest_cost,
                    is_zero_interest=o.plan.annual_rate == 0,
                )
                for o in quote.offers
            ],
            lowest_monthly_payment=quote.lowest_monthly_payment,
            has_zero_interest_option=quote.has_zero_interest_option,
        )
