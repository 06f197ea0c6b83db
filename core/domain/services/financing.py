"""
Financing calculator.

Monthly payments use the standard amortization formula; zero-APR plans
split the price evenly across the term.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence

from ..value_objects import round_money
from ..entities.rules import to_decimal


@dataclass(frozen=True)
class FinancingPlan:
    """A financing term offered at checkout."""
    months: int
    annual_rate: Decimal
    label: Optional[str] = None

    def __post_init__(self):
        if self.months <= 0:
            raise ValueError("Financing term must be at least one month")
        object.__setattr__(self, "annual_rate", to_decimal(self.annual_rate))
        if self.annual_rate < 0:
            raise ValueError("Interest rate cannot be negative")
        if self.label is None:
            object.__setattr__(
                self, "label", f"{self.months} months - {self.annual_rate.normalize():f}% APR"
            )


DEFAULT_PLANS: List[FinancingPlan] = [
    FinancingPlan(months=6, annual_rate=Decimal("0")),
    FinancingPlan(months=12, annual_rate=Decimal("0")),
    FinancingPlan(months=24, annual_rate=Decimal("9.9")),
    FinancingPlan(months=36, annual_rate=Decimal("12.9")),
]


@dataclass(frozen=True)
class FinancingOffer:
    plan: FinancingPlan
    monthly_payment: Decimal
    total_cost: Decimal
    interest_cost: Decimal


@dataclass(frozen=True)
class FinancingQuote:
    price: Decimal
    offers: List[FinancingOffer]
    lowest_monthly_payment: Decimal
    has_zero_interest_option: bool


def monthly_payment(principal: Decimal, plan: FinancingPlan) -> Decimal:
    """Unrounded monthly instalment for ``principal`` under ``plan``."""
    principal = to_decimal(principal)
    if plan.annual_rate == 0:
        return principal / plan.months

    monthly_rate = plan.annual_rate / Decimal(100) / Decimal(12)
    growth = (1 + monthly_rate) ** plan.months
    return principal * (monthly_rate * growth) / (growth - 1)


def quote(price: Decimal, plans: Sequence[FinancingPlan] = DEFAULT_PLANS) -> FinancingQuote:
    """
    Price every plan for ``price``.

    Monthly payments are rounded to cents; the total cost is what the
    customer pays over the term (rounded payment x months).

    Raises:
        ValueError: If the price is not positive or no plans are given
    """
    price = to_decimal(price)
    if price <= 0:
        raise ValueError("Price must be greater than zero")
    if not plans:
        raise ValueError("At least one financing plan is required")

    offers = []
    for plan in plans:
        payment = round_money(monthly_payment(price, plan))
        total = round_money(payment * plan.months)
        offers.append(
            FinancingOffer(
                plan=plan,
                monthly_payment=payment,
                total_cost=total,
                interest_cost=round_money(total - price),
            )
        )

    return FinancingQuote(
        price=round_money(price),
        offers=offers,
        lowest_monthly_payment=min(o.monthly_payment for o in offers),
        has_zero_interest_option=any(p.annual_rate == 0 for p in plans),
    )
