"""Professional installation packages offered with a product."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Tuple

from ..value_objects import round_money

DEFAULT_MIN_PRICE = Decimal("200")


@dataclass(frozen=True)
class InstallationPackage:
    type: str
    name: str
    description: str
    rate: Decimal
    estimated_days: int
    features: Tuple[str, ...] = field(default_factory=tuple)


PACKAGES: Tuple[InstallationPackage, ...] = (
    InstallationPackage(
        type="Standard",
        name="Standard Installation",
        description="Professional installation by certified technicians",
        rate=Decimal("0.15"),
        estimated_days=7,
        features=(
            "Certified technician",
            "Equipment setup",
            "Basic testing",
            "Standard scheduling (5-7 days)",
        ),
    ),
    InstallationPackage(
        type="Premium",
        name="Premium Installation",
        description="Full-service installation with extended warranty coverage",
        rate=Decimal("0.25"),
        estimated_days=5,
        features=(
            "Senior certified technician",
            "Complete system integration",
            "Performance optimization",
            "Extended testing & calibration",
            "1-year installation warranty",
            "Priority scheduling (3-5 days)",
        ),
    ),
    InstallationPackage(
        type="Express",
        name="Express Installation",
        description="Fast-track installation with priority scheduling",
        rate=Decimal("0.35"),
        estimated_days=2,
        features=(
            "Senior certified technician",
            "Complete system integration",
            "Performance optimization",
            "Extended testing & calibration",
            "2-year installation warranty",
            "Express scheduling (1-2 days)",
            "Weekend availability",
        ),
    ),
)


@dataclass(frozen=True)
class InstallationOption:
    package: InstallationPackage
    price: Decimal


def is_installation_available(base_price: Decimal, min_price: Decimal = DEFAULT_MIN_PRICE) -> bool:
    return base_price >= min_price


def installation_options(base_price: Decimal, min_price: Decimal = DEFAULT_MIN_PRICE) -> List[InstallationOption]:
    """Priced packages for a product, or an empty list below ``min_price``."""
    if not is_installation_available(base_price, min_price):
        return []
    return [
        InstallationOption(package=package, price=round_money(base_price * package.rate))
        for package in PACKAGES
    ]
