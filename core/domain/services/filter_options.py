"""
Catalogue facet aggregation.

Builds the brand, price, tag and HVAC specification facets shown next to a
product listing.
"""
import json
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from ..entities.product import Product

HVAC_SPEC_KEYS = (
    "btu",
    "energyRating",
    "seer",
    "eer",
    "hspf",
    "voltage",
    "refrigerantType",
    "fuelType",
    "afue",
)
_HVAC_KEYS_LOWER = {key.lower() for key in HVAC_SPEC_KEYS}


@dataclass(frozen=True)
class CountedOption:
    name: str
    count: int


@dataclass(frozen=True)
class SpecificationOption:
    value: str
    label: str
    count: int


@dataclass
class FilterOptions:
    brands: List[CountedOption] = field(default_factory=list)
    min_price: Decimal = Decimal("0")
    max_price: Decimal = Decimal("0")
    specifications: Dict[str, List[SpecificationOption]] = field(default_factory=dict)
    tags: List[CountedOption] = field(default_factory=list)


def format_specification_label(key: str, value: str) -> str:
    key = key.lower()
    if key == "btu":
        return f"{value} BTU"
    if key == "seer":
        return f"SEER {value}"
    if key == "eer":
        return f"EER {value}"
    if key == "hspf":
        return f"HSPF {value}"
    if key == "afue":
        return f"{value}% AFUE"
    if key == "voltage":
        return value if "V" in value else f"{value}V"
    return value


def sortable_value(value: str) -> float:
    """Numeric sort key for an option value; non-numeric values sort as 0."""
    try:
        return float(value.replace(",", ""))
    except ValueError:
        return 0.0


def _spec_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip()
    return json.dumps(value)


def _counted(names: Iterable[str]) -> List[CountedOption]:
    counts = Counter(names)
    options = [CountedOption(name=name, count=count) for name, count in counts.items()]
    return sorted(options, key=lambda o: (-o.count, o.name))


def build_filter_options(products: Iterable[Product]) -> FilterOptions:
    """Facets over the active products in ``products``."""
    active = [p for p in products if p.is_active]

    brands = _counted(p.brand for p in active if p.brand and p.brand.strip())
    tags = _counted(tag for p in active for tag in p.tags)

    prices = [p.base_price for p in active]
    min_price = min(prices) if prices else Decimal("0")
    max_price = max(prices) if prices else Decimal("0")

    counts: Dict[str, Dict[str, int]] = {}
    for product in active:
        for key, raw in product.specifications.items():
            if key.lower() not in _HVAC_KEYS_LOWER:
                continue
            value = _spec_text(raw)
            if not value:
                continue
            per_key = counts.setdefault(key, {})
            per_key[value] = per_key.get(value, 0) + 1

    specifications = {
        key: sorted(
            (
                SpecificationOption(
                    value=value,
                    label=format_specification_label(key, value),
                    count=count,
                )
                for value, count in values.items()
            ),
            key=lambda o: sortable_value(o.value),
        )
        for key, values in counts.items()
    }

    return FilterOptions(
        brands=brands,
        min_price=min_price,
        max_price=max_price,
        specifications=specifications,
        tags=tags,
    )
