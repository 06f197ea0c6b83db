"""Tests for financing, installation, filter facets and price trends."""

from datetime import timedelta
from decimal import Decimal

import pytest

from core.domain.clock import utcnow
from core.domain.entities.price_history import PriceHistoryEntry
from core.domain.entities.product import Product
from core.domain.enums import PriceChangeReason
from core.domain.services.filter_options import build_filter_options, format_specification_label
from core.domain.services.financing import FinancingPlan, monthly_payment, quote
from core.domain.services.installation import installation_options, is_installation_available
from core.domain.services.order_pricing import OrderPricing, ShippingRates
from core.domain.services.price_trend import summarize
from core.domain.value_objects import round_money


class TestFinancing:
    def test_zero_apr_splits_evenly(self):
        plan = FinancingPlan(months=12, annual_rate=Decimal("0"))

        assert monthly_payment(Decimal("1200"), plan) == Decimal("100")

    def test_amortized_payment(self):
        plan = FinancingPlan(months=24, annual_rate=Decimal("9.9"))

        assert round_money(monthly_payment(Decimal("1000"), plan)) == Decimal("46.10")

    def test_quote_totals_use_rounded_payment(self):
        result = quote(Decimal("1000"))

        by_months = {o.plan.months: o for o in result.offers}
        assert by_months[6].monthly_payment == Decimal("166.67")
        assert by_months[6].total_cost == Decimal("1000.02")
        assert by_months[24].total_cost == by_months[24].monthly_payment * 24
        assert by_months[24].interest_cost > 0
        assert result.has_zero_interest_option is True
        assert result.lowest_monthly_payment == by_months[36].monthly_payment

    def test_default_label(self):
        assert FinancingPlan(months=24, annual_rate=Decimal("9.9")).label == "24 months - 9.9% APR"

    @pytest.mark.parametrize("price", [Decimal("0"), Decimal("-5")])
    def test_price_must_be_positive(self, price):
        with pytest.raises(ValueError, match="Price must be greater than zero"):
            quote(price)


class TestInstallation:
    def test_packages_priced_from_base_price(self):
        options = installation_options(Decimal("1000.00"))

        assert [(o.package.type, o.price) for o in options] == [
            ("Standard", Decimal("150.00")),
            ("Premium", Decimal("250.00")),
            ("Express", Decimal("350.00")),
        ]

    def test_unavailable_below_threshold(self):
        assert is_installation_available(Decimal("199.99")) is False
        assert installation_options(Decimal("199.99")) == []
        assert is_installation_available(Decimal("200.00")) is True


class TestOrderPricing:
    def test_shipping_by_method(self):
        pricing = OrderPricing(shipping_rates=ShippingRates())

        assert pricing.shipping_cost("Express").amount == Decimal("15.99")
        assert pricing.shipping_cost("standard").amount == Decimal("5.99")
        assert pricing.shipping_cost("free").amount == Decimal("0.00")
        assert pricing.shipping_cost("pigeon").amount == Decimal("9.99")

    def test_tax_is_rounded(self):
        pricing = OrderPricing(shipping_rates=ShippingRates(), tax_rate=Decimal("0.20"))

        assert pricing.tax(Decimal("10.03")).amount == Decimal("2.01")


class TestFilterOptions:
    def test_facets_over_active_products(self):
        products = [
            Product(
                sku="A", name="Alpha", base_price=Decimal("500"), brand="Daikin",
                specifications={"btu": "12000", "color": "white"}, tags=["inverter"],
            ),
            Product(
                sku="B", name="Beta", base_price=Decimal("900"), brand="Daikin",
                specifications={"btu": "9000", "seer": "21"}, tags=["inverter", "wifi"],
            ),
            Product(sku="C", name="Gamma", base_price=Decimal("300"), brand="Mitsubishi"),
            Product(sku="D", name="Hidden", base_price=Decimal("50"), brand="Other", is_active=False),
        ]

        options = build_filter_options(products)

        assert [(b.name, b.count) for b in options.brands] == [("Daikin", 2), ("Mitsubishi", 1)]
        assert options.min_price == Decimal("300")
        assert options.max_price == Decimal("900")
        assert [(t.name, t.count) for t in options.tags] == [("inverter", 2), ("wifi", 1)]
        assert [o.value for o in options.specifications["btu"]] == ["9000", "12000"]
        assert options.specifications["btu"][0].label == "9000 BTU"
        assert "color" not in options.specifications

    def test_empty_catalogue(self):
        options = build_filter_options([])

        assert options.brands == []
        assert options.min_price == options.max_price == Decimal("0")

    @pytest.mark.parametrize(
        "key,value,label",
        [
            ("seer", "21", "SEER 21"),
            ("afue", "95", "95% AFUE"),
            ("voltage", "230", "230V"),
            ("voltage", "230V", "230V"),
            ("energyRating", "A++", "A++"),
        ],
    )
    def test_specification_labels(self, key, value, label):
        assert format_specification_label(key, value) == label


class TestPriceTrend:
    def test_without_history_uses_current_price(self):
        product = Product(sku="A", name="Alpha", base_price=Decimal("500"))

        trend = summarize(product, [])

        assert trend.lowest_price == trend.highest_price == Decimal("500")
        assert [p.reason for p in trend.points] == ["Current"]

    def test_summary_over_entries(self):
        product = Product(sku="A", name="Alpha", base_price=Decimal("450"))
        now = utcnow()
        entries = [
            PriceHistoryEntry(
                product_id=product.id, price=Decimal("450"),
                reason=PriceChangeReason.SALE, recorded_at=now,
            ),
            PriceHistoryEntry(
                product_id=product.id, price=Decimal("500"),
                reason=PriceChangeReason.INITIAL, recorded_at=now - timedelta(days=30),
            ),
            PriceHistoryEntry(
                product_id=product.id, price=Decimal("480"),
                reason=PriceChangeReason.PRICE_CHANGE, recorded_at=now - timedelta(days=10),
            ),
        ]

        trend = summarize(product, entries)

        assert trend.lowest_price == Decimal("450")
        assert trend.highest_price == Decimal("500")
        assert trend.average_price == Decimal("476.67")
        assert [p.reason for p in trend.points] == ["Initial", "PriceChange", "Sale"]
