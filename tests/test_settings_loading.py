"""
Test settings loading from the environment.

Each section reads its own prefixed variables; unset values fall back to
the documented defaults.
"""
from decimal import Decimal

from core.settings import ApiSettings, AppSettings, DatabaseSettings, StoreSettings


def test_defaults(monkeypatch):
    for name in ("STORE_TAX_RATE", "STORE_CURRENCY", "DB_DATABASE_URL", "API_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = AppSettings()

    assert settings.store.currency == "EUR"
    assert settings.store.tax_rate == Decimal("0.20")
    assert settings.store.cart_expiry_days == 7
    assert settings.store.default_variant_stock == 50
    assert settings.store.price_history_days == 90
    assert settings.database.is_sqlite
    assert settings.api.log_level == "INFO"


def test_prefixed_environment_overrides(monkeypatch):
    monkeypatch.setenv("STORE_TAX_RATE", "0.07")
    monkeypatch.setenv("STORE_SHIPPING_EXPRESS", "24.50")
    monkeypatch.setenv("DB_DATABASE_URL", "postgresql+asyncpg://shop:secret@db/climasite")
    monkeypatch.setenv("API_CORS_ORIGINS", '["https://shop.example.com"]')

    store = StoreSettings()
    database = DatabaseSettings()
    api = ApiSettings()

    assert store.tax_rate == Decimal("0.07")
    assert store.shipping_rates.for_method("Express") == Decimal("24.50")
    assert store.order_pricing().tax(Decimal("100")).amount == Decimal("7.00")
    assert not database.is_sqlite
    assert api.cors_origins == ["https://shop.example.com"]


def test_unprefixed_variables_are_ignored(monkeypatch):
    monkeypatch.setenv("TAX_RATE", "0.5")

    assert StoreSettings().tax_rate == Decimal("0.20")


def test_explicit_sections_win():
    database = DatabaseSettings(database_url="sqlite+aiosqlite:///:memory:")

    settings = AppSettings(database=database)

    assert settings.database is database
    assert isinstance(settings.store, StoreSettings)
