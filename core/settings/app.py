# core/settings/app.py
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

# Sections
from core.settings.base import ENV_FILE
from core.settings.sections.api import ApiSettings
from core.settings.sections.database import DatabaseSettings
from core.settings.sections.store import StoreSettings


class AppSettings:
    """
    Central application settings aggregator.
    Settings are loaded lazily inside __init__
    to prevent eager evaluation at import time.
    """

    def __init__(
        self,
        database: Optional[DatabaseSettings] = None,
        store: Optional[StoreSettings] = None,
        api: Optional[ApiSettings] = None,
    ):
        # Load each settings class ONLY when AppSettings is instantiated
        self.database = database or DatabaseSettings()
        self.store = store or StoreSettings()
        self.api = api or ApiSettings()


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    load_dotenv(ENV_FILE)
    return AppSettings()
