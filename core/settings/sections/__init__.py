from core.settings.sections.api import ApiSettings
from core.settings.sections.database import DatabaseSettings
from core.settings.sections.store import StoreSettings

__all__ = ["ApiSettings", "DatabaseSettings", "StoreSettings"]
