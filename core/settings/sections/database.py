from pydantic_settings import BaseSettings

from core.settings.base import section_config


class DatabaseSettings(BaseSettings):
    """
    Database configuration settings.
    Loaded from DB_* environment variables or the .env file.
    """

    database_url: str = "sqlite+aiosqlite:///./climasite.db"

    # Connection pool settings (server databases only)
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 3600  # 1 hour

    # Echo SQL (for debugging)
    echo_sql: bool = False

    model_config = section_config("DB_")

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")
