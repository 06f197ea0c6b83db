from typing import List

from pydantic_settings import BaseSettings

from core.settings.base import section_config


class ApiSettings(BaseSettings):
    """
    HTTP API settings.
    Loaded from API_* environment variables or the .env file.
    """

    title: str = "ClimaSite Storefront API"
    version: str = "1.0.0"
    cors_origins: List[str] = ["http://localhost:4200"]
    log_level: str = "INFO"

    model_config = section_config("API_")
