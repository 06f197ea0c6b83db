# core/settings/base.py
"""Shared pydantic-settings configuration for every settings section."""

ENV_FILE = ".env"


def section_config(prefix: str) -> dict:
    """model_config for a section reading ``{prefix}*`` variables."""
    return {
        "env_file": ENV_FILE,
        "env_file_encoding": "utf-8",
        "env_prefix": prefix,
        "extra": "ignore",
    }
