"""
Logging infrastructure.

Every module logs through ``get_logger(__name__)``; the API process calls
``configure_logging`` once at startup with the level from ApiSettings.
"""
import logging
from typing import Dict

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Third-party loggers that flood INFO with per-statement or per-request lines
QUIET_LOGGERS: Dict[str, int] = {
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "asyncio": logging.WARNING,
}


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance.

    Before ``configure_logging`` has run (scripts, tests) the logger gets its
    own stream handler so messages are not lost.

    Args:
        name: Logger name (usually module name)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the API process.

    Args:
        level: Level name such as "INFO" or "DEBUG"
    """
    level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    if level != "DEBUG":
        for name, quiet_level in QUIET_LOGGERS.items():
            logging.getLogger(name).setLevel(quiet_level)
