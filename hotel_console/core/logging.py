"""
Console logging for the hotel console API.

The application's own loggers (``hotel_console.*``) follow LOG_LEVEL. Request
access lines and SQLAlchemy engine output stay at WARNING unless DEBUG is on.
"""
import logging
import sys
from hotel_console.config import settings

APP_LOGGER = "hotel_console"
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


def setup_logging(level: str | None = None) -> None:
    """
    Configure a stdout handler and per-logger levels.

    Args:
        level: Level name overriding settings.LOG_LEVEL
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger(APP_LOGGER).setLevel(log_level)

    noisy_level = logging.INFO if settings.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    logging.getLogger(__name__).info(
        "Logging configured: %s at %s", APP_LOGGER, logging.getLevelName(log_level)
    )
