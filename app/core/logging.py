# backend-server/app/core/logging.py
import logging.config

from app.core.config import settings

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {"format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "app": {"level": settings.LOG_LEVEL},
        "uvicorn.error": {"level": "INFO"},
        "sqlalchemy.engine": {"level": "WARNING"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
}


def setup_logging() -> None:
    """Applies the logging configuration. Safe to call more than once."""
    logging.config.dictConfig(LOGGING_CONFIG)
