"""
Logging Configuration

One console format for the application, uvicorn and third-party libraries.
"""

import logging.config

from cortexcache.config import get_settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _logger(level: str) -> dict:
    return {"handlers": ["console"], "level": level, "propagate": False}


def setup_logging():
    """
    Configure global logging

    DEBUG turns on debug output for the application loggers only; uvicorn
    stays at INFO and its access log is silenced in favour of the request
    logging middleware.
    """
    level = "DEBUG" if get_settings().DEBUG else "INFO"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"handlers": ["console"], "level": level},
            "loggers": {
                "uvicorn": _logger("INFO"),
                "uvicorn.error": _logger("INFO"),
                "uvicorn.access": _logger("WARNING"),
                # SQL echo is controlled by the engine, not by DEBUG
                "sqlalchemy.engine": _logger("WARNING"),
                "apscheduler": _logger("WARNING"),
                "cortexcache": _logger(level),
            },
        }
    )
