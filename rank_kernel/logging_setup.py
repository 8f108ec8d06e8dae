"""
Central logging configuration.

Applies a root stdout handler so every module logger emits without per-module
setup, and keeps uvicorn loggers on the same handler.
"""

import logging
from logging.config import dictConfig


def _dict_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": "INFO", "handlers": ["console"], "propagate": False},
        },
    }


def configure_logging(level: str = "INFO") -> bool:
    """
    Configure application-wide logging once.

    Returns False without touching anything if the root logger already has
    handlers (reloaders, pytest's capture handler).
    """
    root = logging.getLogger()
    if root.handlers:
        return False
    dictConfig(_dict_config(level))
    return True
