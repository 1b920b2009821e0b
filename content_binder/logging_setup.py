"""Logging configuration for the binding service.

One stdout handler on the root logger; `content_binder.*` loggers follow
``LOG_LEVEL`` (default INFO). Uvicorn loggers stay visible. Calling
`configure_logging` more than once is harmless.
"""
from __future__ import annotations
import logging
import os
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
                "level": "DEBUG",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": "INFO", "handlers": ["console"]},
        "loggers": {
            "content_binder": {"level": level, "propagate": True},
            "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.error": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": "INFO", "handlers": ["console"], "propagate": False},
        },
    }


def configure_logging() -> None:
    """Configure logging once per process.

    Returns early when the root logger already has handlers (reloaders, test
    runners that install their own capture handlers).
    """
    root = logging.getLogger()
    if root.handlers:
        return
    level = str(os.environ.get("LOG_LEVEL", "INFO")).strip().upper() or "INFO"
    if level not in logging.getLevelNamesMapping():
        level = "INFO"
    dictConfig(_dict_config(level))
