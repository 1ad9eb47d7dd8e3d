"""Logging setup for the command line tools."""

import logging
from logging import config as logging_config


def configure_logging(level: str = "INFO") -> None:
    """Send log records of the package and its HTTP client to stdout."""
    fmt = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"

    cfg = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": fmt, "datefmt": "%Y-%m-%d %H:%M:%S"},
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "httpx": {"level": logging.WARNING},
        },
        "root": {"handlers": ["default"], "level": level.upper()},
    }

    logging_config.dictConfig(cfg)
