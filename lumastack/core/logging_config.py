"""Logging setup shared by the HTTP server and the CLI."""

from __future__ import annotations

import logging.config

from lumastack.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    level = "DEBUG" if settings.debug else settings.logging.level
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "lumastack": {"handlers": ["console"], "level": level, "propagate": False},
                "sqlalchemy.engine": {"level": "INFO" if settings.database.echo else "WARNING"},
            },
        }
    )


__all__ = ["configure_logging", "LOG_FORMAT"]
