"""Logging bootstrap for processes embedding the coin shop core."""

from __future__ import annotations

from logging.config import dictConfig

from coinshop.core.config import Settings


def configure_logging(settings: Settings) -> None:
    level = "DEBUG" if settings.debug else settings.logging.level.upper()
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": settings.logging.format},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "coinshop": {"level": level, "handlers": ["console"], "propagate": False},
                "sqlalchemy.engine": {
                    "level": "INFO" if settings.database.echo else "WARNING",
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
        }
    )
