"""Console logging configuration for the docimages CLI.

Call :func:`setup_logging` once at start-up. Library modules only create
module-level loggers and never configure handlers themselves.
"""

from __future__ import annotations

import logging
import logging.config
import os

__all__ = ["setup_logging"]

LOG_LEVEL_ENV = "DOCIMAGES_LOG_LEVEL"


def _resolve_level(verbose: bool) -> str:
    override = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if override and isinstance(logging.getLevelName(override), int):
        return override
    return "DEBUG" if verbose else "INFO"


def setup_logging(verbose: bool = False) -> None:
    """Configure console logging; `verbose` switches to DEBUG."""
    level = _resolve_level(verbose)
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": "%(message)s",
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "detailed" if level == "DEBUG" else "simple",
                "stream": "ext://sys.stderr",
                "level": level,
            },
        },
        "loggers": {
            "docimages": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
    }
    logging.config.dictConfig(config)
