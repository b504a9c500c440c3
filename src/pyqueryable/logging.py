"""
Opt-in logging for pyqueryable.

The library only creates module loggers under ``pyqueryable`` and never
configures handlers on import. :func:`setup` attaches a rich console handler
to the package logger, which is enough to trace how lookups are resolved.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any

import pydantic
from rich.console import Console
from rich.logging import RichHandler


def rich_handler() -> RichHandler:
    """Console handler rendering package records and tracebacks with rich."""
    return RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_suppress=[pydantic],
        show_path=False,
        markup=False,
    )


LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "lookup": {"format": "%(name)s: %(message)s"},
    },
    "handlers": {
        "rich": {
            "()": rich_handler,
            "formatter": "lookup",
        },
    },
    "loggers": {
        "pyqueryable": {
            "handlers": ["rich"],
            "level": "INFO",
            "propagate": False,
        },
    },
}


def setup(level: int | str | None = None) -> None:
    """
    Route the ``pyqueryable`` loggers to a rich console handler.

    Args:
        level: Optional level for the ``pyqueryable`` logger, e.g. ``"DEBUG"``
            to trace how lookups are resolved
    """
    logging.config.dictConfig(LOGGING_CONFIG)
    if level is not None:
        logging.getLogger("pyqueryable").setLevel(level)


__all__ = ("LOGGING_CONFIG", "rich_handler", "setup")
