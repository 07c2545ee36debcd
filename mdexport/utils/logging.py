from __future__ import annotations

import logging

from mdexport.utils.constants import APP_NAME

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: str = "WARNING") -> None:
    """Configure root handlers. Only entry points (the CLI) call this; the library never does."""
    logging.basicConfig(
        level=getattr(logging, (level or "WARNING").upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or APP_NAME)
