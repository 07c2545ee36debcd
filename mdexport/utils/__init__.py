"""Constants and logging helpers."""

from .constants import APP_NAME, CSS_EXPORT, HTML_TEMPLATE, MAX_NESTING_DEPTH
from .logging import get_logger, setup_logging

__all__ = ["APP_NAME", "CSS_EXPORT", "HTML_TEMPLATE", "MAX_NESTING_DEPTH", "get_logger", "setup_logging"]
