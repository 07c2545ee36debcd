"""Convert a rendered Markdown report into Markdown, HTML, PDF or DOCX."""

from .domain import (
    DEFAULT_FONT_CONFIG,
    ExportError,
    ExportResult,
    FontConfig,
    HeadingFont,
    OutputFormat,
    ParseError,
    RenderContextError,
    RenderError,
    StructureTooDeep,
    TemplateError,
    UnknownFormat,
)
from .engine import ExportEngine, convert

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_FONT_CONFIG",
    "ExportEngine",
    "ExportError",
    "ExportResult",
    "FontConfig",
    "HeadingFont",
    "OutputFormat",
    "ParseError",
    "RenderContextError",
    "RenderError",
    "StructureTooDeep",
    "TemplateError",
    "UnknownFormat",
    "convert",
]
