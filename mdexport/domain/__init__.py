"""Domain layer: interfaces, immutable models and the error hierarchy."""

from .errors import (
    ExportError,
    ParseError,
    RenderContextError,
    RenderError,
    StructureTooDeep,
    TemplateError,
    UnknownFormat,
)
from .interfaces import IConfigService, IExporter, IExporterRegistry, IMarkdownRenderer
from .models import (
    DEFAULT_FONT_CONFIG,
    Block,
    CodeBlock,
    ExportResult,
    FontConfig,
    Heading,
    HeadingFont,
    InlineRun,
    ListBlock,
    ListItem,
    OutputFormat,
    Paragraph,
    RunStyle,
    ThematicBreak,
)

__all__ = [
    "DEFAULT_FONT_CONFIG",
    "Block",
    "CodeBlock",
    "ExportError",
    "ExportResult",
    "FontConfig",
    "Heading",
    "HeadingFont",
    "IConfigService",
    "IExporter",
    "IExporterRegistry",
    "IMarkdownRenderer",
    "InlineRun",
    "ListBlock",
    "ListItem",
    "OutputFormat",
    "Paragraph",
    "ParseError",
    "RenderContextError",
    "RenderError",
    "RunStyle",
    "StructureTooDeep",
    "TemplateError",
    "ThematicBreak",
    "UnknownFormat",
]
