from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Protocol

from mdexport.domain.models import ExportResult, FontConfig, OutputFormat


class IMarkdownRenderer(Protocol):
    """Convert Markdown text to a full HTML document string (including CSS)."""

    def to_html(self, markdown_text: str) -> str: ...


class IConfigService(Protocol):
    """Read-only access to sectioned key/value configuration."""

    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_float(self, section: str, key: str, default: float | None = None) -> float | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...


class IExporter(ABC):
    """Export strategy interface. One implementation per OutputFormat."""

    format: OutputFormat
    extension: str  # e.g. "pdf"
    mime: str
    label: str  # e.g. "Export PDF…"

    @abstractmethod
    def export(self, markdown_text: str, fonts: FontConfig) -> ExportResult:
        """Produce the complete artifact for 'markdown_text' or raise an ExportError."""
        raise NotImplementedError


class IExporterRegistry(Protocol):
    def register(self, e: IExporter) -> None: ...
    def get(self, fmt: OutputFormat) -> IExporter: ...
    def all(self) -> list[IExporter]: ...
