from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from mdexport.domain.errors import UnknownFormat
from mdexport.domain.interfaces import IExporter
from mdexport.domain.models import DEFAULT_FONT_CONFIG, ExportResult, FontConfig, OutputFormat
from mdexport.services.config.export_config import ExportSettings
from mdexport.services.docx_mapper import DocxMapper
from mdexport.services.document_builder import DocumentBuilder
from mdexport.services.exporters import (
    DocxExporter,
    ExporterRegistryInst,
    HtmlExporter,
    MarkdownExporter,
    PdfExporter,
)
from mdexport.services.template_service import TemplateService
from mdexport.services.typst_compiler import TypstCompiler
from mdexport.services.typst_generator import TypstGenerator
from mdexport.utils.logging import get_logger

log = get_logger(__name__)


class ExportEngine:
    """
    Front door of the library:
      - owns the template collaborator (register/render)
      - dispatches a Markdown string to the exporter registered for a format

    Conversions share no mutable state: each call builds its own document
    model, so one engine may serve concurrent convert() calls once template
    registration is finished.
    """

    def __init__(
        self,
        exporters: Iterable[IExporter] | None = None,
        *,
        templates: TemplateService | None = None,
        fonts: FontConfig | None = None,
    ) -> None:
        self.templates = templates or TemplateService()
        self.fonts = fonts or DEFAULT_FONT_CONFIG
        self.registry = ExporterRegistryInst()
        for exporter in exporters if exporters is not None else default_exporters():
            self.registry.register(exporter)

    @staticmethod
    def from_settings(settings: ExportSettings) -> ExportEngine:
        builder = DocumentBuilder()
        exporters = [
            MarkdownExporter(),
            HtmlExporter(),
            DocxExporter(
                mapper=DocxMapper(promote_strong_lines=settings.promote_strong_lines),
                builder=builder,
            ),
            PdfExporter(
                generator=TypstGenerator(paper=settings.paper, template=settings.page_template),
                compiler=TypstCompiler(
                    settings.font_paths, ignore_system_fonts=settings.ignore_system_fonts
                ),
                builder=builder,
            ),
        ]
        return ExportEngine(exporters, fonts=settings.fonts)

    # ---------- templates ----------

    def register_template(self, name: str, template_source: str) -> None:
        self.templates.register(name, template_source)

    def render(self, name: str, context: Mapping[str, Any] | None = None) -> str:
        return self.templates.render(name, context)

    # ---------- conversion ----------

    def supported_formats(self) -> list[OutputFormat]:
        return self.registry.formats()

    def convert(
        self,
        markdown_text: str,
        output_format: OutputFormat,
        fonts: FontConfig | None = None,
    ) -> ExportResult:
        if not isinstance(output_format, OutputFormat):
            raise UnknownFormat(output_format)
        exporter = self.registry.get(output_format)
        log.debug("Exporting %d chars of Markdown as %s", len(markdown_text), output_format.value)
        result = exporter.export(markdown_text, fonts or self.fonts)
        log.info("Exported %s (%d bytes)", output_format.value, len(result.data))
        return result

    def render_and_convert(
        self,
        name: str,
        context: Mapping[str, Any] | None,
        output_format: OutputFormat,
        fonts: FontConfig | None = None,
    ) -> ExportResult:
        # Resolve the exporter first so an unknown format fails before rendering.
        if not isinstance(output_format, OutputFormat):
            raise UnknownFormat(output_format)
        self.registry.get(output_format)
        return self.convert(self.render(name, context), output_format, fonts)


def default_exporters() -> list[IExporter]:
    builder = DocumentBuilder()
    return [
        MarkdownExporter(),
        HtmlExporter(),
        DocxExporter(builder=builder),
        PdfExporter(builder=builder),
    ]


def convert(
    markdown_text: str, output_format: OutputFormat, fonts: FontConfig | None = None
) -> ExportResult:
    """Convert rendered Markdown into one artifact with the default exporters."""
    return ExportEngine().convert(markdown_text, output_format, fonts)
