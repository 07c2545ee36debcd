from __future__ import annotations

from mdexport.domain.interfaces import IExporter, IMarkdownRenderer
from mdexport.domain.models import ExportResult, FontConfig, OutputFormat
from mdexport.services.markdown_renderer import MarkdownRenderer


class HtmlExporter(IExporter):
    format = OutputFormat.HTML
    extension = "html"
    mime = "text/html"
    label = "Export HTML…"

    def __init__(self, renderer: IMarkdownRenderer | None = None) -> None:
        self.renderer = renderer or MarkdownRenderer()

    def export(self, markdown_text: str, fonts: FontConfig) -> ExportResult:
        html = self.renderer.to_html(markdown_text)
        return ExportResult(
            format=self.format,
            extension=self.extension,
            mime=self.mime,
            data=html.encode("utf-8"),
        )
