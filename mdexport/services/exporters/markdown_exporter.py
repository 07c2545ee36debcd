from __future__ import annotations

from mdexport.domain.interfaces import IExporter
from mdexport.domain.models import ExportResult, FontConfig, OutputFormat


class MarkdownExporter(IExporter):
    format = OutputFormat.MARKDOWN
    extension = "md"
    mime = "text/markdown"
    label = "Export Markdown…"

    def export(self, markdown_text: str, fonts: FontConfig) -> ExportResult:
        return ExportResult(
            format=self.format,
            extension=self.extension,
            mime=self.mime,
            data=markdown_text.encode("utf-8"),
        )
