from __future__ import annotations

from collections.abc import Sequence

from mdexport.domain.models import Block, FontConfig, OutputFormat
from mdexport.services.docx_mapper import DocxMapper
from mdexport.services.docx_writer import DocxWriter
from mdexport.services.document_builder import DocumentBuilder
from mdexport.services.exporters.base import BlockExporter


class DocxExporter(BlockExporter):
    format = OutputFormat.DOCX
    extension = "docx"
    mime = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    label = "Export Word document…"

    def __init__(
        self,
        mapper: DocxMapper | None = None,
        writer: DocxWriter | None = None,
        builder: DocumentBuilder | None = None,
    ) -> None:
        super().__init__(builder)
        self.mapper = mapper or DocxMapper()
        self.writer = writer or DocxWriter()

    def export_blocks(self, blocks: Sequence[Block], fonts: FontConfig) -> bytes:
        return self.writer.serialize(self.mapper.map(blocks, fonts))
