from __future__ import annotations

from collections.abc import Sequence

from mdexport.domain.models import Block, FontConfig, OutputFormat
from mdexport.services.document_builder import DocumentBuilder
from mdexport.services.exporters.base import BlockExporter
from mdexport.services.typst_compiler import TypstCompiler
from mdexport.services.typst_generator import TypstGenerator


class PdfExporter(BlockExporter):
    """Document model -> Typst source -> PDF bytes."""

    format = OutputFormat.PDF
    extension = "pdf"
    mime = "application/pdf"
    label = "Export PDF…"

    def __init__(
        self,
        generator: TypstGenerator | None = None,
        compiler: TypstCompiler | None = None,
        builder: DocumentBuilder | None = None,
    ) -> None:
        super().__init__(builder)
        self.generator = generator or TypstGenerator()
        self.compiler = compiler or TypstCompiler()

    def export_blocks(self, blocks: Sequence[Block], fonts: FontConfig) -> bytes:
        return self.compiler.compile(self.generator.generate(blocks, fonts))
