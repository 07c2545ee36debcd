from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field

from mdexport.domain.errors import UnknownFormat
from mdexport.domain.interfaces import IExporter, IExporterRegistry
from mdexport.domain.models import Block, ExportResult, FontConfig, OutputFormat
from mdexport.services.document_builder import DocumentBuilder


@dataclass
class ExporterRegistryInst(IExporterRegistry):
    """
    Instance-based exporter registry (no globals, no side-effects).
    Keyed by the closed OutputFormat enumeration; one exporter per format.
    """

    _reg: dict[OutputFormat, IExporter] = field(default_factory=dict)

    def register(self, e: IExporter) -> None:
        self._reg[e.format] = e

    def get(self, fmt: OutputFormat) -> IExporter:
        try:
            return self._reg[fmt]
        except (KeyError, TypeError) as e:
            raise UnknownFormat(fmt) from e

    def all(self) -> list[IExporter]:
        return list(self._reg.values())

    def formats(self) -> list[OutputFormat]:
        return [f for f in OutputFormat if f in self._reg]


class BlockExporter(IExporter):
    """
    Shared path for structured formats: parse the Markdown into the document
    model once, then hand the blocks to the format-specific byte producer.
    """

    def __init__(self, builder: DocumentBuilder | None = None) -> None:
        self.builder = builder or DocumentBuilder()

    def export(self, markdown_text: str, fonts: FontConfig) -> ExportResult:
        blocks = self.builder.build(markdown_text)
        data = self.export_blocks(blocks, fonts)
        return ExportResult(format=self.format, extension=self.extension, mime=self.mime, data=data)

    @abstractmethod
    def export_blocks(self, blocks: Sequence[Block], fonts: FontConfig) -> bytes:
        raise NotImplementedError
