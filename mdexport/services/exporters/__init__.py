"""Exporter strategies and registry."""

from .base import BlockExporter, ExporterRegistryInst
from .docx_exporter import DocxExporter
from .html_exporter import HtmlExporter
from .markdown_exporter import MarkdownExporter
from .pdf_exporter import PdfExporter

__all__ = [
    "BlockExporter",
    "DocxExporter",
    "ExporterRegistryInst",
    "HtmlExporter",
    "MarkdownExporter",
    "PdfExporter",
]
