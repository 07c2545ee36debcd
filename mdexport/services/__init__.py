"""Concrete service implementations and export strategies."""

from .docx_mapper import DocxMapper
from .docx_writer import DocxWriter
from .document_builder import DocumentBuilder
from .markdown_renderer import MarkdownRenderer
from .template_service import TemplateService
from .typst_compiler import TypstCompiler
from .typst_generator import TypstGenerator

__all__ = [
    "DocumentBuilder",
    "DocxMapper",
    "DocxWriter",
    "MarkdownRenderer",
    "TemplateService",
    "TypstCompiler",
    "TypstGenerator",
]
