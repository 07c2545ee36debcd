from __future__ import annotations

from collections.abc import Sequence
from io import BytesIO

from docx import Document
from docx.enum.text import WD_BREAK
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, Twips

from mdexport.domain.errors import RenderError
from mdexport.services.docx_mapper import DocxParagraph, DocxRun, ParagraphKind
from mdexport.utils.constants import LIST_HANGING, LIST_INDENT_UNIT
from mdexport.utils.logging import get_logger

log = get_logger(__name__)


class DocxWriter:
    """Serializes mapped paragraphs into a .docx container via python-docx."""

    def serialize(self, paragraphs: Sequence[DocxParagraph]) -> bytes:
        try:
            document = Document()
            for spec in paragraphs:
                self._add_paragraph(document, spec)
            buffer = BytesIO()
            document.save(buffer)
        except Exception as e:
            raise RenderError("docx", str(e)) from e
        data = buffer.getvalue()
        log.debug("Serialized %d paragraphs into %d DOCX bytes", len(paragraphs), len(data))
        return data

    def _add_paragraph(self, document, spec: DocxParagraph) -> None:
        p = document.add_paragraph()
        # pBdr must precede spacing/ind inside pPr; python-docx inserts those in order.
        if spec.kind is ParagraphKind.RULE:
            _add_bottom_border(p)

        fmt = p.paragraph_format
        fmt.space_before = Pt(spec.space_before)
        fmt.space_after = Pt(spec.space_after)
        if spec.kind is ParagraphKind.LIST_ITEM:
            fmt.left_indent = Twips(spec.indent_level * LIST_INDENT_UNIT + LIST_HANGING)
            fmt.first_line_indent = Twips(-LIST_HANGING)
        elif spec.indent_level:
            # Continuation blocks align with the text of their list item.
            fmt.left_indent = Twips(spec.indent_level * LIST_INDENT_UNIT + LIST_HANGING)
        elif spec.kind is ParagraphKind.CODE:
            fmt.left_indent = Twips(0)

        for run_spec in spec.runs:
            _add_run(p, run_spec)


def _add_run(p, spec: DocxRun) -> None:
    run = p.add_run()
    if spec.line_break:
        run.add_break(WD_BREAK.LINE)
        return
    run.text = spec.text
    if spec.bold:
        run.bold = True
    if spec.italic:
        run.italic = True
    run.font.name = spec.font_family
    run.font.size = Pt(spec.size)
    # font.name only fills the ascii/hAnsi slots
    run._element.rPr.rFonts.set(qn("w:eastAsia"), spec.font_family)


def _add_bottom_border(p) -> None:
    p_pr = p._p.get_or_add_pPr()
    borders = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), "6")
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), "auto")
    borders.append(bottom)
    p_pr.append(borders)
