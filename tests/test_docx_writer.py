from __future__ import annotations

from io import BytesIO

import pytest
from docx import Document
from docx.oxml.ns import qn

from mdexport.domain.errors import RenderError
from mdexport.domain.models import InlineRun, Paragraph
from mdexport.services.docx_writer import DocxWriter


def _roundtrip(data: bytes):
    return Document(BytesIO(data))


def test_serialize_produces_readable_docx(builder, mapper, fonts):
    md = "# Title\n\nBody **bold**\n\n- a\n- b\n\n```\nx = 1\ny = 2\n```\n"
    data = DocxWriter().serialize(mapper.map(builder.build(md), fonts))
    assert data[:2] == b"PK"

    doc = _roundtrip(data)
    texts = [p.text for p in doc.paragraphs]
    assert texts == ["Title", "Body bold", "• a", "• b", "x = 1\ny = 2"]

    title_run = doc.paragraphs[0].runs[0]
    assert title_run.bold is True
    assert title_run.font.name == "Times New Roman"
    assert title_run.font.size.pt == 17.5
    assert title_run._element.rPr.rFonts.get(qn("w:eastAsia")) == "Times New Roman"

    bold_run = doc.paragraphs[1].runs[-1]
    assert bold_run.text == "bold" and bold_run.bold is True

    code_run = doc.paragraphs[4].runs[0]
    assert code_run.font.name == "Courier New"


def test_list_items_get_hanging_indent(builder, mapper, fonts):
    data = DocxWriter().serialize(mapper.map(builder.build("- a\n  - b\n"), fonts))
    outer, inner = _roundtrip(data).paragraphs
    assert outer.paragraph_format.left_indent.twips == 720
    assert outer.paragraph_format.first_line_indent.twips == -360
    assert inner.paragraph_format.left_indent.twips == 1080


def test_rule_gets_bottom_border(builder, mapper, fonts):
    data = DocxWriter().serialize(mapper.map(builder.build("a\n\n---\n\nb"), fonts))
    rule = _roundtrip(data).paragraphs[1]
    borders = rule._p.pPr.find(qn("w:pBdr"))
    assert borders is not None
    assert borders.find(qn("w:bottom")).get(qn("w:val")) == "single"


def test_writer_failure_is_render_error(mapper, fonts):
    # NUL is not XML-compatible; python-docx refuses it.
    paras = mapper.map([Paragraph(runs=(InlineRun("bad\x00text"),))], fonts)
    with pytest.raises(RenderError) as exc:
        DocxWriter().serialize(paras)
    assert exc.value.target == "docx"
    assert exc.value.diagnostic
