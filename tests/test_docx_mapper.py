from __future__ import annotations

import pytest

from mdexport.domain.errors import StructureTooDeep
from mdexport.domain.models import (
    CodeBlock,
    FontConfig,
    HeadingFont,
    InlineRun,
    ListBlock,
    ListItem,
    Paragraph,
    RunStyle,
    ThematicBreak,
)
from mdexport.services.docx_mapper import DocxMapper, ParagraphKind


def _map(builder, mapper, fonts, md: str):
    return mapper.map(builder.build(md), fonts)


def test_title_and_bullets_scenario(builder, mapper, fonts):
    paras = _map(builder, mapper, fonts, "# Title\n\n- a\n- b\n")
    assert [p.kind for p in paras] == [
        ParagraphKind.HEADING,
        ParagraphKind.LIST_ITEM,
        ParagraphKind.LIST_ITEM,
    ]
    heading, first, second = paras
    assert heading.level == 1 and heading.text == "Title"
    assert [p.indent_level for p in (first, second)] == [1, 1]
    assert [p.marker for p in (first, second)] == ["•", "•"]
    assert first.text == "• a"
    assert second.text == "• b"


def test_heading_uses_font_config_and_is_bold(builder, mapper, fonts):
    h1, h2 = _map(builder, mapper, fonts, "# One\n\n## Two *it*\n")
    assert h1.runs[0].font_family == "Times New Roman"
    assert h1.runs[0].size == 17.5
    assert h1.runs[0].bold is True
    assert h2.runs[0].size == 16.0
    assert h2.runs[-1].italic is True and h2.runs[-1].bold is True


def test_heading_overrides_per_level(builder, mapper):
    fonts = FontConfig(
        default_family="Arial",
        default_size=12,
        code_family="Consolas",
        headings={1: HeadingFont(family="Georgia", size=24)},
    )
    heading, para = _map(builder, mapper, fonts, "# Big\n\nplain `code`\n")
    assert (heading.runs[0].font_family, heading.runs[0].size) == ("Georgia", 24)
    assert [(r.text, r.font_family, r.size) for r in para.runs] == [
        ("plain ", "Arial", 12),
        ("code", "Consolas", 12),
    ]


def test_paragraph_runs_carry_styles(builder, mapper, fonts):
    (para,) = _map(builder, mapper, fonts, "a **b** *c* `d`")
    styled = [(r.text, r.bold, r.italic, r.font_family) for r in para.runs]
    assert styled == [
        ("a ", False, False, "Times New Roman"),
        ("b", True, False, "Times New Roman"),
        (" ", False, False, "Times New Roman"),
        ("c", False, True, "Times New Roman"),
        (" ", False, False, "Times New Roman"),
        ("d", False, False, "Courier New"),
    ]


def test_line_breaks_become_break_runs(mapper, fonts):
    (para,) = mapper.map([Paragraph(runs=(InlineRun("one\ntwo"),))], fonts)
    assert [r.line_break for r in para.runs] == [False, True, False]
    assert para.text == "one\ntwo"


def test_numbering_restarts_per_top_level_list(builder, mapper, fonts):
    paras = _map(builder, mapper, fonts, "1. a\n2. b\n\n- x\n\n1. c\n2. d\n")
    assert [p.marker for p in paras] == ["1.", "2.", "•", "1.", "2."]


def test_nesting_increases_indent_without_resetting_parent(builder, mapper, fonts):
    paras = _map(builder, mapper, fonts, "1. a\n   - b\n2. c\n")
    assert [(p.marker, p.indent_level) for p in paras] == [("1.", 1), ("•", 2), ("2.", 1)]


def test_list_start_is_honoured(builder, mapper, fonts):
    paras = _map(builder, mapper, fonts, "5. e\n6. f\n")
    assert [p.marker for p in paras] == ["5.", "6."]


def test_continuation_paragraph_keeps_item_indent(builder, mapper, fonts):
    paras = _map(builder, mapper, fonts, "- a\n\n  more\n")
    assert [(p.kind, p.indent_level) for p in paras] == [
        (ParagraphKind.LIST_ITEM, 1),
        (ParagraphKind.BODY, 1),
    ]


def test_item_without_leading_paragraph_still_gets_marker(mapper, fonts):
    block = ListBlock(ordered=False, items=(ListItem(blocks=(CodeBlock(text="x"),)),))
    item, code = mapper.map([block], fonts)
    assert item.kind is ParagraphKind.LIST_ITEM and item.text == "• "
    assert code.kind is ParagraphKind.CODE and code.indent_level == 1


def test_code_block_is_literal_in_code_font(mapper, fonts):
    (para,) = mapper.map([CodeBlock(text="line1\n**x**", language="md")], fonts)
    assert para.kind is ParagraphKind.CODE
    assert para.text == "line1\n**x**"
    assert all(r.font_family == "Courier New" for r in para.runs)
    assert not any(r.bold or r.italic for r in para.runs)


def test_thematic_break_maps_to_rule(mapper, fonts):
    (para,) = mapper.map([ThematicBreak()], fonts)
    assert para.kind is ParagraphKind.RULE and para.runs == ()


def test_spacing_scales_with_body_size(mapper):
    (para,) = mapper.map(
        [Paragraph(runs=(InlineRun("x"),))], FontConfig(default_size=22)
    )
    assert (para.space_before, para.space_after) == (0.0, 16.0)


def test_depth_guard(mapper, fonts):
    block = ListBlock(ordered=False, items=(ListItem(blocks=(Paragraph(runs=(InlineRun("x"),)),)),))
    for _ in range(3):
        block = ListBlock(ordered=False, items=(ListItem(blocks=(block,)),))
    with pytest.raises(StructureTooDeep):
        DocxMapper(max_depth=3).map([block], fonts)
    assert len(DocxMapper(max_depth=4).map([block], fonts)) == 4


def test_mapping_is_deterministic(builder, mapper, fonts):
    blocks = builder.build("# T\n\n- a\n  1. b\n\n```\ncode\n```\n")
    assert mapper.map(blocks, fonts) == mapper.map(blocks, fonts)


def test_promote_strong_lines():
    mapper = DocxMapper(promote_strong_lines=True)
    fonts = FontConfig()
    para = Paragraph(runs=(InlineRun("Summary", RunStyle.BOLD), InlineRun("\nrest of it")))
    heading, body = mapper.map([para], fonts)
    assert heading.kind is ParagraphKind.HEADING and heading.level == 2
    assert heading.text == "Summary"
    assert body.kind is ParagraphKind.BODY and body.text == "rest of it"

    (only,) = mapper.map([Paragraph(runs=(InlineRun("Alone", RunStyle.BOLD),))], fonts)
    assert only.kind is ParagraphKind.HEADING


def test_strong_lines_not_promoted_by_default(mapper, fonts):
    (para,) = mapper.map([Paragraph(runs=(InlineRun("Alone", RunStyle.BOLD),))], fonts)
    assert para.kind is ParagraphKind.BODY
