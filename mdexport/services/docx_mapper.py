from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

from mdexport.domain.errors import StructureTooDeep
from mdexport.domain.models import (
    Block,
    CodeBlock,
    FontConfig,
    Heading,
    InlineRun,
    ListBlock,
    ListItem,
    Paragraph,
    RunStyle,
    ThematicBreak,
)
from mdexport.utils.constants import BULLET, MAX_NESTING_DEPTH

# (before, after) in points for an 11pt body; scaled with the body size.
_HEADING_SPACING = {1: (18.0, 9.0), 2: (16.0, 8.0), 3: (15.0, 7.0)}
_HEADING_SPACING_DEFAULT = (12.0, 6.0)
_BODY_SPACING = (0.0, 8.0)
_BASELINE_SIZE = 11.0
_MIN_SPACING = 1.0


class ParagraphKind(str, enum.Enum):
    HEADING = "heading"
    BODY = "body"
    LIST_ITEM = "list_item"
    CODE = "code"
    RULE = "rule"


@dataclass(frozen=True)
class DocxRun:
    text: str
    font_family: str
    size: float
    bold: bool = False
    italic: bool = False
    line_break: bool = False


@dataclass(frozen=True)
class DocxParagraph:
    kind: ParagraphKind
    runs: tuple[DocxRun, ...] = ()
    level: int | None = None  # heading level
    indent_level: int = 0  # list nesting depth; 0 outside lists
    marker: str | None = None  # bullet or numeral of a list item's first paragraph
    space_before: float = 0.0
    space_after: float = 0.0

    @property
    def text(self) -> str:
        return "".join("\n" if r.line_break else r.text for r in self.runs)


class DocxMapper:
    """
    Maps document-model blocks onto word-processor paragraphs.

    Pure and deterministic: the same blocks and FontConfig always produce the
    same paragraph list. Serialization lives in DocxWriter.
    """

    def __init__(
        self, max_depth: int = MAX_NESTING_DEPTH, *, promote_strong_lines: bool = False
    ) -> None:
        self.max_depth = max_depth
        self.promote_strong_lines = promote_strong_lines

    def map(self, blocks: Sequence[Block], fonts: FontConfig) -> list[DocxParagraph]:
        out: list[DocxParagraph] = []
        for block in blocks:
            self._map_block(block, fonts, 0, out)
        return out

    # -------------------- blocks --------------------

    def _map_block(
        self, block: Block, fonts: FontConfig, depth: int, out: list[DocxParagraph]
    ) -> None:
        if isinstance(block, Heading):
            out.append(self._heading(block.level, block.runs, fonts))
        elif isinstance(block, Paragraph):
            promoted = self._promote(block, fonts) if self.promote_strong_lines else None
            if promoted:
                out.extend(promoted)
            else:
                out.append(self._body(block.runs, fonts, indent_level=depth))
        elif isinstance(block, ListBlock):
            self._map_list(block, fonts, depth + 1, out)
        elif isinstance(block, CodeBlock):
            out.append(self._code(block, fonts, indent_level=depth))
        elif isinstance(block, ThematicBreak):
            before, after = _scaled(_BODY_SPACING, fonts.default_size)
            out.append(
                DocxParagraph(kind=ParagraphKind.RULE, space_before=before, space_after=after)
            )
        else:
            raise TypeError(f"Unsupported block: {block!r}")

    def _map_list(
        self, block: ListBlock, fonts: FontConfig, depth: int, out: list[DocxParagraph]
    ) -> None:
        if depth > self.max_depth:
            raise StructureTooDeep(depth, self.max_depth)
        number = block.start
        for item in block.items:
            marker = f"{number}." if block.ordered else BULLET
            self._map_item(item, marker, fonts, depth, out)
            if block.ordered:
                number += 1

    def _map_item(
        self,
        item: ListItem,
        marker: str,
        fonts: FontConfig,
        depth: int,
        out: list[DocxParagraph],
    ) -> None:
        children = list(item.blocks)
        first_runs: tuple[InlineRun, ...] = ()
        if children and isinstance(children[0], Paragraph):
            first_runs = children.pop(0).runs

        before, after = _scaled(_BODY_SPACING, fonts.default_size)
        marker_run = DocxRun(
            text=f"{marker} ",
            font_family=fonts.default_family,
            size=fonts.default_size,
            bold=True,
        )
        out.append(
            DocxParagraph(
                kind=ParagraphKind.LIST_ITEM,
                runs=(marker_run, *self._runs(first_runs, fonts)),
                indent_level=depth,
                marker=marker,
                space_before=before,
                space_after=after,
            )
        )
        for child in children:
            self._map_block(child, fonts, depth, out)

    # -------------------- paragraph builders --------------------

    def _heading(
        self, level: int, runs: tuple[InlineRun, ...], fonts: FontConfig
    ) -> DocxParagraph:
        before, after = _scaled(
            _HEADING_SPACING.get(level, _HEADING_SPACING_DEFAULT), fonts.default_size
        )
        return DocxParagraph(
            kind=ParagraphKind.HEADING,
            runs=self._runs(
                runs,
                fonts,
                family=fonts.heading_family_for(level),
                size=fonts.heading_size_for(level),
                force_bold=True,
            ),
            level=level,
            space_before=before,
            space_after=after,
        )

    def _body(
        self, runs: tuple[InlineRun, ...], fonts: FontConfig, *, indent_level: int = 0
    ) -> DocxParagraph:
        before, after = _scaled(_BODY_SPACING, fonts.default_size)
        return DocxParagraph(
            kind=ParagraphKind.BODY,
            runs=self._runs(runs, fonts),
            indent_level=indent_level,
            space_before=before,
            space_after=after,
        )

    def _code(self, block: CodeBlock, fonts: FontConfig, *, indent_level: int = 0) -> DocxParagraph:
        # Literal text: no inline style inference inside code blocks.
        runs: list[DocxRun] = []
        for n, line in enumerate(block.text.split("\n")):
            if n:
                runs.append(_break(fonts.code_family, fonts.default_size))
            if line:
                runs.append(DocxRun(text=line, font_family=fonts.code_family, size=fonts.default_size))
        before, after = _scaled(_BODY_SPACING, fonts.default_size)
        return DocxParagraph(
            kind=ParagraphKind.CODE,
            runs=tuple(runs),
            indent_level=indent_level,
            space_before=before,
            space_after=after,
        )

    def _promote(self, block: Paragraph, fonts: FontConfig) -> list[DocxParagraph] | None:
        """A paragraph made of one bold line reads as a level-2 heading."""
        runs = block.runs
        if not runs or runs[0].style != RunStyle.BOLD or "\n" in runs[0].text:
            return None
        if len(runs) == 1:
            return [self._heading(2, runs[:1], fonts)]
        if len(runs) == 2 and runs[1].style == RunStyle.PLAIN and runs[1].text.startswith("\n"):
            heading = self._heading(2, runs[:1], fonts)
            rest = runs[1].text.lstrip("\n")
            if not rest:
                return [heading]
            return [heading, self._body((InlineRun(rest),), fonts)]
        return None

    def _runs(
        self,
        runs: tuple[InlineRun, ...],
        fonts: FontConfig,
        *,
        family: str | None = None,
        size: float | None = None,
        force_bold: bool = False,
    ) -> tuple[DocxRun, ...]:
        base_family = family or fonts.default_family
        run_size = size or fonts.default_size
        out: list[DocxRun] = []
        for run in runs:
            font = fonts.code_family if RunStyle.CODE in run.style else base_family
            bold = force_bold or RunStyle.BOLD in run.style
            italic = RunStyle.ITALIC in run.style
            for n, part in enumerate(run.text.split("\n")):
                if n:
                    out.append(_break(font, run_size))
                if part:
                    out.append(
                        DocxRun(text=part, font_family=font, size=run_size, bold=bold, italic=italic)
                    )
        return tuple(out)


def _break(font: str, size: float) -> DocxRun:
    return DocxRun(text="", font_family=font, size=size, line_break=True)


def _scaled(spacing: tuple[float, float], body_size: float) -> tuple[float, float]:
    ratio = body_size / _BASELINE_SIZE

    def scale(v: float) -> float:
        if v == 0:
            return 0.0
        return max(_MIN_SPACING, round(v * ratio, 1))

    return scale(spacing[0]), scale(spacing[1])
