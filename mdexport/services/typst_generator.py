from __future__ import annotations

import re
from collections.abc import Sequence

from mdexport.domain.errors import StructureTooDeep
from mdexport.domain.models import (
    HEADING_SCALE,
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
from mdexport.utils.constants import (
    CONTENT_PLACEHOLDER,
    DEFAULT_PAPER,
    MAX_NESTING_DEPTH,
    TYPST_FALLBACK_CODE_FONT,
    TYPST_FALLBACK_TEXT_FONT,
)

# Characters that start markup, code, math, labels or comments in Typst.
# Any of them preceded by a backslash renders as itself.
TYPST_SPECIAL = frozenset("\\#*_`$<>@[]()~=-+/.")

_LINEBREAK = " \\\n"
_BACKTICKS_RE = re.compile(r"`+")
_LANG_RE = re.compile(r"[^A-Za-z0-9_+\-]")


def escape_text(text: str) -> str:
    return "".join("\\" + ch if ch in TYPST_SPECIAL else ch for ch in text)


def typst_string(text: str) -> str:
    """Quote 'text' as a Typst string literal."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def _pt(size: float) -> str:
    return f"{size:g}pt"


def _indent(text: str, prefix: str) -> str:
    return "\n".join(prefix + line if line else line for line in text.split("\n"))


class TypstGenerator:
    """
    Translates document-model blocks into Typst markup.

    Literal text is always escaped; only the markup this class writes itself
    (headings, list markers, #strong/#emph calls, raw fences) is left bare.
    """

    def __init__(
        self,
        max_depth: int = MAX_NESTING_DEPTH,
        *,
        paper: str = DEFAULT_PAPER,
        template: str | None = None,
    ) -> None:
        if template is not None and CONTENT_PLACEHOLDER not in template:
            raise ValueError(f"Page template must contain {CONTENT_PLACEHOLDER}")
        self.max_depth = max_depth
        self.paper = paper
        self.template = template

    def generate(self, blocks: Sequence[Block], fonts: FontConfig) -> str:
        body = self.render_body(blocks)
        if self.template is not None:
            body = self.template.replace(CONTENT_PLACEHOLDER, body, 1)
        return self.preamble(fonts) + "\n" + body

    def preamble(self, fonts: FontConfig) -> str:
        text_fonts = _font_list(fonts.default_family, TYPST_FALLBACK_TEXT_FONT)
        code_fonts = _font_list(fonts.code_family, TYPST_FALLBACK_CODE_FONT)
        lines = [
            f"#set page(paper: {typst_string(self.paper)})",
            f"#set text(font: {text_fonts}, size: {_pt(fonts.default_size)})",
            f"#show raw: set text(font: {code_fonts}, size: {_pt(fonts.default_size)})",
        ]
        for level in sorted(HEADING_SCALE):
            heading_fonts = _font_list(fonts.heading_family_for(level), TYPST_FALLBACK_TEXT_FONT)
            lines.append(
                f"#show heading.where(level: {level}): set text("
                f"font: {heading_fonts}, size: {_pt(fonts.heading_size_for(level))})"
            )
        return "\n".join(lines) + "\n"

    def render_body(self, blocks: Sequence[Block]) -> str:
        parts = [self._block(b, 0) for b in blocks]
        return "\n\n".join(p for p in parts if p) + "\n"

    # -------------------- blocks --------------------

    def _block(self, block: Block, depth: int) -> str:
        if isinstance(block, Heading):
            runs = tuple(InlineRun(r.text.replace("\n", " "), r.style) for r in block.runs)
            return "=" * block.level + " " + self.inline(runs)
        if isinstance(block, Paragraph):
            return self.inline(block.runs)
        if isinstance(block, ListBlock):
            return self._list(block, depth + 1)
        if isinstance(block, CodeBlock):
            return self._code(block)
        if isinstance(block, ThematicBreak):
            return "#line(length: 100%)"
        raise TypeError(f"Unsupported block: {block!r}")

    def _list(self, block: ListBlock, depth: int) -> str:
        if depth > self.max_depth:
            raise StructureTooDeep(depth, self.max_depth)
        lines = []
        number = block.start
        for item in block.items:
            marker = f"{number}." if block.ordered else "-"
            lines.append(f"{marker} " + self._item(item, " " * (len(marker) + 1), depth))
            if block.ordered:
                number += 1
        return "\n".join(lines)

    def _item(self, item: ListItem, pad: str, depth: int) -> str:
        children = list(item.blocks)
        head = ""
        if children and isinstance(children[0], Paragraph):
            head = _indent(self.inline(children.pop(0).runs), pad).lstrip(" ")
        out = head
        for child in children:
            rendered = self._block(child, depth)
            if not rendered:
                continue
            # Nested lists stay tight; other blocks become new paragraphs of the item.
            sep = "\n" if isinstance(child, ListBlock) else "\n\n"
            out += sep + _indent(rendered, pad)
        return out

    def _code(self, block: CodeBlock) -> str:
        longest = max((len(m) for m in _BACKTICKS_RE.findall(block.text)), default=0)
        fence = "`" * max(3, longest + 1)
        lang = _LANG_RE.sub("", block.language or "")
        return f"{fence}{lang}\n{block.text}\n{fence}"

    # -------------------- inline --------------------

    def inline(self, runs: Sequence[InlineRun]) -> str:
        return "".join(self._run(r) for r in runs)

    def _run(self, run: InlineRun) -> str:
        if RunStyle.CODE in run.style:
            content = _LINEBREAK.join(_code_span(part) for part in run.text.split("\n") if part)
        else:
            content = _LINEBREAK.join(escape_text(part) for part in run.text.split("\n"))
        if RunStyle.ITALIC in run.style:
            content = f"#emph[{content}]"
        if RunStyle.BOLD in run.style:
            content = f"#strong[{content}]"
        return content


def _code_span(code: str) -> str:
    if "`" in code:
        return f"#raw({typst_string(code)})"
    return f"`{code}`"


def _font_list(family: str, fallback: str) -> str:
    families = [family] if family == fallback else [family, fallback]
    return "(" + ", ".join(typst_string(f) for f in families) + ")"
