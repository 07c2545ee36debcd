from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from markdown_it import MarkdownIt
from markdown_it.token import Token

from mdexport.domain.errors import ParseError, StructureTooDeep
from mdexport.domain.models import (
    Block,
    CodeBlock,
    Heading,
    InlineRun,
    ListBlock,
    ListItem,
    Paragraph,
    RunStyle,
    ThematicBreak,
)
from mdexport.utils.constants import MAX_NESTING_DEPTH
from mdexport.utils.logging import get_logger

log = get_logger(__name__)

_STYLE_OPEN = {"strong_open": RunStyle.BOLD, "em_open": RunStyle.ITALIC}
_STYLE_CLOSE = {"strong_close", "em_close"}
_LIST_OPEN = {"bullet_list_open", "ordered_list_open"}
_LIST_CLOSE = {"bullet_list_close", "ordered_list_close"}
_CONTAINER_OPEN = _LIST_OPEN | {"blockquote_open", "table_open"}
_CELL_OPEN = {"th_open", "td_open"}


class RunBuffer:
    """Accumulates inline runs, merging neighbours that share a style."""

    def __init__(self) -> None:
        self._runs: list[InlineRun] = []

    def append(self, text: str, style: RunStyle = RunStyle.PLAIN) -> None:
        if not text:
            return
        if self._runs and self._runs[-1].style == style:
            last = self._runs[-1]
            self._runs[-1] = InlineRun(last.text + text, style)
        else:
            self._runs.append(InlineRun(text, style))

    def freeze(self) -> tuple[InlineRun, ...]:
        return tuple(self._runs)

    def __bool__(self) -> bool:
        return bool(self._runs)


@dataclass
class _ListFrame:
    ordered: bool
    start: int
    items: list[ListItem] = field(default_factory=list)


@dataclass
class _ItemFrame:
    blocks: list[Block] = field(default_factory=list)


class DocumentBuilder:
    """
    Builds the target-agnostic document model from Markdown.

    The markdown-it token stream is walked once. Lists and list items live on an
    explicit frame stack, inline emphasis on an explicit style stack, so nesting
    is bounded by `max_depth` rather than by the interpreter's recursion limit.
    Constructs outside the supported subset are flattened into a Paragraph.
    """

    def __init__(self, max_depth: int = MAX_NESTING_DEPTH) -> None:
        self.max_depth = max_depth
        # The parser must never stop nesting before our own guard fires,
        # otherwise it silently drops the rest of the document.
        self._md = MarkdownIt(
            "commonmark", {"html": False, "maxNesting": max_depth * 4 + 16}
        ).enable(["table", "strikethrough"])

    # ----------------------------- public API -----------------------------

    def build(self, markdown_text: str | bytes) -> tuple[Block, ...]:
        tokens = self._parse(markdown_text)
        root: list[Block] = []
        frames: list[_ListFrame | _ItemFrame] = []
        depth = 0
        i = 0

        def emit(block: Block) -> None:
            if frames and isinstance(frames[-1], _ItemFrame):
                frames[-1].blocks.append(block)
            else:
                root.append(block)

        while i < len(tokens):
            tok = tokens[i]
            t = tok.type

            if t == "heading_open":
                emit(Heading(level=int(tok.tag[1:]), runs=self._inline_runs(tokens[i + 1])))
                i += 3
                continue

            if t == "paragraph_open":
                runs = self._inline_runs(tokens[i + 1])
                if runs:
                    emit(Paragraph(runs=runs))
                i += 3
                continue

            if t in _LIST_OPEN:
                depth += 1
                self._check_depth(depth)
                start = tok.attrGet("start")
                frames.append(
                    _ListFrame(ordered=t == "ordered_list_open", start=int(start) if start else 1)
                )
            elif t in _LIST_CLOSE:
                depth -= 1
                frame = frames.pop()
                assert isinstance(frame, _ListFrame)
                emit(ListBlock(ordered=frame.ordered, items=tuple(frame.items), start=frame.start))
            elif t == "list_item_open":
                frames.append(_ItemFrame())
            elif t == "list_item_close":
                item = frames.pop()
                assert isinstance(item, _ItemFrame)
                parent = frames[-1]
                assert isinstance(parent, _ListFrame)
                parent.items.append(ListItem(blocks=tuple(item.blocks)))
            elif t == "fence":
                info = tok.info.strip().split()
                emit(CodeBlock(text=_strip_final_newline(tok.content), language=info[0] if info else None))
            elif t == "code_block":
                emit(CodeBlock(text=_strip_final_newline(tok.content)))
            elif t == "hr":
                emit(ThematicBreak())
            elif tok.nesting == 1:
                # Unmodelled container (block quote, table, ...): one paragraph.
                log.debug("Flattening unsupported construct %s", t)
                buf = RunBuffer()
                i = self._flatten(tokens, i, depth, buf)
                if buf:
                    emit(Paragraph(runs=buf.freeze()))
                continue
            elif tok.content:
                emit(Paragraph(runs=(InlineRun(tok.content.strip("\n")),)))
            i += 1

        return tuple(root)

    # ----------------------------- helpers -----------------------------

    def _parse(self, markdown_text: str | bytes) -> Sequence[Token]:
        if isinstance(markdown_text, bytes):
            try:
                markdown_text = markdown_text.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(f"Input is not valid UTF-8: {e}") from e
        if not isinstance(markdown_text, str):
            raise ParseError(f"Expected Markdown text, got {type(markdown_text).__name__}")
        try:
            return self._md.parse(markdown_text)
        except RecursionError as e:
            raise StructureTooDeep(self.max_depth + 1, self.max_depth) from e
        except Exception as e:
            raise ParseError(str(e)) from e

    def _check_depth(self, depth: int) -> None:
        if depth > self.max_depth:
            raise StructureTooDeep(depth, self.max_depth)

    def _inline_runs(self, token: Token) -> tuple[InlineRun, ...]:
        buf = RunBuffer()
        self._collect_inline(token, buf)
        return buf.freeze()

    def _collect_inline(self, token: Token, buf: RunBuffer) -> None:
        stack: list[RunStyle] = []
        style = RunStyle.PLAIN
        for child in token.children or []:
            t = child.type
            if t in _STYLE_OPEN:
                stack.append(_STYLE_OPEN[t])
            elif t in _STYLE_CLOSE:
                if stack:
                    stack.pop()
            elif t in ("text", "text_special", "html_inline"):
                buf.append(child.content, style)
            elif t == "code_inline":
                buf.append(child.content, style | RunStyle.CODE)
            elif t in ("softbreak", "hardbreak"):
                buf.append("\n", style)
            elif t == "image":
                buf.append(child.content, style)
            # link_open/close, s_open/close: markers only, the text survives
            style = RunStyle.PLAIN
            for flag in stack:
                style |= flag

    def _flatten(self, tokens: Sequence[Token], i: int, depth: int, buf: RunBuffer) -> int:
        """Collapse the container opened at tokens[i]; returns the index past its close."""
        open_depth = 0
        container_depth = depth
        sep: str | None = None
        first_cell = True
        j = i
        while j < len(tokens):
            tok = tokens[j]
            t = tok.type
            if tok.nesting == 1:
                open_depth += 1
                if t in _CONTAINER_OPEN:
                    container_depth += 1
                    self._check_depth(container_depth)
                if t == "tr_open":
                    sep = "\n" if buf else None
                    first_cell = True
                elif t in _CELL_OPEN:
                    if not first_cell:
                        sep = " | "
                    first_cell = False
                elif buf:
                    sep = "\n"
            elif tok.nesting == -1:
                open_depth -= 1
                if t.replace("_close", "_open") in _CONTAINER_OPEN:
                    container_depth -= 1
                if open_depth == 0:
                    return j + 1
            else:
                inner = RunBuffer()
                if t == "inline":
                    self._collect_inline(tok, inner)
                elif t in ("fence", "code_block"):
                    inner.append(_strip_final_newline(tok.content), RunStyle.CODE)
                elif tok.content:
                    inner.append(tok.content.strip("\n"))
                runs = inner.freeze()
                if runs:
                    if sep and buf:
                        buf.append(sep)
                    sep = None
                    for run in runs:
                        buf.append(run.text, run.style)
            j += 1
        return j


def _strip_final_newline(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text
