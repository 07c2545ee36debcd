from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Union

from mdexport.domain.errors import UnknownFormat

# Heading size relative to body text, per level (1..6).
HEADING_SCALE = {1: 1.60, 2: 1.45, 3: 1.30, 4: 1.15, 5: 1.05, 6: 1.00}
MIN_FONT_SIZE = 1.0
MAX_FONT_SIZE = 200.0


class OutputFormat(enum.Enum):
    MARKDOWN = "md"
    HTML = "html"
    PDF = "pdf"
    DOCX = "docx"

    @classmethod
    def parse(cls, text: str) -> OutputFormat:
        """Map user input (CLI flags, config values) onto a format member."""
        key = (text or "").strip().lower()
        if key == "markdown":
            key = "md"
        for member in cls:
            if member.value == key:
                return member
        raise UnknownFormat(text)

    def __str__(self) -> str:
        return self.value


class RunStyle(enum.Flag):
    PLAIN = 0
    BOLD = enum.auto()
    ITALIC = enum.auto()
    CODE = enum.auto()


@dataclass(frozen=True)
class InlineRun:
    text: str
    style: RunStyle = RunStyle.PLAIN


def runs_text(runs: tuple[InlineRun, ...]) -> str:
    return "".join(r.text for r in runs)


@dataclass(frozen=True)
class Heading:
    level: int
    runs: tuple[InlineRun, ...] = ()

    @property
    def text(self) -> str:
        return runs_text(self.runs)


@dataclass(frozen=True)
class Paragraph:
    runs: tuple[InlineRun, ...] = ()

    @property
    def text(self) -> str:
        return runs_text(self.runs)


@dataclass(frozen=True)
class CodeBlock:
    text: str
    language: str | None = None


@dataclass(frozen=True)
class ThematicBreak:
    pass


@dataclass(frozen=True)
class ListItem:
    blocks: tuple[Block, ...] = ()


@dataclass(frozen=True)
class ListBlock:
    ordered: bool
    items: tuple[ListItem, ...] = ()
    start: int = 1


Block = Union[Heading, Paragraph, ListBlock, CodeBlock, ThematicBreak]


@dataclass(frozen=True)
class HeadingFont:
    """Per-level override. `None` fields fall back to the FontConfig defaults."""

    family: str | None = None
    size: float | None = None


@dataclass(frozen=True)
class FontConfig:
    """
    Fonts for one conversion. Sizes are in points.

    Immutable: build a new value with `with_overrides` rather than mutating.
    """

    default_family: str = "Times New Roman"
    default_size: float = 11.0
    code_family: str = "Courier New"
    heading_family: str | None = None
    headings: Mapping[int, HeadingFont] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not MIN_FONT_SIZE <= self.default_size <= MAX_FONT_SIZE:
            raise ValueError(f"default_size out of range: {self.default_size}")
        for level in self.headings:
            if level not in HEADING_SCALE:
                raise ValueError(f"heading level out of range: {level}")
        object.__setattr__(self, "headings", MappingProxyType(dict(self.headings)))

    def heading_family_for(self, level: int) -> str:
        override = self.headings.get(level)
        if override is not None and override.family:
            return override.family
        return self.heading_family or self.default_family

    def heading_size_for(self, level: int) -> float:
        override = self.headings.get(level)
        if override is not None and override.size:
            return _clamp(override.size)
        scale = HEADING_SCALE.get(level, 1.0)
        # Word stores sizes in half-points.
        return _clamp(round(self.default_size * scale * 2) / 2)

    def with_overrides(self, **changes) -> FontConfig:
        return replace(self, **changes)


def _clamp(size: float) -> float:
    return max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, size))


DEFAULT_FONT_CONFIG = FontConfig()


@dataclass(frozen=True)
class ExportResult:
    format: OutputFormat
    extension: str
    mime: str
    data: bytes

    def filename(self, stem: str) -> str:
        return f"{stem}.{self.extension}"
