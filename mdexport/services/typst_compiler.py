from __future__ import annotations

import tempfile
from collections.abc import Sequence
from pathlib import Path

import typst

from mdexport.domain.errors import RenderError
from mdexport.utils.logging import get_logger

log = get_logger(__name__)

MAIN_FILE = "main.typ"


class TypstCompiler:
    """
    Compiles Typst source to PDF bytes with the `typst` package.

    The source is staged in a private temporary directory that also serves as
    the compilation root, so generated documents cannot reach other files.
    """

    def __init__(
        self, font_paths: Sequence[Path | str] = (), *, ignore_system_fonts: bool = False
    ) -> None:
        self.font_paths = [str(p) for p in font_paths]
        self.ignore_system_fonts = ignore_system_fonts

    def compile(self, source: str) -> bytes:
        kwargs: dict[str, object] = {}
        if self.font_paths:
            kwargs["font_paths"] = self.font_paths
        if self.ignore_system_fonts:
            kwargs["ignore_system_fonts"] = True

        with tempfile.TemporaryDirectory(prefix="mdexport-") as tmp:
            main = Path(tmp) / MAIN_FILE
            main.write_text(source, encoding="utf-8")
            try:
                pdf = typst.compile(str(main), root=tmp, **kwargs)
            except RuntimeError as e:
                # typst.TypstError subclasses RuntimeError and carries the diagnostics.
                raise RenderError("pdf", str(e)) from e

        if not pdf:
            raise RenderError("pdf", "compiler returned no output")
        log.debug("Compiled %d chars of Typst source into %d PDF bytes", len(source), len(pdf))
        return bytes(pdf)
