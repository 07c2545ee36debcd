from __future__ import annotations

from typing import Any


class ExportError(Exception):
    """Base for every failure surfaced by a conversion. Carries a stable code."""

    code = "EXPORT_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


class ParseError(ExportError):
    """The Markdown input could not be tokenized."""

    code = "PARSE_ERROR"


class StructureTooDeep(ExportError):
    """Block nesting exceeded the configured maximum depth."""

    code = "STRUCTURE_TOO_DEEP"

    def __init__(self, depth: int, max_depth: int) -> None:
        super().__init__(f"Nesting depth {depth} exceeds the maximum of {max_depth}")
        self.depth = depth
        self.max_depth = max_depth


class RenderError(ExportError):
    """An external writer or compiler failed. `diagnostic` is its message, verbatim."""

    code = "RENDER_ERROR"

    def __init__(self, target: str, diagnostic: str) -> None:
        super().__init__(f"{target} rendering failed: {diagnostic}")
        self.target = target
        self.diagnostic = diagnostic

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["detail"] = {"target": self.target, "diagnostic": self.diagnostic}
        return payload


class UnknownFormat(ExportError):
    code = "UNKNOWN_FORMAT"

    def __init__(self, requested: object) -> None:
        super().__init__(f"No exporter registered for format: {requested!r}")
        self.requested = requested


class TemplateError(ExportError):
    """A template is malformed or was never registered."""

    code = "TEMPLATE_ERROR"


class RenderContextError(ExportError):
    """Template rendering referenced a variable the context does not provide."""

    code = "RENDER_CONTEXT_ERROR"
