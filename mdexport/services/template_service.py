from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, StrictUndefined, Template
from jinja2 import TemplateError as JinjaTemplateError
from jinja2 import TemplateSyntaxError, UndefinedError

from mdexport.domain.errors import RenderContextError, TemplateError


class TemplateService:
    """
    Named Markdown templates rendered with Jinja2.

    Registration mutates shared state: callers sharing one instance across
    threads must finish registering before rendering concurrently.
    """

    def __init__(self) -> None:
        self._env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )
        self._templates: dict[str, Template] = {}

    def register(self, name: str, template_source: str) -> None:
        try:
            self._templates[name] = self._env.from_string(template_source)
        except TemplateSyntaxError as e:
            raise TemplateError(f"Template {name!r} line {e.lineno}: {e.message}") from e

    def render(self, name: str, context: Mapping[str, Any] | None = None) -> str:
        template = self._templates.get(name)
        if template is None:
            raise TemplateError(f"Template not registered: {name!r}")
        try:
            return template.render(dict(context or {}))
        except UndefinedError as e:
            raise RenderContextError(f"Template {name!r}: {e.message}") from e
        except JinjaTemplateError as e:
            raise TemplateError(f"Template {name!r}: {e}") from e

    def names(self) -> list[str]:
        return sorted(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates
