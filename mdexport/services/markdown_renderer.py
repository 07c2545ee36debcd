# mdexport/services/markdown_renderer.py
from __future__ import annotations

from typing import Literal

import markdown

from mdexport.domain.interfaces import IMarkdownRenderer
from mdexport.utils.constants import CSS_EXPORT, HTML_TEMPLATE

MathEngine = Literal["mathjax"]


class MarkdownRenderer(IMarkdownRenderer):
    """
    Converts Markdown to a standalone HTML document.

    With math_engine="mathjax", pymdownx.arithmatex wraps inline ($...$) and
    display ($$...$$) math and the MathJax loader is appended to the body.
    Without it the output has no external references.
    """

    def __init__(self, math_engine: MathEngine | None = None, css: str = CSS_EXPORT) -> None:
        self.math_engine = math_engine
        self.css = css

    def to_html(self, markdown_text: str) -> str:
        exts = [
            "extra",
            "codehilite",
            "toc",
            "sane_lists",
            "smarty",
            "pymdownx.tilde",
        ]
        ext_cfg: dict[str, dict] = {
            "codehilite": {"guess_lang": False, "noclasses": True},
        }
        if self.math_engine:
            exts.append("pymdownx.arithmatex")
            ext_cfg["pymdownx.arithmatex"] = {
                "generic": True,
                "inline_syntax": ["dollar"],
                "block_syntax": ["dollar"],
            }

        body = markdown.markdown(
            markdown_text,
            extensions=exts,
            extension_configs=ext_cfg,
            output_format="html5",
        )
        if self.math_engine:
            body += _MATHJAX_ASSETS
        return HTML_TEMPLATE.format(css=self.css, body=body)


# MathJax v3: inline and display delimiters, skip pre/code.
_MATHJAX_ASSETS = """
<script>
window.MathJax = {
  tex: {
    inlineMath: [['\\\\(', '\\\\)']],
    displayMath: [['\\\\[', '\\\\]']],
    processEscapes: true
  },
  options: {
    skipHtmlTags: ['script', 'noscript', 'style', 'textarea', 'pre', 'code']
  }
};
</script>
<script id="MathJax-script" async src="https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-chtml.js"></script>
"""
