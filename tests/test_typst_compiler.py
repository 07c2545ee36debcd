from __future__ import annotations

from pathlib import Path

import pytest

from mdexport.domain.errors import RenderError
from mdexport.services import typst_compiler as typst_compiler_module
from mdexport.services.typst_compiler import MAIN_FILE, TypstCompiler


def test_compile_stages_source_in_private_root(monkeypatch):
    seen = {}

    def fake_compile(input, root=None, **kwargs):
        path = Path(input)
        seen["name"] = path.name
        seen["source"] = path.read_text(encoding="utf-8")
        seen["root"] = root
        seen["kwargs"] = kwargs
        return b"%PDF-1.7 staged"

    monkeypatch.setattr(typst_compiler_module.typst, "compile", fake_compile)

    pdf = TypstCompiler().compile("= Hello")
    assert pdf == b"%PDF-1.7 staged"
    assert seen["name"] == MAIN_FILE
    assert seen["source"] == "= Hello"
    assert seen["kwargs"] == {}
    # The staging directory is gone once compile() returns.
    assert not Path(seen["root"]).exists()


def test_font_options_are_forwarded(monkeypatch, tmp_path):
    seen = {}

    def fake_compile(input, root=None, **kwargs):
        seen.update(kwargs)
        return b"%PDF"

    monkeypatch.setattr(typst_compiler_module.typst, "compile", fake_compile)

    TypstCompiler([tmp_path / "fonts"], ignore_system_fonts=True).compile("x")
    assert seen == {"font_paths": [str(tmp_path / "fonts")], "ignore_system_fonts": True}


def test_compiler_failure_becomes_render_error(monkeypatch):
    def failing_compile(input, root=None, **kwargs):
        raise RuntimeError("error: unclosed delimiter")

    monkeypatch.setattr(typst_compiler_module.typst, "compile", failing_compile)

    with pytest.raises(RenderError) as exc:
        TypstCompiler().compile("#let x = (")
    assert exc.value.target == "pdf"
    assert exc.value.diagnostic == "error: unclosed delimiter"


def test_empty_output_is_render_error(monkeypatch):
    monkeypatch.setattr(typst_compiler_module.typst, "compile", lambda *a, **k: b"")
    with pytest.raises(RenderError):
        TypstCompiler().compile("x")


def test_real_compile_produces_pdf():
    pdf = TypstCompiler().compile("= Title\n\nHello, world.\n")
    assert pdf.startswith(b"%PDF")


def test_real_compile_reports_diagnostics():
    with pytest.raises(RenderError) as exc:
        TypstCompiler().compile("#let x = (\n")
    assert exc.value.diagnostic
