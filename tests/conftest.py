from __future__ import annotations

from pathlib import Path

import pytest

from mdexport.domain.models import FontConfig
from mdexport.engine import ExportEngine
from mdexport.services.docx_mapper import DocxMapper
from mdexport.services.document_builder import DocumentBuilder
from mdexport.services.exporters import DocxExporter, HtmlExporter, MarkdownExporter, PdfExporter
from mdexport.services.typst_generator import TypstGenerator


class FakeCompiler:
    """Stands in for TypstCompiler; records the source it was asked to compile."""

    def __init__(self) -> None:
        self.sources: list[str] = []

    def compile(self, source: str) -> bytes:
        self.sources.append(source)
        return b"%PDF-1.7 fake"


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path: Path):
    # Never pick up a developer's ~/.config/mdexport/config.ini
    monkeypatch.setattr(
        "mdexport.services.config.ini_config_service.user_config_dir", None, raising=False
    )
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture()
def builder() -> DocumentBuilder:
    return DocumentBuilder()


@pytest.fixture()
def fonts() -> FontConfig:
    return FontConfig()


@pytest.fixture()
def mapper() -> DocxMapper:
    return DocxMapper()


@pytest.fixture()
def generator() -> TypstGenerator:
    return TypstGenerator()


@pytest.fixture()
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture()
def engine(fake_compiler: FakeCompiler) -> ExportEngine:
    return ExportEngine(
        [
            MarkdownExporter(),
            HtmlExporter(),
            DocxExporter(),
            PdfExporter(compiler=fake_compiler),
        ]
    )
