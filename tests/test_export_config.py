from __future__ import annotations

from pathlib import Path

import pytest

from mdexport.domain.models import DEFAULT_FONT_CONFIG
from mdexport.services.config.export_config import ExportSettings, build_export_settings


def write_ini(p: Path, text: str) -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def test_defaults_without_config():
    settings = build_export_settings()
    assert settings == ExportSettings()
    assert settings.fonts == DEFAULT_FONT_CONFIG
    assert settings.paper == "a4"
    assert settings.log_level == "WARNING"


def test_full_config(tmp_path):
    template = write_ini(tmp_path / "page.typ", "#set page(margin: 2cm)\n{{content}}\n")
    ini = write_ini(
        tmp_path / "mdexport.ini",
        "[fonts]\n"
        "default_family = Georgia\n"
        "default_size = 12\n"
        "code_family = Fira Mono\n"
        "heading_family = Helvetica\n"
        "h1_size = 24\n"
        "[pdf]\n"
        "paper = us-letter\n"
        f"font_paths = {tmp_path / 'fonts'}\n"
        "ignore_system_fonts = yes\n"
        f"template = {template}\n"
        "[docx]\n"
        "promote_strong_lines = on\n"
        "[logging]\n"
        "level = debug\n",
    )

    settings = build_export_settings(explicit_ini=ini)
    fonts = settings.fonts
    assert fonts.default_family == "Georgia"
    assert fonts.default_size == 12.0
    assert fonts.code_family == "Fira Mono"
    assert fonts.heading_family_for(2) == "Helvetica"
    assert fonts.heading_size_for(1) == 24.0
    assert fonts.heading_size_for(2) == 17.5

    assert settings.paper == "us-letter"
    assert settings.font_paths == (tmp_path / "fonts",)
    assert settings.ignore_system_fonts is True
    assert settings.page_template == "#set page(margin: 2cm)\n{{content}}\n"
    assert settings.promote_strong_lines is True
    assert settings.log_level == "DEBUG"
    assert settings.loaded_from == ini


def test_out_of_range_font_size_is_rejected(tmp_path):
    ini = write_ini(tmp_path / "bad.ini", "[fonts]\ndefault_size = 500\n")
    with pytest.raises(ValueError):
        build_export_settings(explicit_ini=ini)


def test_missing_template_file_is_an_os_error(tmp_path):
    ini = write_ini(tmp_path / "t.ini", f"[pdf]\ntemplate = {tmp_path / 'missing.typ'}\n")
    with pytest.raises(OSError):
        build_export_settings(explicit_ini=ini)
