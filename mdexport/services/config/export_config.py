from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from mdexport.domain.models import DEFAULT_FONT_CONFIG, HEADING_SCALE, FontConfig, HeadingFont
from mdexport.services.config.ini_config_service import IniConfigService
from mdexport.utils.constants import DEFAULT_PAPER


@dataclass(frozen=True)
class ExportSettings:
    """
    Everything configurable about an export, resolved once from the INI file.

    [fonts]   default_family, default_size, code_family, heading_family, h1_size..h6_size
    [pdf]     paper, font_paths, ignore_system_fonts, template
    [docx]    promote_strong_lines
    [logging] level
    """

    fonts: FontConfig = DEFAULT_FONT_CONFIG
    paper: str = DEFAULT_PAPER
    font_paths: tuple[Path, ...] = ()
    ignore_system_fonts: bool = False
    page_template: str | None = None
    promote_strong_lines: bool = False
    log_level: str = "WARNING"
    loaded_from: Path | None = field(default=None, compare=False)


def load_font_config(cfg: IniConfigService) -> FontConfig:
    base = DEFAULT_FONT_CONFIG
    headings: dict[int, HeadingFont] = {}
    for level in HEADING_SCALE:
        size = cfg.get_float("fonts", f"h{level}_size", None)
        if size:
            headings[level] = HeadingFont(size=size)
    return FontConfig(
        default_family=cfg.get("fonts", "default_family", None) or base.default_family,
        default_size=cfg.get_float("fonts", "default_size", None) or base.default_size,
        code_family=cfg.get("fonts", "code_family", None) or base.code_family,
        heading_family=cfg.get("fonts", "heading_family", None) or base.heading_family,
        headings=headings,
    )


def build_export_settings(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> ExportSettings:
    cfg = IniConfigService(explicit_path=explicit_ini, project_root=project_root)

    template = None
    template_path = cfg.get("pdf", "template", None)
    if template_path:
        template = Path(template_path).expanduser().read_text(encoding="utf-8")

    return ExportSettings(
        fonts=load_font_config(cfg),
        paper=cfg.get("pdf", "paper", None) or DEFAULT_PAPER,
        font_paths=tuple(Path(p).expanduser() for p in cfg.get_list("pdf", "font_paths")),
        ignore_system_fonts=bool(cfg.get_bool("pdf", "ignore_system_fonts", False)),
        page_template=template,
        promote_strong_lines=bool(cfg.get_bool("docx", "promote_strong_lines", False)),
        log_level=(cfg.get("logging", "level", None) or "WARNING").upper(),
        loaded_from=cfg.loaded_from,
    )
