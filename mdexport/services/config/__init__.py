"""INI configuration and the export settings derived from it."""

from .export_config import ExportSettings, build_export_settings, load_font_config
from .ini_config_service import IniConfigService

__all__ = ["ExportSettings", "IniConfigService", "build_export_settings", "load_font_config"]
