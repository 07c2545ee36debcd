from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from mdexport.domain.errors import ExportError
from mdexport.domain.models import OutputFormat
from mdexport.engine import ExportEngine
from mdexport.services.config.export_config import build_export_settings
from mdexport.utils.logging import get_logger, setup_logging

log = get_logger(__name__)

TEMPLATE_NAME = "source"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdexport",
        description="Convert a Markdown report (or a template plus JSON data) into md, html, pdf or docx.",
    )
    parser.add_argument("source", type=Path, help="Markdown file, or a Jinja2 template when --data is given")
    parser.add_argument("--data", type=Path, default=None, help="JSON file with the template context")
    parser.add_argument(
        "-f",
        "--format",
        dest="formats",
        action="append",
        default=None,
        help="Output format: md, html, pdf, docx (repeatable; default: pdf)",
    )
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output file (single format) or directory")
    parser.add_argument("--config", type=Path, default=None, help="INI configuration file")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    return parser


def run(argv: Sequence[str]) -> int:
    args = build_parser().parse_args(list(argv))
    try:
        settings = build_export_settings(explicit_ini=args.config)
        engine = ExportEngine.from_settings(settings)
    except (OSError, ValueError) as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 2
    setup_logging(args.log_level or settings.log_level)
    if settings.loaded_from:
        log.debug("Using config %s", settings.loaded_from)

    try:
        formats = [OutputFormat.parse(f) for f in (args.formats or ["pdf"])]
        source = args.source.read_text(encoding="utf-8")
        if args.data is not None:
            context = json.loads(args.data.read_text(encoding="utf-8"))
            engine.register_template(TEMPLATE_NAME, source)
            markdown_text = engine.render(TEMPLATE_NAME, context)
        else:
            markdown_text = source

        for fmt in formats:
            result = engine.convert(markdown_text, fmt)
            out_path = _output_path(args.source, args.output, result.filename(args.source.stem), len(formats))
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_bytes(result.data)
            print(f"Wrote {out_path} ({len(result.data)} bytes)")
    except ExportError as e:
        print(f"error [{e.code}]: {e.message}", file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


def _output_path(source: Path, output: Path | None, filename: str, count: int) -> Path:
    if output is None:
        return source.with_name(filename)
    if count > 1 or output.is_dir():
        return output / filename
    return output


def main() -> int:
    """Module entrypoint for `python -m mdexport` or the `mdexport` script."""
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
