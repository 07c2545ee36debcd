APP_NAME = "mdexport"

# Containers (lists, quotes, tables) deeper than this fail with StructureTooDeep.
MAX_NESTING_DEPTH = 32

# DOCX geometry, in twips (1440 twips = 1 inch).
LIST_INDENT_UNIT = 360
LIST_HANGING = 360
BULLET = "•"

# Fonts compiled into the Typst engine; used as fallbacks so PDF output never
# depends on what is installed on the host.
TYPST_FALLBACK_TEXT_FONT = "Libertinus Serif"
TYPST_FALLBACK_CODE_FONT = "DejaVu Sans Mono"
DEFAULT_PAPER = "a4"
CONTENT_PLACEHOLDER = "{{content}}"

CSS_EXPORT = """
:root { --fg:#111; --muted:#555; --code:#f4f6f8; --border:#ddd; --link:#0b6bfd; }
body { font-family: "Times New Roman", Georgia, serif; color:var(--fg); margin: 2rem auto; max-width: 46rem; line-height: 1.5; }
h1,h2,h3,h4,h5 { margin-top: 1.2em; }
pre { padding:.75rem; overflow:auto; border-radius:6px; background:var(--code); }
code { font-family: "Courier New", monospace; background:var(--code); padding:.1rem .25rem; border-radius:4px; }
blockquote { border-left:4px solid var(--border); margin:1em 0; padding:.25em .75em; color:var(--muted); }
table { border-collapse: collapse; }
th, td { border:1px solid var(--border); padding:.4rem .6rem; }
a { color:var(--link); }
hr { border:none; border-top:1px solid var(--border); margin:1.5rem 0; }
ul,ol { padding-left:1.5rem; }
"""

HTML_TEMPLATE = """<!doctype html>
<html>
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1.0"/>
<style>{css}</style>
</head>
<body>
{body}
</body>
</html>
"""
