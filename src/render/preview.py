"""Standalone HTML document for previewing a rendered article locally."""

from __future__ import annotations

import html

_PREVIEW_TEMPLATE = """\
<!DOCTYPE html>
<html lang="zh-CN">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{
            max-width: 800px;
            margin: 0 auto;
            padding: 20px;
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
        }}
    </style>
</head>
<body>
    <h1>{title}</h1>
    {fragment}
</body>
</html>
"""


def wrap_preview_document(fragment: str, title: str) -> str:
    """Embed an article fragment in a minimal page with the title on top."""
    return _PREVIEW_TEMPLATE.format(title=html.escape(title), fragment=fragment)


def preview_filename(stamp: str, index: int | None = None) -> str:
    """``draft_<date>.html``, or ``draft_<date>_<n>.html`` for one of several."""
    if index is None:
        return f"draft_{stamp}.html"
    return f"draft_{stamp}_{index}.html"
