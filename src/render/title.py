"""Title cleaning for platforms that reject emoji and most symbols."""

from __future__ import annotations

import re

from notedraft.shared.text import collapse_whitespace, strip_pictographs

# CJK ideographs, ASCII letters and digits, whitespace, and the CJK and
# ASCII punctuation the platform accepts in titles.
_DISALLOWED_RE = re.compile(
    r"[^一-龥a-zA-Z0-9\s"
    r"，。、；：‘’“”（）【】《》！？·—"
    r"\-,.;:'\"()\[\]!?]"
)


def clean_title(title: str) -> str:
    """Strip pictographs and disallowed symbols, then normalise spaces.

    Idempotent: ``clean_title(clean_title(x)) == clean_title(x)``.
    """
    cleaned = strip_pictographs(title)
    cleaned = _DISALLOWED_RE.sub("", cleaned)
    return collapse_whitespace(cleaned)


def truncate_title(title: str, max_length: int) -> str:
    """Cut a cleaned title down to the platform limit."""
    if len(title) <= max_length:
        return title
    return title[:max_length].rstrip()
