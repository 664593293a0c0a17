"""Text helpers shared by note extraction and title cleaning."""

from __future__ import annotations

import re

# Emoji and other pictographic code points, plus the joiners, keycap mark
# and variation selectors that glue emoji sequences together.
PICTOGRAPH_RE = re.compile(
    "["
    "\U0001F000-\U0001FAFF"  # symbols, pictographs, emoticons, flags
    "\U000E0020-\U000E007F"  # tag sequences
    "\u2600-\u27BF"  # miscellaneous symbols, dingbats
    "\u2300-\u23FF"  # miscellaneous technical
    "\u2194-\u2199\u21A9\u21AA"
    "\u2B05-\u2B07\u2B1B\u2B1C\u2B50\u2B55"
    "\u25AA\u25AB\u25B6\u25C0\u25FB-\u25FE"
    "\u00A9\u00AE\u203C\u2049\u2122\u2139\u24C2"
    "\u3030\u303D\u3297\u3299"
    "\u200D\u20E3\uFE0E\uFE0F"  # joiner, keycap, variation selectors
    "]"
)


def strip_pictographs(text: str) -> str:
    """Remove emoji and pictographs from ``text``."""
    return PICTOGRAPH_RE.sub("", text)


def collapse_whitespace(text: str) -> str:
    """Squeeze runs of whitespace into single spaces and trim the ends."""
    return re.sub(r"\s+", " ", text).strip()
