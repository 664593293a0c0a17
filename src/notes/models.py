"""Pure data models for note extraction.

No I/O lives here. The reader, locator and asset resolver produce these
models; the renderer and publish services consume them.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

DIGEST_MAX_LENGTH = 200

DEFAULT_KEEP_KEYWORDS = ["摘要", "summary", "要点", "核心", "key"]
DEFAULT_SKIP_KEYWORDS = [
    "链接",
    "link",
    "工具",
    "tool",
    "产品",
    "product",
    "资源",
    "resource",
]


class SectionState(StrEnum):
    """States of the key-content filter while walking a note line by line.

    Transitions happen only on ``##``-or-deeper headings:

    ============== ============================== ===============
    heading text   next state                     heading emitted
    ============== ============================== ===============
    keep keyword   KEEP_SECTION                   yes
    skip keyword   SKIP_SECTION                   no
    anything else  DEFAULT                        yes
    ============== ============================== ===============

    Body lines are emitted in every state except ``SKIP_SECTION``.
    """

    DEFAULT = "default"
    KEEP_SECTION = "keep"
    SKIP_SECTION = "skip"


class FilterKeywords(BaseModel):
    """Substring keywords that classify ``##`` section headings.

    Matching is case-insensitive against the whole heading line. Keep
    keywords win when a heading matches both lists.
    """

    keep: list[str] = Field(default_factory=lambda: list(DEFAULT_KEEP_KEYWORDS))
    skip: list[str] = Field(default_factory=lambda: list(DEFAULT_SKIP_KEYWORDS))

    def classify(self, heading: str) -> SectionState:
        """Return the state a heading line moves the filter into."""
        text = heading.lower()
        if any(k.lower() in text for k in self.keep):
            return SectionState.KEEP_SECTION
        if any(k.lower() in text for k in self.skip):
            return SectionState.SKIP_SECTION
        return SectionState.DEFAULT


class NoteImage(BaseModel):
    """A local image referenced from a note."""

    reference: str  # full markup as written, e.g. "![alt](./a.png)" or "![[a.png]]"
    resolved_path: Path
    alt_text: str = ""


class NoteRecord(BaseModel):
    """Normalized content of one note (or of several merged notes)."""

    title: str
    body: str = ""
    images: list[NoteImage] = Field(default_factory=list)
    digest: str = ""
    raw_content: str = ""
    source_paths: list[Path] = Field(default_factory=list)

    @property
    def cover_image(self) -> Path | None:
        """The first resolved image, offered as the platform thumbnail."""
        return self.images[0].resolved_path if self.images else None
