"""Parse dated markdown notes into :class:`NoteRecord` objects.

The reader pulls the title from the first ``# `` heading, optionally
reduces the body to its key sections, scans the raw text for local
images and derives a short digest.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from notedraft.errors import NoteReadError
from notedraft.notes.assets import ATTACHMENTS_DIR, scan_images
from notedraft.notes.models import (
    DIGEST_MAX_LENGTH,
    FilterKeywords,
    NoteRecord,
    SectionState,
)
from notedraft.shared.notify import LogNotifier, Notifier
from notedraft.shared.text import strip_pictographs

logger = logging.getLogger(__name__)

MERGE_TITLE_TEMPLATE = "AI 资讯汇总 {date}"
MERGE_SEPARATOR = "\n\n---\n\n"

_BLOCKQUOTE_RE = re.compile(r"^>\s*(.+)", re.MULTILINE)
_MARKUP_PUNCT_RE = re.compile(r"[#*>\[\]()!`]")
_MIN_QUOTE_DIGEST = 10


def split_title(text: str, fallback: str) -> tuple[str, str]:
    """Split note text into ``(title, body)``.

    The first line whose stripped form starts with ``# `` supplies the
    title; the body is everything after it. Without such a line the
    fallback becomes the title and the whole text is the body.
    """
    lines = text.split("\n")
    title = ""
    start = 0
    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith("# "):
            title = re.sub(r"^#\s*", "", stripped).strip()
            start = i + 1
            break

    if not title:
        title = fallback

    return title, "\n".join(lines[start:]).strip()


def filter_key_content(body: str, keywords: FilterKeywords | None = None) -> str:
    """Keep summary/key sections and drop link/resource sections.

    See :class:`SectionState` for the transition table.
    """
    keywords = keywords or FilterKeywords()
    state = SectionState.DEFAULT
    kept: list[str] = []

    for line in body.split("\n"):
        if line.strip().startswith("##"):
            state = keywords.classify(line.strip())
            if state is not SectionState.SKIP_SECTION:
                kept.append(line)
        elif state is not SectionState.SKIP_SECTION:
            kept.append(line)

    return "\n".join(kept).strip()


def compute_digest(body: str) -> str:
    """Derive a plain-text digest of at most 200 characters.

    The first blockquote line wins when it still has at least ten
    characters after emoji are removed; otherwise the digest is the start
    of the body with markdown punctuation removed and newlines flattened.
    """
    digest = ""
    match = _BLOCKQUOTE_RE.search(body)
    if match:
        digest = strip_pictographs(match.group(1)).strip()

    if len(digest) < _MIN_QUOTE_DIGEST:
        plain = _MARKUP_PUNCT_RE.sub("", body)
        plain = re.sub(r"\n+", " ", plain)
        digest = plain[:DIGEST_MAX_LENGTH].strip()

    return digest[:DIGEST_MAX_LENGTH]


class NoteReader:
    """Reads note files from disk and turns them into records."""

    def __init__(
        self,
        *,
        keywords: FilterKeywords | None = None,
        attachments_dir: str = ATTACHMENTS_DIR,
        notifier: Notifier | None = None,
    ) -> None:
        self.keywords = keywords or FilterKeywords()
        self.attachments_dir = attachments_dir
        self.notifier = notifier or LogNotifier(logger)

    def parse(self, path: Path | str, key_content_only: bool = False) -> NoteRecord:
        """Parse one note file.

        Images are scanned on the raw file text, so the cover image does
        not depend on whether key-content filtering removed its section.

        Raises:
            NoteReadError: If the file cannot be read as UTF-8 text.
        """
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise NoteReadError(path, str(exc)) from exc

        title, body = split_title(raw, fallback=path.stem)
        if key_content_only:
            body = filter_key_content(body, self.keywords)

        images = scan_images(raw, path, self.attachments_dir)
        digest = compute_digest(body)

        self.notifier.notify(
            logging.INFO, f'Parsed note: title="{title}", images={len(images)}'
        )
        return NoteRecord(
            title=title,
            body=body,
            images=images,
            digest=digest,
            raw_content=raw,
            source_paths=[path],
        )

    def merge(
        self,
        paths: list[Path],
        stamp: str,
        key_content_only: bool = False,
        title_template: str = MERGE_TITLE_TEMPLATE,
    ) -> NoteRecord | None:
        """Combine several notes of one day into a single record.

        Each note becomes a ``##`` section; sections are separated by a
        horizontal rule. A single path is parsed as-is and an empty list
        yields ``None``.
        """
        if not paths:
            return None
        if len(paths) == 1:
            return self.parse(paths[0], key_content_only)

        self.notifier.notify(logging.INFO, f"Merging {len(paths)} notes")
        notes = [self.parse(p, key_content_only) for p in paths]

        body = MERGE_SEPARATOR.join(f"## {n.title}\n\n{n.body}" for n in notes)
        digest = " ".join(n.digest for n in notes)

        return NoteRecord(
            title=title_template.format(date=stamp),
            body=body,
            images=[img for n in notes for img in n.images],
            digest=digest[:DIGEST_MAX_LENGTH],
            raw_content=body,
            source_paths=[p for n in notes for p in n.source_paths],
        )
