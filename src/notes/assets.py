"""Locate the image files a note refers to.

Two reference syntaxes are recognised: standard markdown images
``![alt](path)`` and Obsidian embeds ``![[path]]``. Remote images are
never resolved; local ones are looked up with a fixed search order
relative to the directory holding the note.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from notedraft.notes.models import NoteImage

ATTACHMENTS_DIR = "attachments"

MD_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
WIKI_IMAGE_RE = re.compile(r"!\[\[([^\]]+)\]\]")

_REMOTE_PREFIXES = ("http://", "https://")
_RELATIVE_PREFIXES = ("./", "../")


def _absolute(path: Path) -> Path:
    """Absolute, lexically normalized path; symlinks are left alone."""
    return Path(os.path.normpath(path.absolute()))


def resolve_image_path(
    reference: str,
    note_dir: Path,
    attachments_dir: str = ATTACHMENTS_DIR,
) -> Path | None:
    """Map an image reference to a local file path.

    Search order:
    1. ``http://`` / ``https://`` references resolve to ``None``.
    2. ``./`` and ``../`` references resolve against ``note_dir`` whether
       or not the file exists; the caller checks existence.
    3. ``note_dir/attachments/<reference>`` if it exists.
    4. ``note_dir/<reference>`` if it exists.

    Args:
        reference: The path component as written in the markup.
        note_dir: Directory containing the note file.
        attachments_dir: Name of the per-directory attachments folder.

    Returns:
        An absolute path, or ``None`` when nothing matched.
    """
    if reference.startswith(_REMOTE_PREFIXES):
        return None

    if reference.startswith(_RELATIVE_PREFIXES):
        return _absolute(note_dir / reference)

    candidate = note_dir / attachments_dir / reference
    if candidate.exists():
        return _absolute(candidate)

    candidate = note_dir / reference
    if candidate.exists():
        return _absolute(candidate)

    return None


def scan_images(
    text: str,
    note_path: Path,
    attachments_dir: str = ATTACHMENTS_DIR,
) -> list[NoteImage]:
    """Collect the local images referenced in ``text``.

    All standard-syntax matches come first, left to right, followed by all
    wiki-syntax matches. References that do not resolve to an existing
    file are dropped.
    """
    note_dir = note_path.parent
    images: list[NoteImage] = []

    for match in MD_IMAGE_RE.finditer(text):
        resolved = resolve_image_path(match.group(2), note_dir, attachments_dir)
        if resolved is not None and resolved.exists():
            images.append(
                NoteImage(
                    reference=match.group(0),
                    resolved_path=resolved,
                    alt_text=match.group(1),
                )
            )

    for match in WIKI_IMAGE_RE.finditer(text):
        resolved = resolve_image_path(match.group(1), note_dir, attachments_dir)
        if resolved is not None and resolved.exists():
            images.append(NoteImage(reference=match.group(0), resolved_path=resolved))

    return images
