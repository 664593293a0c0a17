"""Note discovery and extraction.

Finds the dated markdown notes for a day, resolves the images they embed
and parses them into :class:`NoteRecord` objects.
"""

from notedraft.notes.assets import resolve_image_path, scan_images
from notedraft.notes.locator import NoteLocator, date_stamp, today_stamp, yesterday_stamp
from notedraft.notes.models import FilterKeywords, NoteImage, NoteRecord, SectionState
from notedraft.notes.reader import (
    NoteReader,
    compute_digest,
    filter_key_content,
    split_title,
)

__all__ = [
    "FilterKeywords",
    "NoteImage",
    "NoteLocator",
    "NoteReader",
    "NoteRecord",
    "SectionState",
    "compute_digest",
    "date_stamp",
    "filter_key_content",
    "resolve_image_path",
    "scan_images",
    "split_title",
    "today_stamp",
    "yesterday_stamp",
]
