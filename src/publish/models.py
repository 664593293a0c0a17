"""Data models exchanged with the platform client."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

from notedraft.notes.reader import MERGE_TITLE_TEMPLATE


class PublishReason(StrEnum):
    """Outcome of one publish attempt."""

    PUBLISHED = "published"
    NO_NOTE = "no_note"
    NO_COVER = "no_cover"
    ERROR = "error"


class PublishOptions(BaseModel):
    """Limits and switches for turning a note into a draft."""

    key_content_only: bool = False
    title_max_length: int = 64
    digest_max_length: int = 120
    author: str = ""
    merge_title: str = MERGE_TITLE_TEMPLATE


class ArticleDraft(BaseModel):
    """Everything the platform needs to create one draft article."""

    title: str
    content: str
    digest: str = ""
    cover_media_id: str
    author: str = ""


class PublishResult(BaseModel):
    """Result of publishing one note (or one merged set of notes)."""

    success: bool
    reason: PublishReason
    title: str = ""
    media_id: str | None = None
    content: str = ""
    error: str = ""
    source_paths: list[Path] = Field(default_factory=list)
