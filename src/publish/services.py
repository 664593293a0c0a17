"""Orchestration of the note → draft flow.

Contains the I/O-facing steps around the pure core: image uploads through
a :class:`PlatformClient`, title and digest limits, and the single-note and
per-date publish flows.
"""

from __future__ import annotations

import logging
from pathlib import Path

from notedraft.notes.locator import NoteLocator
from notedraft.notes.models import NoteRecord
from notedraft.notes.reader import NoteReader
from notedraft.publish.base import PlatformClient
from notedraft.publish.models import ArticleDraft, PublishOptions, PublishReason, PublishResult
from notedraft.render.converter import ArticleRenderer
from notedraft.render.title import clean_title, truncate_title

logger = logging.getLogger(__name__)


def prepare_note(note: NoteRecord, options: PublishOptions) -> NoteRecord:
    """Return a copy of ``note`` with a platform-legal title.

    A title that cleans down to nothing falls back to the first source
    file's name, then to the raw title cut to length.
    """
    title = truncate_title(clean_title(note.title), options.title_max_length)
    if not title and note.source_paths:
        title = truncate_title(clean_title(note.source_paths[0].stem), options.title_max_length)
    if not title:
        title = note.title.strip()[: options.title_max_length]
    if title != note.title:
        logger.info("Cleaned title: %r -> %r", note.title, title)
    return note.model_copy(update={"title": title})


def upload_images(
    note: NoteRecord, client: PlatformClient
) -> tuple[dict[Path, str], str | None]:
    """Upload a note's images in order.

    The first image is additionally uploaded as the cover. Failed uploads
    are logged and left out of the returned URL map.

    Returns:
        ``(image_url_map, cover_media_id)``; the media id is ``None`` when
        there is no image or the cover upload failed.
    """
    url_map: dict[Path, str] = {}
    cover_media_id: str | None = None

    for index, image in enumerate(note.images):
        try:
            if index == 0:
                cover_media_id = client.upload_cover_image(image.resolved_path)
                logger.info("Uploaded cover image: %s", cover_media_id)
            url_map[image.resolved_path] = client.upload_content_image(image.resolved_path)
        except Exception:
            logger.warning("Image upload failed, skipping: %s", image.resolved_path, exc_info=True)

    return url_map, cover_media_id


def publish_record(
    note: NoteRecord,
    client: PlatformClient,
    *,
    renderer: ArticleRenderer | None = None,
    options: PublishOptions | None = None,
) -> PublishResult:
    """Render an already-extracted note and create a draft for it.

    Platforms require a cover image, so a note without one is rendered but
    not sent; the result carries ``reason=no_cover`` and the HTML.
    """
    renderer = renderer or ArticleRenderer()
    options = options or PublishOptions()

    note = prepare_note(note, options)
    url_map, cover_media_id = upload_images(note, client)
    content = renderer.render(note, url_map)

    if cover_media_id is None:
        logger.warning("No cover image for '%s', draft not created", note.title)
        return PublishResult(
            success=False,
            reason=PublishReason.NO_COVER,
            title=note.title,
            content=content,
            source_paths=note.source_paths,
        )

    draft = ArticleDraft(
        title=note.title,
        content=content,
        digest=note.digest[: options.digest_max_length],
        cover_media_id=cover_media_id,
        author=options.author,
    )
    media_id = client.create_draft(draft)
    logger.info("Draft created for '%s': %s", note.title, media_id)

    return PublishResult(
        success=True,
        reason=PublishReason.PUBLISHED,
        title=note.title,
        media_id=media_id,
        content=content,
        source_paths=note.source_paths,
    )


def publish_note(
    path: Path,
    client: PlatformClient,
    *,
    reader: NoteReader | None = None,
    renderer: ArticleRenderer | None = None,
    options: PublishOptions | None = None,
) -> PublishResult:
    """Publish a single note file.

    Raises:
        NoteReadError: If the note cannot be read. The single-note flow
            does not recover from this.
    """
    reader = reader or NoteReader()
    options = options or PublishOptions()
    note = reader.parse(path, options.key_content_only)
    return publish_record(note, client, renderer=renderer, options=options)


def publish_date(
    locator: NoteLocator,
    stamp: str,
    client: PlatformClient,
    *,
    merge: bool = False,
    reader: NoteReader | None = None,
    renderer: ArticleRenderer | None = None,
    options: PublishOptions | None = None,
) -> list[PublishResult]:
    """Publish every note of a day.

    With ``merge`` the notes become one combined draft and any failure
    propagates. Otherwise each note gets its own draft; a note that fails
    is logged, recorded as ``reason=error`` and the rest continue.
    """
    reader = reader or NoteReader()
    options = options or PublishOptions()

    paths = locator.find_all_by_date(stamp)
    if not paths:
        return [PublishResult(success=False, reason=PublishReason.NO_NOTE)]

    if merge:
        note = reader.merge(paths, stamp, options.key_content_only, options.merge_title)
        return [publish_record(note, client, renderer=renderer, options=options)]

    results: list[PublishResult] = []
    for index, path in enumerate(paths, start=1):
        logger.info("Publishing note %d/%d: %s", index, len(paths), path.name)
        try:
            result = publish_note(
                path, client, reader=reader, renderer=renderer, options=options
            )
        except Exception as exc:
            logger.warning("Failed to publish %s", path, exc_info=True)
            result = PublishResult(
                success=False, reason=PublishReason.ERROR, error=str(exc), source_paths=[path]
            )
        results.append(result)

    published = sum(1 for r in results if r.success)
    logger.info("Published %d/%d notes for %s", published, len(results), stamp)
    return results
