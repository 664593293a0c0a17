"""Publishing flows around an external platform client."""

from notedraft.publish.base import PlatformClient
from notedraft.publish.models import ArticleDraft, PublishOptions, PublishReason, PublishResult
from notedraft.publish.services import (
    prepare_note,
    publish_date,
    publish_note,
    publish_record,
    upload_images,
)

__all__ = [
    "ArticleDraft",
    "PlatformClient",
    "PublishOptions",
    "PublishReason",
    "PublishResult",
    "prepare_note",
    "publish_date",
    "publish_note",
    "publish_record",
    "upload_images",
]
