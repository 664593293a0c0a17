"""Rendering of note records into platform-ready HTML."""

from notedraft.render.converter import (
    ArticleRenderer,
    ImageUrlMap,
    apply_styles,
    markdown_to_html,
    nest_lists,
    normalize_whitespace,
    remove_external_links,
    repair_links,
    separate_lists,
    substitute_images,
    wrap_article,
)
from notedraft.render.preview import preview_filename, wrap_preview_document
from notedraft.render.styles import ELEMENT_STYLES, FooterConfig
from notedraft.render.title import clean_title, truncate_title

__all__ = [
    "ELEMENT_STYLES",
    "ArticleRenderer",
    "FooterConfig",
    "ImageUrlMap",
    "apply_styles",
    "clean_title",
    "markdown_to_html",
    "nest_lists",
    "normalize_whitespace",
    "preview_filename",
    "remove_external_links",
    "repair_links",
    "separate_lists",
    "substitute_images",
    "truncate_title",
    "wrap_article",
    "wrap_preview_document",
]
