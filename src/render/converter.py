"""Markdown to platform HTML conversion.

The target platform only renders inline styles, collapses nothing, shows
whitespace between tags as visible gaps, and does not allow outbound
links. :class:`ArticleRenderer` turns a note body into a fragment that
satisfies those rules:

1. local image references are swapped for uploaded URLs
2. unterminated markdown links are closed
3. markdown is converted with soft line breaks kept as ``<br>``
4. whitespace around tags is removed
5. every element gets its inline style
6. promotional link paragraphs are dropped and other anchors unwrapped
7. the result is wrapped in a content section plus a footer section

Steps 4 to 6 run on a BeautifulSoup tree instead of on the markup string.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Mapping
from pathlib import Path, PurePath

import markdown
from bs4 import BeautifulSoup, NavigableString, Tag

from notedraft.notes.models import NoteRecord
from notedraft.render.styles import (
    CONTENT_SECTION_STYLE,
    ELEMENT_STYLES,
    FOOTER_END_STYLE,
    FOOTER_SECTION_STYLE,
    FOOTER_TAGLINE_STYLE,
    FooterConfig,
)

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "nl2br", "sane_lists"]

ImageUrlMap = Mapping[Path | str, str]

# Anchor texts that only point readers elsewhere.
READ_MORE_PHRASES = (
    "阅读更多",
    "查看更多",
    "了解更多",
    "点击查看",
    "查看详情",
    "read more",
    "learn more",
    "see more",
    "view more",
    "view details",
    "click here",
)
# Subset that is also removed from inside list items.
INLINE_READ_MORE_PHRASES = ("阅读更多", "查看更多", "了解更多", "read more", "learn more", "see more")
# Trailers such as "<a>Source</a> - 详细报道".
TRAILER_PHRASES = (
    "详细报道",
    "更多信息",
    "完整报道",
    "深度报道",
    "full coverage",
    "more info",
    "full story",
)
RESIDUAL_TRAILER_PHRASES = TRAILER_PHRASES + ("阅读原文", "read original")

_UNCLOSED_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)\s]+)$", re.MULTILINE)
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_FENCE_RE = re.compile(r"^\s*(```|~~~)")
_LIST_ITEM_RE = re.compile(r"^\s*(?:[-*+]|\d+\.)\s+\S")


def _alternation(phrases: tuple[str, ...]) -> str:
    return "|".join(re.escape(p) for p in phrases)


_READ_MORE_RE = re.compile(rf"^(?:{_alternation(READ_MORE_PHRASES)})$", re.IGNORECASE)
_INLINE_READ_MORE_RE = re.compile(
    rf"^(?:{_alternation(INLINE_READ_MORE_PHRASES)})$", re.IGNORECASE
)
_CALL_TO_ACTION_RE = re.compile(r"^(?:使用|访问|体验|试用|(?:try|visit|use)\b)", re.IGNORECASE)
_TRAILER_RE = re.compile(rf"^\s*[-—]\s*(?:{_alternation(TRAILER_PHRASES)})\s*$", re.IGNORECASE)
_RESIDUAL_TRAILER_RE = re.compile(
    rf"\s*[-—]\s*(?:{_alternation(RESIDUAL_TRAILER_PHRASES)})\s*", re.IGNORECASE
)


# ---------------------------------------------------------------------------
# Markdown passes
# ---------------------------------------------------------------------------


def substitute_images(text: str, image_url_map: ImageUrlMap) -> str:
    """Point image references at their uploaded URLs.

    A reference matches when its path contains the file name of a map key,
    so two different files sharing a name in one note both receive the
    URL of whichever key is processed first.
    """
    for local_path, url in image_url_map.items():
        name = re.escape(PurePath(str(local_path)).name)
        md_re = re.compile(rf"!\[([^\]]*)\]\([^)]*{name}[^)]*\)")
        wiki_re = re.compile(rf"!\[\[[^\]]*{name}[^\]]*\]\]")
        text = md_re.sub(lambda m, url=url: f"![{m.group(1)}]({url})", text)
        text = wiki_re.sub(lambda m, url=url: f"![]({url})", text)
    return text


def repair_links(text: str) -> str:
    """Close links cut off at end of line and drop newlines inside URLs."""
    text = _UNCLOSED_LINK_RE.sub(lambda m: f"[{m.group(1)}]({m.group(2)})", text)

    def _clean(match: re.Match[str]) -> str:
        url = match.group(2).replace("\n", "").strip()
        return f"[{match.group(1)}]({url})"

    return _LINK_RE.sub(_clean, text)


def separate_lists(text: str) -> str:
    """Insert a blank line where a list starts right under a paragraph line.

    Notes are written for GFM, where a list may interrupt a paragraph;
    Python-Markdown needs the blank line.
    """
    out: list[str] = []
    in_fence = False
    for line in text.split("\n"):
        if _FENCE_RE.match(line):
            in_fence = not in_fence
        elif not in_fence and _LIST_ITEM_RE.match(line) and out:
            previous = out[-1]
            if (
                previous.strip()
                and not previous[0].isspace()
                and not _LIST_ITEM_RE.match(previous)
            ):
                out.append("")
        out.append(line)
    return "\n".join(out)


def nest_lists(text: str) -> str:
    """Re-indent nested list items to the four-space step Python-Markdown uses.

    GFM nests an item once it is indented past its parent's marker, which
    in practice means two spaces. Each deeper indent seen under a list is
    mapped to the parent's rendered indent plus four; items at an indent
    already seen return to that level. A non-indented line that is not a
    list item ends the list.
    """
    out: list[str] = []
    in_fence = False
    levels: list[tuple[int, int]] = []  # (source indent, rendered indent)

    for line in text.split("\n"):
        if _FENCE_RE.match(line):
            in_fence = not in_fence
            out.append(line)
            continue
        if in_fence or not line.strip():
            out.append(line)
            continue

        stripped = line.lstrip(" ")
        indent = len(line) - len(stripped)
        if not _LIST_ITEM_RE.match(line):
            if indent == 0:
                levels = []
            out.append(line)
            continue

        while levels and levels[-1][0] > indent:
            levels.pop()
        if levels and levels[-1][0] == indent:
            rendered = levels[-1][1]
        elif levels:
            rendered = levels[-1][1] + 4
            levels.append((indent, rendered))
        else:
            rendered = indent
            levels.append((indent, rendered))
        out.append(" " * rendered + stripped)

    return "\n".join(out)


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML with GFM-style tables, fences, lists and breaks."""
    text = nest_lists(separate_lists(text))
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


# ---------------------------------------------------------------------------
# Tree passes
# ---------------------------------------------------------------------------


def normalize_whitespace(soup: BeautifulSoup) -> None:
    """Trim every text node and drop the ones that were only whitespace."""
    for node in list(soup.find_all(string=True)):
        stripped = node.strip()
        if not stripped:
            node.extract()
        elif stripped != node:
            node.replace_with(type(node)(stripped))


def apply_styles(soup: BeautifulSoup, styles: Mapping[str, str] = ELEMENT_STYLES) -> None:
    """Give each styled element its inline style unless it already has one."""
    for name, style in styles.items():
        for element in soup.find_all(name):
            if not element.has_attr("style"):
                element["style"] = style


def _meaningful_children(tag: Tag) -> list:
    return [
        child
        for child in tag.contents
        if not (isinstance(child, NavigableString) and not child.strip())
    ]


def _is_plain_anchor(node: object) -> bool:
    return isinstance(node, Tag) and node.name == "a" and node.find(True) is None


def _is_link_paragraph(paragraph: Tag) -> bool:
    children = _meaningful_children(paragraph)
    if not children or not _is_plain_anchor(children[0]):
        return False

    text = children[0].get_text().strip()
    if len(children) == 1:
        return bool(_READ_MORE_RE.match(text) or _CALL_TO_ACTION_RE.match(text))
    if len(children) == 2 and isinstance(children[1], NavigableString):
        return bool(text and _TRAILER_RE.match(str(children[1])))
    return False


def remove_external_links(soup: BeautifulSoup) -> None:
    """Strip outbound links the platform would reject.

    Paragraphs consisting of a promotional link are removed entirely,
    "read more" anchors are removed from list items and other text, every
    remaining anchor is replaced by its text, and leftover trailers such as
    ``- 详细报道`` are cut from the surrounding text.
    """
    for paragraph in list(soup.find_all("p")):
        if _is_link_paragraph(paragraph):
            paragraph.decompose()

    for anchor in list(soup.find_all("a")):
        if _is_plain_anchor(anchor) and _INLINE_READ_MORE_RE.match(anchor.get_text().strip()):
            anchor.decompose()

    for anchor in list(soup.find_all("a")):
        anchor.unwrap()

    soup.smooth()
    for node in list(soup.find_all(string=True)):
        cleaned = _RESIDUAL_TRAILER_RE.sub("", node)
        if cleaned == node:
            continue
        if cleaned:
            node.replace_with(type(node)(cleaned))
        else:
            node.extract()


def wrap_article(content_html: str, footer: FooterConfig) -> str:
    """Place the body in a content section followed by the footer section."""
    return (
        f'<section style="{CONTENT_SECTION_STYLE}">{content_html}</section>'
        f'<section style="{FOOTER_SECTION_STYLE}">'
        f'<p style="{FOOTER_END_STYLE}">{html.escape(footer.end_text)}</p>'
        f'<p style="{FOOTER_TAGLINE_STYLE}">{html.escape(footer.tagline_text)}</p>'
        "</section>"
    )


class ArticleRenderer:
    """Renders note records as inline-styled HTML fragments."""

    def __init__(
        self,
        footer: FooterConfig | None = None,
        styles: Mapping[str, str] | None = None,
    ) -> None:
        self.footer = footer or FooterConfig()
        self.styles = dict(ELEMENT_STYLES if styles is None else styles)

    def convert(self, text: str, image_url_map: ImageUrlMap | None = None) -> str:
        """Convert a markdown body to styled HTML without the wrapper sections.

        Image references missing from ``image_url_map`` are left pointing at
        their local paths.
        """
        text = substitute_images(text, image_url_map or {})
        text = repair_links(text)

        soup = BeautifulSoup(markdown_to_html(text), "html.parser")
        normalize_whitespace(soup)
        apply_styles(soup, self.styles)
        remove_external_links(soup)
        return str(soup)

    def render(self, note: NoteRecord, image_url_map: ImageUrlMap | None = None) -> str:
        """Render a note body into the final article fragment."""
        content = self.convert(note.body, image_url_map)
        logger.debug("Rendered '%s' (%d chars)", note.title, len(content))
        return wrap_article(content, self.footer)
