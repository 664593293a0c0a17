"""Inline styles applied to rendered articles.

The target platform strips stylesheets, so every element carries its own
``style`` attribute. Values follow the platform's default article look.
"""

from __future__ import annotations

from pydantic import BaseModel

ELEMENT_STYLES: dict[str, str] = {
    "h1": "font-size: 20px; font-weight: bold; color: #333; margin: 16px 0 12px 0; line-height: 1.5;",
    "h2": (
        "font-size: 17px; font-weight: bold; color: #333; margin: 16px 0 10px 0; "
        "line-height: 1.5; border-bottom: 1px solid #eee; padding-bottom: 6px;"
    ),
    "h3": "font-size: 15px; font-weight: bold; color: #333; margin: 14px 0 8px 0; line-height: 1.5;",
    "h4": "font-size: 14px; font-weight: bold; color: #333; margin: 12px 0 6px 0; line-height: 1.5;",
    "p": (
        "font-size: 14px; color: #333; line-height: 1.75; margin: 10px 0; "
        "text-align: left; word-break: break-word;"
    ),
    "ul": "margin: 10px 0; padding-left: 2em; list-style-type: disc;",
    "ol": "margin: 10px 0; padding-left: 2em; list-style-type: decimal;",
    "li": "font-size: 14px; color: #333; line-height: 1.75; margin: 6px 0; text-align: left;",
    "blockquote": (
        "margin: 12px 0; padding: 10px 15px; background-color: #f7f7f7; "
        "border-left: 3px solid #ddd; color: #666; font-size: 14px; line-height: 1.6;"
    ),
    "pre": (
        "margin: 12px 0; padding: 12px; background-color: #f5f5f5; "
        "border-radius: 4px; overflow-x: auto; font-size: 13px;"
    ),
    "code": "font-family: Consolas, Monaco, monospace; font-size: 13px;",
    "img": "max-width: 100%; height: auto; display: block; margin: 12px auto;",
    "a": "color: #576b95; text-decoration: none;",
    "strong": "font-weight: bold; color: #333;",
    "hr": "margin: 20px 0; border: none; border-top: 1px solid #eee;",
    "table": "width: 100%; border-collapse: collapse; margin: 12px 0; font-size: 13px;",
    "th": (
        "border: 1px solid #ddd; padding: 8px; background-color: #f5f5f5; "
        "font-weight: bold; text-align: left;"
    ),
    "td": "border: 1px solid #ddd; padding: 8px; text-align: left;",
}

CONTENT_SECTION_STYLE = "padding:15px;margin:0;background:#fff;"
FOOTER_SECTION_STYLE = (
    "padding:15px;margin-top:15px;background:#f7f7f7;"
    "text-align:center;font-size:12px;color:#999;"
)
FOOTER_END_STYLE = "margin:5px 0;"
FOOTER_TAGLINE_STYLE = "margin:8px 0;"


class FooterConfig(BaseModel):
    """Static sign-off appended below every article."""

    account_name: str = "硅基Daily"
    end_text: str = "— END —"
    tagline: str = "关注「{account_name}」，获取全球 AI 科技最新动态"

    @property
    def tagline_text(self) -> str:
        return self.tagline.format(account_name=self.account_name)
