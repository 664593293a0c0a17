"""Unified configuration loaded from .notedraft.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from notedraft.errors import ConfigError
from notedraft.notes.models import DEFAULT_KEEP_KEYWORDS, DEFAULT_SKIP_KEYWORDS, FilterKeywords
from notedraft.notes.reader import MERGE_TITLE_TEMPLATE
from notedraft.publish.models import PublishOptions
from notedraft.render.styles import FooterConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".notedraft.toml"
CONFIG_SEARCH_PATHS = [Path(".")]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "notedraft" / "config.toml"

_TRUTHY = ("true", "1", "yes")


class NotesSectionConfig(BaseModel):
    """[notes] section."""

    root: str = ""
    extension: str = ".md"
    attachments_dir: str = "attachments"


class FilterSectionConfig(BaseModel):
    """[filter] section. Keywords for key-content filtering."""

    keep_keywords: list[str] = Field(default_factory=lambda: list(DEFAULT_KEEP_KEYWORDS))
    skip_keywords: list[str] = Field(default_factory=lambda: list(DEFAULT_SKIP_KEYWORDS))


class RenderSectionConfig(BaseModel):
    """[render] section."""

    account_name: str = "硅基Daily"
    footer_end: str = "— END —"
    footer_tagline: str = "关注「{account_name}」，获取全球 AI 科技最新动态"


class PublishSectionConfig(BaseModel):
    """[publish] section."""

    title_max_length: int = 64
    digest_max_length: int = 120
    merge_title: str = MERGE_TITLE_TEMPLATE
    key_content_only: bool = False
    author: str = ""


class NotedraftConfig(BaseModel):
    """Top-level configuration model."""

    notes: NotesSectionConfig = Field(default_factory=NotesSectionConfig)
    filter: FilterSectionConfig = Field(default_factory=FilterSectionConfig)
    render: RenderSectionConfig = Field(default_factory=RenderSectionConfig)
    publish: PublishSectionConfig = Field(default_factory=PublishSectionConfig)

    def notes_root(self) -> Path:
        """Return the configured notes directory.

        Raises:
            ConfigError: If no notes root is configured.
        """
        if not self.notes.root:
            raise ConfigError(
                "No notes directory configured; set [notes] root or OBSIDIAN_NOTES_PATH"
            )
        return Path(self.notes.root).expanduser()

    def to_filter_keywords(self) -> FilterKeywords:
        return FilterKeywords(
            keep=list(self.filter.keep_keywords),
            skip=list(self.filter.skip_keywords),
        )

    def to_footer_config(self) -> FooterConfig:
        return FooterConfig(
            account_name=self.render.account_name,
            end_text=self.render.footer_end,
            tagline=self.render.footer_tagline,
        )

    def to_publish_options(self) -> PublishOptions:
        """Convert to PublishOptions; the author defaults to the account name."""
        return PublishOptions(
            key_content_only=self.publish.key_content_only,
            title_max_length=self.publish.title_max_length,
            digest_max_length=self.publish.digest_max_length,
            author=self.publish.author or self.render.account_name,
            merge_title=self.publish.merge_title,
        )


def load_config(path: str | Path | None = None) -> NotedraftConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .notedraft.toml in CWD
    3. ~/.config/notedraft/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged NotedraftConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = NotedraftConfig.model_validate(data) if data else NotedraftConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: NotedraftConfig, **cli_kwargs: object) -> NotedraftConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "notes_root": ("notes", "root"),
        "account_name": ("render", "account_name"),
        "key_content_only": ("publish", "key_content_only"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = str(value) if isinstance(value, Path) else value

    return NotedraftConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: NotedraftConfig) -> NotedraftConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "OBSIDIAN_NOTES_PATH": ("notes", "root"),
        "WECHAT_ACCOUNT_NAME": ("render", "account_name"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    key_only_raw = os.environ.get("NOTEDRAFT_KEY_CONTENT_ONLY")
    if key_only_raw is not None:
        data["publish"]["key_content_only"] = key_only_raw.lower() in _TRUTHY

    return NotedraftConfig.model_validate(data)
