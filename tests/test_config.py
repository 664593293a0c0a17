"""Tests for src/config.py — NotedraftConfig, TOML loading, CLI overrides."""

from pathlib import Path

import pytest

from notedraft.config import NotedraftConfig, load_config, merge_cli_overrides
from notedraft.errors import ConfigError
from notedraft.notes.models import SectionState

ENV_VARS = ("OBSIDIAN_NOTES_PATH", "WECHAT_ACCOUNT_NAME", "NOTEDRAFT_KEY_CONTENT_ONLY")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    """Isolate tests from the developer's env vars and global config."""
    for key in ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("notedraft.config.GLOBAL_CONFIG_PATH", tmp_path / "no-global.toml")


class TestNotedraftConfigDefaults:
    """Test that NotedraftConfig has sensible defaults."""

    def test_default_notes(self):
        cfg = NotedraftConfig()
        assert cfg.notes.root == ""
        assert cfg.notes.extension == ".md"
        assert cfg.notes.attachments_dir == "attachments"

    def test_default_publish(self):
        cfg = NotedraftConfig()
        assert cfg.publish.title_max_length == 64
        assert cfg.publish.digest_max_length == 120
        assert cfg.publish.key_content_only is False
        assert cfg.publish.merge_title == "AI 资讯汇总 {date}"

    def test_default_footer(self):
        footer = NotedraftConfig().to_footer_config()
        assert footer.end_text == "— END —"
        assert footer.tagline_text == "关注「硅基Daily」，获取全球 AI 科技最新动态"

    def test_notes_root_required(self):
        with pytest.raises(ConfigError):
            NotedraftConfig().notes_root()

    def test_notes_root_expands_user(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        cfg = NotedraftConfig.model_validate({"notes": {"root": "~/vault"}})
        assert cfg.notes_root() == tmp_path / "vault"


class TestConversions:
    def test_filter_keywords(self):
        cfg = NotedraftConfig.model_validate(
            {"filter": {"keep_keywords": ["highlights"], "skip_keywords": ["appendix"]}}
        )
        keywords = cfg.to_filter_keywords()
        assert keywords.classify("## Highlights") is SectionState.KEEP_SECTION
        assert keywords.classify("## Appendix") is SectionState.SKIP_SECTION
        assert keywords.classify("## Summary") is SectionState.DEFAULT

    def test_publish_options_author_defaults_to_account(self):
        cfg = NotedraftConfig.model_validate({"render": {"account_name": "Lab Notes"}})
        assert cfg.to_publish_options().author == "Lab Notes"

    def test_publish_options_explicit_author(self):
        cfg = NotedraftConfig.model_validate({"publish": {"author": "Ed", "title_max_length": 30}})
        options = cfg.to_publish_options()
        assert options.author == "Ed"
        assert options.title_max_length == 30


class TestLoadConfig:
    """Test load_config with TOML files."""

    def test_load_from_explicit_path(self, tmp_path):
        toml_path = tmp_path / "custom.toml"
        toml_path.write_text(
            '[notes]\nroot = "/vault/daily"\n\n[publish]\nkey_content_only = true\n',
            encoding="utf-8",
        )
        cfg = load_config(toml_path)
        assert cfg.notes.root == "/vault/daily"
        assert cfg.publish.key_content_only is True

    def test_load_missing_path_returns_defaults(self, tmp_path):
        cfg = load_config(tmp_path / "nonexistent.toml")
        assert cfg == NotedraftConfig()

    def test_load_searches_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".notedraft.toml").write_text(
            '[render]\naccount_name = "CWD Daily"\n', encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)
        assert load_config().render.account_name == "CWD Daily"

    def test_load_global_config(self, tmp_path, monkeypatch):
        global_path = tmp_path / "global.toml"
        global_path.write_text('[notes]\nextension = ".markdown"\n', encoding="utf-8")
        monkeypatch.setattr("notedraft.config.GLOBAL_CONFIG_PATH", global_path)
        empty_dir = tmp_path / "empty"
        empty_dir.mkdir()
        monkeypatch.chdir(empty_dir)
        assert load_config().notes.extension == ".markdown"

    def test_invalid_toml_returns_defaults(self, tmp_path):
        toml_path = tmp_path / "broken.toml"
        toml_path.write_text("[notes\nroot = ", encoding="utf-8")
        assert load_config(toml_path) == NotedraftConfig()

    def test_unicode_values(self, tmp_path):
        toml_path = tmp_path / "zh.toml"
        toml_path.write_text('[filter]\nkeep_keywords = ["亮点"]\n', encoding="utf-8")
        assert load_config(toml_path).filter.keep_keywords == ["亮点"]


class TestEnvVars:
    def test_env_overrides_toml(self, tmp_path, monkeypatch):
        toml_path = tmp_path / "c.toml"
        toml_path.write_text('[notes]\nroot = "/from/toml"\n', encoding="utf-8")
        monkeypatch.setenv("OBSIDIAN_NOTES_PATH", "/from/env")
        monkeypatch.setenv("WECHAT_ACCOUNT_NAME", "Env Daily")

        cfg = load_config(toml_path)

        assert cfg.notes.root == "/from/env"
        assert cfg.render.account_name == "Env Daily"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("1", True), ("YES", True), ("false", False), ("0", False)],
    )
    def test_key_content_only_env(self, monkeypatch, tmp_path, raw, expected):
        monkeypatch.setenv("NOTEDRAFT_KEY_CONTENT_ONLY", raw)
        assert load_config(tmp_path / "none.toml").publish.key_content_only is expected


class TestMergeCliOverrides:
    def test_overrides_applied(self, tmp_path):
        cfg = merge_cli_overrides(
            NotedraftConfig(),
            notes_root=tmp_path,
            account_name="CLI Daily",
            key_content_only=True,
        )
        assert cfg.notes.root == str(tmp_path)
        assert cfg.render.account_name == "CLI Daily"
        assert cfg.publish.key_content_only is True

    def test_none_values_ignored(self):
        base = NotedraftConfig.model_validate({"notes": {"root": "/vault"}})
        cfg = merge_cli_overrides(base, notes_root=None, key_content_only=None)
        assert cfg.notes.root == "/vault"
        assert cfg.publish.key_content_only is False

    def test_unknown_keys_ignored(self):
        assert merge_cli_overrides(NotedraftConfig(), colour="blue") == NotedraftConfig()
