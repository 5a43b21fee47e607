"""
Tests for settings loading and description overrides.
"""

import json

import pytest

from github_mcp import config
from github_mcp.config import Settings, api_base_url, load_settings
from github_mcp.translations import TranslationHelper

ENV_VARS = [
    "GITHUB_PERSONAL_ACCESS_TOKEN", "GITHUB_HOST", "GITHUB_READ_ONLY",
    "GITHUB_EXCLUDE_TOOLS", "GITHUB_INCLUDE_TOOLS", "GITHUB_TRANSLATIONS_FILE",
    "MCP_HOST", "MCP_PORT", "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of the picture
    monkeypatch.setattr(config, "load_dotenv", lambda *a, **kw: False)


class TestApiBaseUrl:

    def test_default(self):
        assert api_base_url("") == "https://api.github.com/"

    def test_enterprise_host(self):
        assert api_base_url("github.example.com") == "https://github.example.com/api/v3/"

    def test_keeps_scheme(self):
        assert api_base_url("http://ghe.local/") == "http://ghe.local/api/v3/"


class TestFromEnv:

    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.token == ""
        assert settings.read_only is False
        assert settings.port == 8000
        assert settings.api_url == "https://api.github.com/"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_PERSONAL_ACCESS_TOKEN", "ghp_x")
        monkeypatch.setenv("GITHUB_READ_ONLY", "true")
        monkeypatch.setenv("GITHUB_EXCLUDE_TOOLS", "push_files, fork_repository")
        monkeypatch.setenv("MCP_PORT", "9001")

        settings = Settings.from_env()

        assert settings.token == "ghp_x"
        assert settings.port == 9001
        filters = settings.filter_config()
        assert filters.read_only is True
        assert filters.exclude == {"push_files", "fork_repository"}

    @pytest.mark.parametrize("raw", ["0", "false", "no", ""])
    def test_falsy_read_only(self, monkeypatch, raw):
        monkeypatch.setenv("GITHUB_READ_ONLY", raw)
        assert Settings.from_env().read_only is False


class TestLoadSettings:

    def test_flags_override_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_INCLUDE_TOOLS", "get_me")
        monkeypatch.setenv("MCP_PORT", "9001")

        settings = load_settings(["--include-tools", "get_issue,list_issues", "--read-only"])

        assert settings.include_tools == "get_issue,list_issues"
        assert settings.read_only is True
        assert settings.port == 9001

    def test_unset_flags_keep_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_READ_ONLY", "1")
        settings = load_settings([])
        assert settings.read_only is True

    def test_gh_host_flag(self):
        settings = load_settings(["--gh-host", "ghe.corp"])
        assert settings.api_url == "https://ghe.corp/api/v3/"


class TestTranslationHelper:

    def test_default(self):
        t = TranslationHelper()
        assert t("TOOL_GET_ME_DESCRIPTION", "Get me") == "Get me"

    def test_override(self):
        t = TranslationHelper({"TOOL_GET_ME_DESCRIPTION": "Who am I"})
        assert t("tool_get_me_description", "Get me") == "Who am I"

    def test_environment_wins(self, monkeypatch):
        monkeypatch.setenv("GITHUB_MCP_TOOL_GET_ME_DESCRIPTION", "From env")
        t = TranslationHelper({"TOOL_GET_ME_DESCRIPTION": "Who am I"})
        assert t("TOOL_GET_ME_DESCRIPTION", "Get me") == "From env"

    def test_from_file(self, tmp_path):
        path = tmp_path / "translations.json"
        path.write_text(json.dumps({"tool_get_issue_description": "Fetch an issue"}))

        t = TranslationHelper.from_file(path)

        assert t("TOOL_GET_ISSUE_DESCRIPTION", "x") == "Fetch an issue"

    def test_missing_file_is_empty(self, tmp_path):
        t = TranslationHelper.from_file(tmp_path / "nope.json")
        assert t("KEY", "default") == "default"

    def test_file_must_hold_object(self, tmp_path):
        path = tmp_path / "translations.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            TranslationHelper.from_file(path)

    def test_dump_lists_resolved_keys(self):
        t = TranslationHelper()
        t("B_KEY", "b")
        t("A_KEY", "a")
        assert t.dump() == {"A_KEY": "a", "B_KEY": "b"}
