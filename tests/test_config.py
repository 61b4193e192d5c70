"""Tests for environment-driven settings and logging."""

import pytest

from wiki_action.common import config
from wiki_action.common.config import load_settings
from wiki_action.common.errors import ConfigurationError
from wiki_action.common.log import debug, log

ENV = ("WIKI_ACTION_API_URL", "WIKI_ACTION_USER_AGENT", "WIKI_ACTION_USERNAME",
       "WIKI_ACTION_PASSWORD", "WIKI_ACTION_TIMEOUT", "WIKI_ACTION_VERBOSE")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env) -> None:
        s = load_settings()
        assert s.api_url == config.API_URL
        assert s.user_agent == config.UA
        assert s.username is None
        assert s.password is None
        assert s.timeout == config.TIMEOUT
        assert s.verbose is False

    def test_environment(self, clean_env) -> None:
        clean_env.setenv("WIKI_ACTION_API_URL", "https://de.wikipedia.org/w/api.php")
        clean_env.setenv("WIKI_ACTION_USERNAME", "Bot@tool")
        clean_env.setenv("WIKI_ACTION_TIMEOUT", "12.5")
        clean_env.setenv("WIKI_ACTION_VERBOSE", "yes")
        s = load_settings()
        assert s.api_url == "https://de.wikipedia.org/w/api.php"
        assert s.username == "Bot@tool"
        assert s.timeout == 12.5
        assert s.verbose is True

    def test_dotenv_file(self, clean_env, tmp_path) -> None:
        # Recorded so teardown removes what load_dotenv puts in os.environ.
        clean_env.setenv("WIKI_ACTION_USER_AGENT", "placeholder")
        clean_env.delenv("WIKI_ACTION_USER_AGENT")
        (tmp_path / ".env").write_text("WIKI_ACTION_USER_AGENT=dotenv-agent/1.0\n", encoding="utf-8")
        assert load_settings().user_agent == "dotenv-agent/1.0"

    def test_bad_timeout(self, clean_env) -> None:
        clean_env.setenv("WIKI_ACTION_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError):
            load_settings()


class TestLog:
    def test_log_prints(self, capsys) -> None:
        log("[save] 3 rows")
        assert capsys.readouterr().out == "[save] 3 rows\n"

    def test_debug_quiet_by_default(self, clean_env, capsys) -> None:
        debug("[get] action=query")
        assert capsys.readouterr().out == ""

    def test_debug_verbose(self, clean_env, capsys) -> None:
        clean_env.setenv("WIKI_ACTION_VERBOSE", "1")
        debug("[get] action=query")
        assert capsys.readouterr().out == "[get] action=query\n"

    def test_debug_verbose_from_dotenv(self, clean_env, tmp_path, capsys) -> None:
        # Recorded so teardown removes what load_dotenv puts in os.environ.
        clean_env.setenv("WIKI_ACTION_VERBOSE", "0")
        clean_env.delenv("WIKI_ACTION_VERBOSE")
        (tmp_path / ".env").write_text("WIKI_ACTION_VERBOSE=on\n", encoding="utf-8")
        debug("[stream] page 1: done.")
        assert capsys.readouterr().out == "[stream] page 1: done.\n"
