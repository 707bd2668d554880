"""
Unit tests for settings, config file handling and logging setup.
"""

import json
import logging
import re

import pytest

from config.logging_config import configure_logging
from config.settings import Settings, get_settings, load_config, resolve_api_key, save_config

TEST_YOUTUBE_API_KEY = "AIza_test_api_key_123456789"

LOG_LINE_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z - (INFO|ERROR|DEBUG|WARNING) - .+$"
)


class TestSettings:

    def test_settings_defaults(self):
        settings = Settings(youtube_api_key=TEST_YOUTUBE_API_KEY)

        assert settings.config_path == "cli_config.json"
        assert settings.log_file == "cli_tool.log"
        assert settings.verbose is False

    @pytest.mark.parametrize("api_key", ["", None])
    def test_settings_require_api_key(self, api_key):
        with pytest.raises(ValueError, match="YouTube API key is required"):
            Settings(youtube_api_key=api_key)

    def test_get_settings_reads_config_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("YOUTUBE_API_KEY", raising=False)
        config_path = tmp_path / "cli_config.json"
        config_path.write_text(json.dumps({"api_key": TEST_YOUTUBE_API_KEY}))

        settings = get_settings(config_path=str(config_path))

        assert settings.youtube_api_key == TEST_YOUTUBE_API_KEY

    def test_get_settings_without_any_key(self, tmp_path, monkeypatch):
        monkeypatch.delenv("YOUTUBE_API_KEY", raising=False)

        with pytest.raises(ValueError):
            get_settings(config_path=str(tmp_path / "missing.json"))


class TestApiKeyResolution:

    @pytest.mark.parametrize("cli_key,config,environ,expected", [
        ("cli", {"api_key": "config"}, {"YOUTUBE_API_KEY": "env"}, "cli"),
        (None, {"api_key": "config"}, {"YOUTUBE_API_KEY": "env"}, "config"),
        (None, {}, {"YOUTUBE_API_KEY": "env"}, "env"),
        ("", {"api_key": ""}, {"YOUTUBE_API_KEY": "env"}, "env"),
        (None, {}, {}, None),
    ])
    def test_precedence(self, cli_key, config, environ, expected):
        assert resolve_api_key(cli_key, config, environ) == expected

    def test_defaults_to_process_environment(self, monkeypatch):
        monkeypatch.setenv("YOUTUBE_API_KEY", "from_env")

        assert resolve_api_key(None, {}) == "from_env"


class TestConfigFile:

    def test_missing_file_gives_empty_config(self, tmp_path):
        assert load_config(tmp_path / "missing.json") == {}

    @pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
    def test_unreadable_config_is_logged_and_ignored(self, tmp_path, caplog, content):
        config_path = tmp_path / "cli_config.json"
        config_path.write_text(content)

        with caplog.at_level(logging.ERROR):
            assert load_config(config_path) == {}

        assert "Failed to load config file" in caplog.text

    def test_save_merges_onto_existing_content(self, tmp_path):
        config_path = tmp_path / "cli_config.json"
        config_path.write_text(json.dumps({"api_key": "old", "theme": "dark"}))

        assert save_config({"api_key": "new"}, config_path) is True

        assert json.loads(config_path.read_text()) == {"api_key": "new", "theme": "dark"}

    def test_save_creates_file(self, tmp_path):
        config_path = tmp_path / "cli_config.json"

        save_config({"api_key": TEST_YOUTUBE_API_KEY}, config_path)

        assert load_config(config_path) == {"api_key": TEST_YOUTUBE_API_KEY}

    def test_save_failure_is_logged(self, tmp_path, caplog):
        config_path = tmp_path / "missing_dir" / "cli_config.json"

        with caplog.at_level(logging.ERROR):
            assert save_config({"api_key": "x"}, config_path) is False

        assert "Failed to save config file" in caplog.text


class TestLoggingSetup:

    def test_log_file_lines(self, tmp_path):
        log_file = tmp_path / "cli_tool.log"
        configure_logging(str(log_file))
        logger = logging.getLogger("tests.logging")

        logger.info("hello")
        logger.error("broken")
        logger.debug("hidden")

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert all(LOG_LINE_PATTERN.match(line) for line in lines)
        assert lines[0].endswith(" - INFO - hello")
        assert lines[1].endswith(" - ERROR - broken")

    def test_verbose_enables_debug(self, tmp_path):
        log_file = tmp_path / "cli_tool.log"
        configure_logging(str(log_file), verbose=True)

        logging.getLogger("tests.logging").debug("details")

        assert " - DEBUG - details" in log_file.read_text(encoding="utf-8")

    def test_log_file_is_appended(self, tmp_path):
        log_file = tmp_path / "cli_tool.log"
        log_file.write_text("earlier line\n", encoding="utf-8")

        configure_logging(str(log_file))
        logging.getLogger("tests.logging").info("later line")

        assert log_file.read_text(encoding="utf-8").startswith("earlier line\n")

    def test_reconfigure_does_not_duplicate_handlers(self, tmp_path):
        log_file = tmp_path / "cli_tool.log"
        configure_logging(str(log_file))
        configure_logging(str(log_file))

        logging.getLogger("tests.logging").info("once")

        assert log_file.read_text(encoding="utf-8").count("once") == 1

    def test_errors_go_to_stderr(self, capsys):
        configure_logging(None)

        logging.getLogger("tests.logging").info("to stdout")
        logging.getLogger("tests.logging").error("to stderr")

        captured = capsys.readouterr()
        assert "to stdout" in captured.out
        assert "to stderr" not in captured.out
        assert "to stderr" in captured.err
