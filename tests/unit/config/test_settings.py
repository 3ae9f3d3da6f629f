"""Tests for the settings configuration module."""

import json
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from scriptboard.config import (
    BUILTIN_COLUMNS,
    ScriptBoardSettings,
    get_settings,
    get_settings_for_cli,
    reset_settings,
    set_settings,
)
from scriptboard.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def reset_global_settings():
    """Reset global settings state around each test."""
    reset_settings()
    yield
    reset_settings()


class TestScriptBoardSettings:
    """Test settings values and validation."""

    def test_defaults(self, monkeypatch, tmp_path):
        """Test default values."""
        monkeypatch.delenv("SCRIPTBOARD_DATABASE_PATH", raising=False)
        monkeypatch.chdir(tmp_path)

        settings = ScriptBoardSettings()

        assert settings.database_path == tmp_path.resolve() / "scriptboard.db"
        assert settings.database_journal_mode == "WAL"
        assert settings.log_level == "WARNING"
        assert settings.llm_endpoint is None
        assert settings.llm_temperature == 0.4
        assert settings.analysis_max_chars == 30000
        assert settings.default_columns == BUILTIN_COLUMNS

    def test_environment_variables(self, monkeypatch):
        """Test SCRIPTBOARD_ variables are read."""
        monkeypatch.setenv("SCRIPTBOARD_LLM_ENDPOINT", "http://llm.local/v1")
        monkeypatch.setenv("SCRIPTBOARD_ANALYSIS_MAX_CHARS", "500")
        monkeypatch.setenv("SCRIPTBOARD_DEFAULT_COLUMNS", '["todo", "done"]')

        settings = ScriptBoardSettings()

        assert settings.llm_endpoint == "http://llm.local/v1"
        assert settings.analysis_max_chars == 500
        assert settings.default_columns == ["todo", "done"]

    def test_log_level_case_insensitive(self):
        """Test log levels are normalised to upper case."""
        assert ScriptBoardSettings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Test unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            ScriptBoardSettings(log_level="LOUD")

    @pytest.mark.parametrize("value", ["default", "auto", ""])
    def test_placeholder_model_is_unset(self, value):
        """Test placeholder model names mean no model."""
        assert ScriptBoardSettings(llm_model=value).llm_model is None

    def test_columns_deduplicated(self):
        """Test repeated and blank columns are dropped."""
        settings = ScriptBoardSettings(default_columns=["a", " b ", "a", ""])

        assert settings.default_columns == ["a", "b"]

    def test_columns_cannot_be_empty(self):
        """Test a board needs at least one column."""
        with pytest.raises(ValidationError):
            ScriptBoardSettings(default_columns=["  "])

    def test_path_expansion(self, monkeypatch, tmp_path):
        """Test environment variables in paths are expanded."""
        monkeypatch.setenv("BOARD_DIR", str(tmp_path))

        settings = ScriptBoardSettings(database_path="$BOARD_DIR/board.db")

        assert settings.database_path == (tmp_path / "board.db").resolve()


class TestConfigFiles:
    """Test loading settings from files."""

    def test_yaml(self, tmp_path):
        """Test YAML configuration."""
        config = tmp_path / "scriptboard.yaml"
        config.write_text(yaml.safe_dump({"llm_model": "gpt-test", "debug": True}))

        settings = ScriptBoardSettings.from_file(config)

        assert settings.llm_model == "gpt-test"
        assert settings.debug is True

    def test_toml(self, tmp_path):
        """Test TOML configuration."""
        config = tmp_path / "scriptboard.toml"
        config.write_text('analysis_max_chars = 1234\nlog_format = "json"\n')

        settings = ScriptBoardSettings.from_file(config)

        assert settings.analysis_max_chars == 1234
        assert settings.log_format == "json"

    def test_json(self, tmp_path):
        """Test JSON configuration."""
        config = tmp_path / "scriptboard.json"
        config.write_text(json.dumps({"default_columns": ["x", "y"]}))

        assert ScriptBoardSettings.from_file(config).default_columns == ["x", "y"]

    def test_unsupported_format(self, tmp_path):
        """Test unknown extensions are rejected."""
        config = tmp_path / "scriptboard.ini"
        config.write_text("[x]")

        with pytest.raises(ConfigurationError) as exc_info:
            ScriptBoardSettings.from_file(config)

        assert ".ini" in exc_info.value.message

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ScriptBoardSettings.from_file(tmp_path / "nope.yaml")

    def test_common_key_mistake(self, tmp_path):
        """Test misnamed keys get a helpful error."""
        config = tmp_path / "scriptboard.yaml"
        config.write_text(yaml.safe_dump({"db_path": "x.db"}))

        with pytest.raises(ConfigurationError) as exc_info:
            ScriptBoardSettings.from_file(config)

        assert "database_path" in exc_info.value.hint

    def test_misspelt_board_setting(self, tmp_path):
        """Test a misspelt default_columns key is refused, not ignored."""
        config = tmp_path / "scriptboard.toml"
        config.write_text('default_column = ["unscheduled", "shot"]\n')

        with pytest.raises(ConfigurationError) as exc_info:
            ScriptBoardSettings.from_file(config)

        assert "default_columns" in exc_info.value.hint

    def test_later_files_override(self, tmp_path):
        """Test precedence across config files and CLI arguments."""
        first = tmp_path / "a.yaml"
        first.write_text(yaml.safe_dump({"llm_model": "one", "analysis_max_chars": 10}))
        second = tmp_path / "b.json"
        second.write_text(json.dumps({"llm_model": "two"}))

        settings = ScriptBoardSettings.from_multiple_sources(
            config_files=[first, second, tmp_path / "missing.yaml"],
            cli_args={"analysis_max_chars": 99, "llm_timeout": None},
        )

        assert settings.llm_model == "two"
        assert settings.analysis_max_chars == 99
        assert settings.llm_timeout == 120


class TestGlobalSettings:
    """Test the process-wide settings instance."""

    def test_get_settings_cached(self):
        """Test the same instance is returned until reset."""
        first = get_settings()

        assert get_settings() is first
        reset_settings()
        assert get_settings() is not first

    def test_set_settings(self, tmp_path):
        """Test an explicit instance replaces the global one."""
        settings = ScriptBoardSettings(database_path=tmp_path / "x.db")

        set_settings(settings)

        assert get_settings() is settings

    def test_cli_overrides(self, tmp_path):
        """Test CLI values override and None values are skipped."""
        settings = get_settings_for_cli(
            None, {"database_path": tmp_path / "cli.db", "llm_model": None}
        )

        assert settings.database_path == (tmp_path / "cli.db").resolve()

    def test_cli_config_file(self, tmp_path):
        """Test an explicit config file is loaded."""
        config = tmp_path / "custom.yaml"
        config.write_text(yaml.safe_dump({"llm_model": "from-file"}))

        assert get_settings_for_cli(Path(config)).llm_model == "from-file"

    def test_cli_missing_config_file(self, tmp_path):
        """Test a missing explicit config file is an error."""
        with pytest.raises(FileNotFoundError):
            get_settings_for_cli(tmp_path / "missing.yaml")
