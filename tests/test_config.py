"""Tests for configuration loading module."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from progress_printer.config import (
    ConfigError,
    ReporterConfig,
    load_config,
    load_from_env,
    load_from_json,
)


def clean_env(**extra) -> dict:
    """Current environment without PROGRESS_PRINTER_* variables, plus extras."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("PROGRESS_PRINTER_")}
    env.update(extra)
    return env


class TestReporterConfig:
    """Tests for ReporterConfig defaults."""

    def test_defaults(self):
        config = ReporterConfig()
        assert config.bar_width == 80
        assert config.rule_width == 80
        assert config.indent == 4
        assert config.max_cause_depth == 32
        assert config.color is True


class TestLoadFromJson:
    """Tests for load_from_json function."""

    def test_valid_config(self, tmp_path: Path):
        """Load a valid settings file."""
        config_file = tmp_path / "printer.json"
        config_file.write_text(json.dumps({"bar_width": 60, "indent": 2, "color": False}))

        settings = load_from_json(str(config_file))

        assert settings == {"bar_width": 60, "indent": 2, "color": False}

    def test_missing_file_raises_error(self, tmp_path: Path):
        """Raise ConfigError when config file doesn't exist."""
        config_file = tmp_path / "nonexistent.json"

        with pytest.raises(ConfigError, match="Config file not found"):
            load_from_json(str(config_file))

    def test_malformed_json_raises_error(self, tmp_path: Path):
        """Raise ConfigError when config file contains invalid JSON."""
        config_file = tmp_path / "printer.json"
        config_file.write_text("{ invalid json }")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_from_json(str(config_file))

    def test_non_object_raises_error(self, tmp_path: Path):
        config_file = tmp_path / "printer.json"
        config_file.write_text("[1, 2]")

        with pytest.raises(ConfigError, match="JSON object"):
            load_from_json(str(config_file))

    def test_unknown_setting_raises_error(self, tmp_path: Path):
        config_file = tmp_path / "printer.json"
        config_file.write_text(json.dumps({"bar_colour": "red"}))

        with pytest.raises(ConfigError, match="Unknown setting 'bar_colour'"):
            load_from_json(str(config_file))

    def test_invalid_integer_raises_error(self, tmp_path: Path):
        config_file = tmp_path / "printer.json"
        config_file.write_text(json.dumps({"bar_width": "wide"}))

        with pytest.raises(ConfigError, match="Invalid integer"):
            load_from_json(str(config_file))

    def test_boolean_is_not_an_integer(self, tmp_path: Path):
        config_file = tmp_path / "printer.json"
        config_file.write_text(json.dumps({"indent": True}))

        with pytest.raises(ConfigError, match="Invalid integer"):
            load_from_json(str(config_file))

    def test_below_minimum_raises_error(self, tmp_path: Path):
        config_file = tmp_path / "printer.json"
        config_file.write_text(json.dumps({"bar_width": 0}))

        with pytest.raises(ConfigError, match="must be at least 1"):
            load_from_json(str(config_file))

    def test_zero_indent_allowed(self, tmp_path: Path):
        config_file = tmp_path / "printer.json"
        config_file.write_text(json.dumps({"indent": 0}))

        assert load_from_json(str(config_file)) == {"indent": 0}


class TestLoadFromEnv:
    """Tests for load_from_env function."""

    def test_valid_env_vars_parsed_correctly(self):
        """Parse valid PROGRESS_PRINTER_* environment variables."""
        env_vars = clean_env(
            PROGRESS_PRINTER_BAR_WIDTH="50",
            PROGRESS_PRINTER_MAX_CAUSE_DEPTH="5",
            PROGRESS_PRINTER_COLOR="no",
        )

        with patch.dict(os.environ, env_vars, clear=True):
            settings = load_from_env()

        assert settings == {"bar_width": 50, "max_cause_depth": 5, "color": False}

    def test_no_vars_returns_empty_dict(self):
        with patch.dict(os.environ, clean_env(), clear=True):
            assert load_from_env() == {}

    def test_empty_value_ignored(self):
        with patch.dict(os.environ, clean_env(PROGRESS_PRINTER_INDENT=""), clear=True):
            assert load_from_env() == {}

    def test_invalid_boolean_raises_error(self):
        with patch.dict(os.environ, clean_env(PROGRESS_PRINTER_COLOR="maybe"), clear=True):
            with pytest.raises(ConfigError, match="PROGRESS_PRINTER_COLOR"):
                load_from_env()

    def test_invalid_integer_raises_error(self):
        with patch.dict(os.environ, clean_env(PROGRESS_PRINTER_RULE_WIDTH="-4"), clear=True):
            with pytest.raises(ConfigError, match="must be at least 1"):
                load_from_env()


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults_without_sources(self):
        with patch.dict(os.environ, clean_env(), clear=True):
            assert load_config() == ReporterConfig()

    def test_json_applied(self, tmp_path: Path):
        config_file = tmp_path / "printer.json"
        config_file.write_text(json.dumps({"rule_width": 40}))

        with patch.dict(os.environ, clean_env(), clear=True):
            config = load_config(str(config_file))

        assert config.rule_width == 40
        assert config.bar_width == 80

    def test_env_vars_take_priority(self, tmp_path: Path):
        """Environment variables override the JSON file."""
        config_file = tmp_path / "printer.json"
        config_file.write_text(json.dumps({"bar_width": 40, "indent": 8}))

        with patch.dict(os.environ, clean_env(PROGRESS_PRINTER_BAR_WIDTH="20"), clear=True):
            config = load_config(str(config_file))

        assert config.bar_width == 20
        assert config.indent == 8

    def test_missing_json_raises_error(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "missing.json"))
