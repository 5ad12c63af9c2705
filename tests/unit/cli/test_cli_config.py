"""Unit tests for lessonmark CLI configuration loading.

This module tests configuration file discovery, loading in each supported
format and conversion of loaded values into parser options.
"""

import argparse
import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from lessonmark.cli.config import (
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    options_from_config,
)
from lessonmark.exceptions import ConfigurationError
from lessonmark.options import ParserOptions


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    monkeypatch.delenv("LESSONMARK_CONFIG", raising=False)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery."""

    def test_find_in_start_dir(self, tmp_path):
        config_file = tmp_path / ".lessonmark.toml"
        config_file.write_text('locale = "en"\n')

        assert find_config_in_parents(tmp_path) == config_file

    def test_find_in_parent_dir(self, tmp_path):
        config_file = tmp_path / ".lessonmark.yaml"
        config_file.write_text("locale: en\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_in_parents(nested) == config_file

    def test_toml_has_priority_over_json(self, tmp_path):
        (tmp_path / ".lessonmark.json").write_text("{}")
        toml_file = tmp_path / ".lessonmark.toml"
        toml_file.write_text("")

        assert find_config_in_parents(tmp_path) == toml_file

    def test_pyproject_with_section(self, tmp_path):
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.lessonmark]\nstatic_host = "https://cdn.example"\n')

        assert find_config_in_parents(tmp_path) == pyproject

    def test_pyproject_without_section_is_skipped(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        nested = tmp_path / "sub"
        nested.mkdir()

        assert find_config_in_parents(nested) != tmp_path / "pyproject.toml"

    def test_env_var_overrides_discovery(self, tmp_path, monkeypatch):
        (tmp_path / ".lessonmark.toml").write_text("")
        explicit = tmp_path / "custom.json"
        explicit.write_text("{}")
        monkeypatch.setenv("LESSONMARK_CONFIG", str(explicit))

        assert discover_config_file(tmp_path) == explicit

    def test_home_directory_fallback(self, tmp_path):
        home = tmp_path / "home"
        home.mkdir()
        home_config = home / ".lessonmark.json"
        home_config.write_text("{}")
        work = tmp_path / "work"
        work.mkdir()

        with patch("lessonmark.cli.config.find_config_in_parents", return_value=None):
            with patch("lessonmark.cli.config.Path.home", return_value=home):
                assert discover_config_file(work) == home_config


@pytest.mark.unit
@pytest.mark.cli
class TestConfigLoading:
    """Test loading configuration files in each format."""

    def test_load_toml(self, tmp_path):
        config_file = tmp_path / ".lessonmark.toml"
        config_file.write_text('locale = "en"\nmax_nesting_depth = 10\n')

        assert load_config_file(config_file) == {"locale": "en", "max_nesting_depth": 10}

    def test_load_yaml(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text(yaml.safe_dump({"static_host": "https://cdn.example"}))

        assert load_config_file(config_file) == {"static_host": "https://cdn.example"}

    def test_load_empty_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert load_config_file(config_file) == {}

    def test_load_json(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"strict_mode": True}))

        assert load_config_file(str(config_file)) == {"strict_mode": True}

    def test_load_pyproject_section(self, tmp_path):
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "x"\n\n[tool.lessonmark]\nlocale = "en"\n')

        assert load_config_file(pyproject) == {"locale": "en"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(tmp_path / "missing.toml")

    def test_directory(self, tmp_path):
        with pytest.raises(argparse.ArgumentTypeError, match="not a file"):
            load_config_file(tmp_path)

    def test_unsupported_extension(self, tmp_path):
        config_file = tmp_path / "config.ini"
        config_file.write_text("[x]")

        with pytest.raises(argparse.ArgumentTypeError, match="Unsupported"):
            load_config_file(config_file)

    @pytest.mark.parametrize(
        "filename,content",
        [
            ("bad.toml", "locale = "),
            ("bad.json", "{"),
            ("bad.yaml", "a: [1, 2"),
            ("list.json", "[1, 2]"),
            ("list.yaml", "- a\n- b\n"),
        ],
    )
    def test_invalid_content(self, tmp_path, filename, content):
        config_file = tmp_path / filename
        config_file.write_text(content)

        with pytest.raises(argparse.ArgumentTypeError):
            load_config_file(config_file)

    def test_pyproject_section_must_be_table(self, tmp_path):
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool]\nlessonmark = "en"\n')

        with pytest.raises(argparse.ArgumentTypeError, match="must be a table"):
            load_config_file(pyproject)


@pytest.mark.unit
@pytest.mark.cli
class TestOptionsFromConfig:
    """Test building parser options from configuration values."""

    def test_empty_config(self):
        assert options_from_config({}) == ParserOptions()

    def test_values_are_applied(self):
        options = options_from_config({"locale": "en", "resource_web_root": "/lesson"})

        assert options.locale == "en"
        assert options.resource_web_root == "/lesson"

    def test_hyphenated_keys(self):
        assert options_from_config({"static-host": "https://cdn.example"}).static_host == "https://cdn.example"

    def test_base_options_are_updated(self):
        base = ParserOptions(static_host="https://cdn.example")
        options = options_from_config({"locale": "en"}, base=base)

        assert options == ParserOptions(static_host="https://cdn.example", locale="en")

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError, match="Unknown configuration key"):
            options_from_config({"theme": "dark"})

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError):
            options_from_config({"locale": "xx"})

    def test_loaded_file_round_trip(self, tmp_path: Path):
        config_file = tmp_path / ".lessonmark.toml"
        config_file.write_text('locale = "en"\nstrict_mode = true\n')

        options = options_from_config(load_config_file(config_file))

        assert options.locale == "en"
        assert options.strict_mode is True
