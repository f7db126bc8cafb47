"""Tests for configuration management."""

import copy
import logging

import pytest

from filetools import config
from filetools.config import (
    DEFAULT_CONFIG,
    _merge_config,
    get_display_locale,
    get_log_level,
    load_config,
    save_config,
)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point the configuration at a temporary file."""
    path = tmp_path / "test_config.toml"
    monkeypatch.setattr(config, "CONFIG_FILE", path)
    return path


def test_load_config_without_file_returns_defaults(config_file):
    assert load_config() == DEFAULT_CONFIG
    assert not config_file.exists()


def test_default_config_not_mutated(config_file):
    """Editing a loaded config leaves the built-in defaults untouched."""
    original_default = copy.deepcopy(DEFAULT_CONFIG)

    config1 = load_config()
    config1["display"]["locale"] = "de_DE"
    config1["logging"]["level"] = "DEBUG"

    assert DEFAULT_CONFIG == original_default, "DEFAULT_CONFIG was mutated after load_config()"
    assert load_config()["display"]["locale"] == "en_US"


def test_merge_config_keeps_user_values():
    merged = _merge_config(DEFAULT_CONFIG, {"display": {"locale": "fr_FR"}, "extra": 1})
    assert merged["display"]["locale"] == "fr_FR"
    assert merged["logging"]["level"] == "WARNING"
    assert merged["extra"] == 1
    assert DEFAULT_CONFIG["display"]["locale"] == "en_US"


def test_save_and_load_round_trip(config_file):
    save_config({"display": {"locale": "de_DE"}})
    assert config_file.exists()

    loaded = load_config()
    assert loaded["display"]["locale"] == "de_DE"
    # Missing sections are filled from the defaults
    assert loaded["logging"]["level"] == "WARNING"
    assert get_display_locale() == "de_DE"


def test_corrupt_config_returns_defaults(config_file):
    config_file.write_text("this is [not toml")
    assert load_config() == DEFAULT_CONFIG


def test_save_config_failure_prints_warning(tmp_path, monkeypatch, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    monkeypatch.setattr(config, "CONFIG_FILE", blocker / "config.toml")

    save_config(DEFAULT_CONFIG)

    assert "Failed to save configuration" in capsys.readouterr().err


def test_get_log_level(config_file):
    assert get_log_level() == logging.WARNING

    save_config({"logging": {"level": "debug"}})
    assert get_log_level() == logging.DEBUG

    save_config({"logging": {"level": "chatty"}})
    assert get_log_level() == logging.WARNING
