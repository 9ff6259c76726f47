"""Tests for menu settings."""

import json

import pytest
from pydantic import ValidationError

from codemenu import logger as codemenu_logger
from codemenu.core.config import MenuSettings, configure_logging, load_settings


def test_defaults():
    settings = MenuSettings()
    assert settings.sort_completions is True
    assert settings.max_matches == 100
    assert settings.strong_match_threshold == 0.2


def test_load_settings_from_file(tmp_path):
    path = tmp_path / "codemenu.json"
    path.write_text(json.dumps({"max_matches": 25, "sort_completions": False}))

    settings = load_settings(path)

    assert settings.max_matches == 25
    assert settings.sort_completions is False
    assert settings.filter_chunk_size == 256


def test_load_settings_without_path_uses_defaults():
    assert load_settings() == MenuSettings()


def test_missing_explicit_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_settings(path)


@pytest.mark.parametrize(
    "data",
    [
        {"max_matches": 0},
        {"strong_match_threshold": 1.5},
        {"filter_chunk_size": -1},
        {"unknown_option": True},
    ],
)
def test_invalid_settings_raise(tmp_path, data):
    path = tmp_path / "codemenu.json"
    path.write_text(json.dumps(data))
    with pytest.raises(ValidationError):
        load_settings(path)


def test_settings_are_frozen():
    settings = MenuSettings()
    with pytest.raises(ValidationError):
        settings.max_matches = 5


def test_configure_logging_writes_at_configured_level(tmp_path, monkeypatch):
    log_file = tmp_path / "codemenu.log"
    configure_logging(MenuSettings(log_level="DEBUG"), log_file=log_file)
    try:
        load_settings()
    finally:
        monkeypatch.setattr(codemenu_logger, "_log_file_path", None)
        configure_logging(MenuSettings(log_level="WARNING"))

    assert "No settings file" in log_file.read_text()
