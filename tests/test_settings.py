"""
Tests for persistent settings.

Usage:
    pytest tests/test_settings.py
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sigmar import settings


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(settings, "SETTINGS_FILE", path)
    return path


def test_defaults_when_missing(config_file):
    loaded = settings.load_settings()
    assert loaded == settings.DEFAULT_SETTINGS
    assert loaded is not settings.DEFAULT_SETTINGS
    assert loaded["strategy_name"] == "backtracking"
    assert loaded["search_timeout_sec"] is None


def test_save_and_load(config_file):
    saved = settings.load_settings()
    saved["strategy_name"] = "iterative"
    saved["click_delay_ms"] = 80
    settings.save_settings(saved)

    assert json.loads(config_file.read_text(encoding="utf-8"))["strategy_name"] == "iterative"
    loaded = settings.load_settings()
    assert loaded["strategy_name"] == "iterative"
    assert loaded["click_delay_ms"] == 80


def test_missing_keys_use_defaults(config_file):
    config_file.write_text('{"auto_new_game": false}', encoding="utf-8")
    loaded = settings.load_settings()
    assert loaded["auto_new_game"] is False
    assert loaded["new_game_wait_ms"] == 5200


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_bad_file_uses_defaults(config_file, content):
    config_file.write_text(content, encoding="utf-8")
    assert settings.load_settings() == settings.DEFAULT_SETTINGS
