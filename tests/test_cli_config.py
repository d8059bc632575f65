from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from idlelife.presentation.cli import config


def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    assert config.load_config(tmp_path / "config.json") == {"log_level": "WARNING", "days_per_turn": 1}


def test_load_config_defaults_when_unreadable(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("not json", encoding="utf-8")

    assert config.load_config(path) == config.default_config()


def test_load_config_normalises_values(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"log_level": "debug", "days_per_turn": 9999, "extra": 1}), encoding="utf-8")

    assert config.load_config(path) == {"log_level": "DEBUG", "days_per_turn": 365}


def test_load_config_rejects_bad_types(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"log_level": "LOUD", "days_per_turn": True}), encoding="utf-8")

    assert config.load_config(path) == config.default_config()


def test_save_config_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"

    config.save_config({"log_level": "INFO", "days_per_turn": 0}, path)

    assert config.load_config(path) == {"log_level": "INFO", "days_per_turn": 1}


@pytest.mark.skipif(os.name == "nt", reason="POSIX layout")
def test_user_dirs(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(config.Path, "home", lambda: tmp_path)

    assert config.get_user_data_dir() == tmp_path / ".config" / "idle_life"
    assert config.get_default_config_path().name == "config.json"
    assert config.get_save_dir() == tmp_path / ".config" / "idle_life" / "saves"
