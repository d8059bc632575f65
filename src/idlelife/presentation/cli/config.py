"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_DAYS_PER_TURN = 1
_MAX_DAYS_PER_TURN = 365

logger = logging.getLogger(__name__)


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "IdleLife"
        return Path.home() / "IdleLife"
    return Path.home() / ".config" / "idle_life"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_save_dir() -> Path:
    """Return the per-user save directory."""
    return get_user_data_dir() / "saves"


def default_config() -> Dict[str, Any]:
    return {"log_level": _DEFAULT_LOG_LEVEL, "days_per_turn": _DEFAULT_DAYS_PER_TURN}


def _normalize_log_level(value: object) -> str:
    if isinstance(value, str) and value.upper() in _LOG_LEVELS:
        return value.upper()
    return _DEFAULT_LOG_LEVEL


def _normalize_days_per_turn(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return _DEFAULT_DAYS_PER_TURN
    return max(1, min(_MAX_DAYS_PER_TURN, value))


def normalize_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "log_level": _normalize_log_level(raw.get("log_level")),
        "days_per_turn": _normalize_days_per_turn(raw.get("days_per_turn")),
    }


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default_config()
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config at %s: %s", config_path, exc)
        return default_config()
    if not isinstance(raw, dict):
        return default_config()
    return normalize_config(raw)


def save_config(config: Dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = normalize_config(config)
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
