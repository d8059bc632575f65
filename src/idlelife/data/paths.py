"""Helpers for resolving data file locations."""
from __future__ import annotations

import sys
from pathlib import Path


def get_package_root() -> Path:
    """Return the idlelife package directory."""
    return Path(__file__).resolve().parents[1]


def get_definitions_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing JSON definition files."""
    if base_path is not None:
        return Path(base_path)
    bundle_dir = getattr(sys, "_MEIPASS", None)
    if getattr(sys, "frozen", False) and bundle_dir:
        return Path(bundle_dir) / "data" / "definitions"
    return get_package_root() / "data" / "definitions"
