from __future__ import annotations

from pathlib import Path


def repo_root() -> Path:
    # This file is src/babynames/paths.py → repo root is 3 levels up.
    return Path(__file__).resolve().parents[2]


def config_dir() -> Path:
    return repo_root() / "config"


def data_dir() -> Path:
    return repo_root() / "data" / "names"
