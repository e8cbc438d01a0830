from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from babynames import paths


@dataclass(frozen=True)
class LoaderConfig:
    """Where the yearly name files live and how to read them."""

    data_dir: Path = paths.data_dir()
    first_year: int = 1880
    last_year: int = 2022
    filename_prefix: str = "yob"
    filename_suffix: str = ".txt"
    delimiter: str = ","
    text_dtype: str = "object"
    on_error: str = "raise"

    def years(self) -> range:
        return range(self.first_year, self.last_year + 1)

    def with_overrides(self, **overrides: Any) -> "LoaderConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_loader_config(path: Path | None = None) -> LoaderConfig:
    p = path or (paths.config_dir() / "babynames.yaml")
    if not p.exists():
        raise FileNotFoundError(f"Loader config not found: {p}")
    raw: dict[str, Any] = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    known = {f.name for f in fields(LoaderConfig)}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown keys in {p}: {sorted(unknown)}")

    out: dict[str, Any] = {}
    if "data_dir" in raw:
        data_dir = Path(str(raw["data_dir"]))
        out["data_dir"] = data_dir if data_dir.is_absolute() else paths.repo_root() / data_dir
    for key in ("first_year", "last_year"):
        if key in raw:
            out[key] = int(raw[key])
    for key in ("filename_prefix", "filename_suffix", "delimiter", "text_dtype", "on_error"):
        if key in raw:
            out[key] = str(raw[key])
    return LoaderConfig(**out)
