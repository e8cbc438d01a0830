"""
Tests for the YAML loader config.
"""

from pathlib import Path

import pytest
import yaml

from babynames import paths
from babynames.config import LoaderConfig, load_loader_config


def _write(tmp_path: Path, payload: dict) -> Path:
    path = tmp_path / "babynames.yaml"
    with open(path, "w") as f:
        yaml.dump(payload, f)
    return path


class TestLoadLoaderConfig:
    def test_repository_config_loads(self):
        config = load_loader_config()
        assert config.filename_prefix == "yob"
        assert config.on_error == "raise"
        assert config.data_dir == paths.repo_root() / "data" / "names"

    def test_overrides_defaults(self, tmp_path: Path):
        path = _write(
            tmp_path,
            {
                "data_dir": str(tmp_path / "names"),
                "first_year": 2000,
                "last_year": 2002,
                "delimiter": "\t",
                "on_error": "skip",
            },
        )

        config = load_loader_config(path)

        assert config.data_dir == tmp_path / "names"
        assert list(config.years()) == [2000, 2001, 2002]
        assert config.delimiter == "\t"
        assert config.on_error == "skip"
        assert config.filename_suffix == ".txt"

    def test_relative_data_dir_resolves_to_repo(self, tmp_path: Path):
        config = load_loader_config(_write(tmp_path, {"data_dir": "elsewhere"}))
        assert config.data_dir == paths.repo_root() / "elsewhere"

    def test_empty_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_loader_config(path) == LoaderConfig()

    def test_unknown_key(self, tmp_path: Path):
        with pytest.raises(ValueError, match="start_year"):
            load_loader_config(_write(tmp_path, {"start_year": 1900}))

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_loader_config(tmp_path / "missing.yaml")


class TestLoaderConfig:
    def test_with_overrides_ignores_none(self):
        base = LoaderConfig(first_year=1900, last_year=1910)
        config = base.with_overrides(first_year=1905, last_year=None)

        assert config.first_year == 1905
        assert config.last_year == 1910
        assert base.first_year == 1900

    def test_is_frozen(self):
        config = LoaderConfig()
        with pytest.raises(AttributeError):
            config.first_year = 2000
