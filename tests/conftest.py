"""
Shared pytest fixtures for babynames tests.
"""

from pathlib import Path
from typing import Callable, Dict, List, Tuple

import pytest

Row = Tuple[str, str, int]


def write_year_files(directory: Path, files: Dict[int, List[Row]]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for year, rows in files.items():
        text = "".join(f"{name},{sex},{births}\n" for name, sex, births in rows)
        (directory / f"yob{year}.txt").write_text(text, encoding="utf-8")
    return directory


# -----------------------------------------------------------------------------
# Name File Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def sample_rows() -> Dict[int, List[Row]]:
    return {
        2020: [("Jack", "M", 100), ("Emily", "F", 90)],
        2021: [("Jack", "M", 80)],
    }


@pytest.fixture
def names_dir(tmp_path: Path, sample_rows: Dict[int, List[Row]]) -> Path:
    """Two yearly files: 2020 (Jack, Emily) and 2021 (Jack)."""
    return write_year_files(tmp_path / "names", sample_rows)


@pytest.fixture
def make_names_dir(tmp_path: Path) -> Callable[[Dict[int, List[Row]]], Path]:
    """Factory writing arbitrary yearly files into a fresh directory."""
    counter = {"n": 0}

    def _make(files: Dict[int, List[Row]]) -> Path:
        counter["n"] += 1
        return write_year_files(tmp_path / f"names_{counter['n']}", files)

    return _make


@pytest.fixture
def multi_year_dir(make_names_dir) -> Path:
    """Five years with overlapping names across both sexes."""
    return make_names_dir(
        {
            2001: [("Emma", "F", 300), ("Jack", "M", 250), ("Jordan", "F", 40), ("Jordan", "M", 60)],
            2002: [("Emma", "F", 320), ("Jack", "M", 240), ("Jordan", "M", 55)],
            2003: [("Olivia", "F", 310), ("Emma", "F", 305), ("Jack", "M", 230)],
            2004: [("Olivia", "F", 330), ("Jack", "M", 220), ("Jordan", "F", 35)],
            2005: [("Olivia", "F", 340), ("Emma", "F", 290)],
        }
    )
