"""
Yearly baby-name ingestion.

Each source file ``yob<year>.txt`` holds headerless ``name,sex,births`` rows.
The loader reads every requested file, stamps its rows with the year taken
from the filename and concatenates the per-file tables:

  - ``load``       iterates an explicit set of years
  - ``load_glob``  discovers files by wildcard and derives years from names

Both return the same frame: columns ``name, sex, births, year``, ordered by
year and then by row order inside each file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Tuple

import numpy as np
import pandas as pd

from babynames.config import LoaderConfig
from babynames.data.errors import ParseError, SchemaMismatchError


logger = logging.getLogger(__name__)


FILE_COLUMNS = ("name", "sex", "births")
COLUMNS = FILE_COLUMNS + ("year",)

FILENAME_PREFIX = "yob"
FILENAME_SUFFIX = ".txt"

VALID_SEXES = ("M", "F")
BIRTHS_MAX = int(np.iinfo(np.int64).max)
TEXT_DTYPES = ("object", "string")
ON_ERROR_MODES = ("raise", "skip")


# ── Naming convention ──────────────────────────────────────────────────────────

def year_file_path(
    directory: Path | str,
    year: int,
    *,
    prefix: str = FILENAME_PREFIX,
    suffix: str = FILENAME_SUFFIX,
) -> Path:
    return Path(directory) / f"{prefix}{int(year)}{suffix}"


def year_from_filename(
    path: Path | str,
    *,
    prefix: str = FILENAME_PREFIX,
    suffix: str = FILENAME_SUFFIX,
) -> int:
    """Parse the year out of ``<prefix><year><suffix>``."""
    name = Path(path).name
    if not (name.startswith(prefix) and name.endswith(suffix)):
        raise ParseError(path, f"filename does not match {prefix}<year>{suffix}")
    core = name[len(prefix):len(name) - len(suffix)]
    if not core.isdigit():
        raise ParseError(path, f"cannot derive a year from {name!r}")
    return int(core)


def year_range(first: int, last: int) -> range:
    """Inclusive range of years."""
    return range(int(first), int(last) + 1)


# ── Single file ────────────────────────────────────────────────────────────────

def empty_dataset(text_dtype: str = "object") -> pd.DataFrame:
    _check_text_dtype(text_dtype)
    return pd.DataFrame(
        {
            "name": pd.Series([], dtype=text_dtype),
            "sex": pd.Series([], dtype=text_dtype),
            "births": pd.Series([], dtype=np.int64),
            "year": pd.Series([], dtype=np.int64),
        }
    )


def read_year_file(
    path: Path | str,
    year: int,
    *,
    delimiter: str = ",",
    text_dtype: str = "object",
) -> pd.DataFrame:
    """
    Parse one yearly file and stamp every row with ``year``.

    The year is supplied by the caller (derived from the filename); the file
    content is never consulted for it. Every field is read as text first so
    names such as "NA" or "Nan" survive, then ``births`` is validated and
    cast to int64.

    Raises:
        FileNotFoundError: the file does not exist.
        SchemaMismatchError: a row does not carry exactly three fields.
        ParseError: a field fails validation (births, sex or empty name), or
            the file is not valid UTF-8.
    """
    _check_text_dtype(text_dtype)
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Name file not found: {path}")

    try:
        raw = pd.read_csv(
            path,
            sep=delimiter,
            header=None,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            encoding="utf-8",
        )
    except pd.errors.EmptyDataError:
        logger.warning("%s is empty, no rows for %d", path, year)
        return empty_dataset(text_dtype)
    except pd.errors.ParserError as exc:
        raise SchemaMismatchError(path, str(exc).strip()) from exc
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"not valid UTF-8: {exc.reason}") from exc

    if raw.shape[1] != len(FILE_COLUMNS):
        raise SchemaMismatchError(
            path, f"expected {len(FILE_COLUMNS)} columns, found {raw.shape[1]}"
        )

    raw.columns = list(FILE_COLUMNS)
    # Short rows come back as NaN even with keep_default_na=False.
    short = raw.isna().any(axis=1)
    if short.any():
        i = _first_true(short)
        raise SchemaMismatchError(
            path,
            f"expected {len(FILE_COLUMNS)} fields, found {int(raw.iloc[i].notna().sum())}",
            row=i + 1,
        )
    for col in FILE_COLUMNS:
        raw[col] = raw[col].str.strip()

    _validate_rows(path, raw)

    out = pd.DataFrame(
        {
            "name": raw["name"].astype(text_dtype),
            "sex": raw["sex"].astype(text_dtype),
            "births": raw["births"].astype(np.int64),
            "year": np.full(len(raw), int(year), dtype=np.int64),
        }
    )
    logger.debug("Parsed %s: %d rows", path, len(out))
    return out


def _validate_rows(path: Path, raw: pd.DataFrame) -> None:
    if len(raw) and tuple(raw.iloc[0].str.lower()) == FILE_COLUMNS:
        raise SchemaMismatchError(path, "unexpected header row; files are headerless", row=1)

    bad_births = ~raw["births"].str.fullmatch(r"[0-9]+")
    if bad_births.any():
        i = _first_true(bad_births)
        raise ParseError(
            path,
            f"births {raw['births'].iloc[i]!r} is not a non-negative integer",
            row=i + 1,
        )

    too_large = raw["births"].map(lambda v: int(v) > BIRTHS_MAX).astype(bool)
    if too_large.any():
        i = _first_true(too_large)
        raise ParseError(
            path,
            f"births {raw['births'].iloc[i]!r} exceeds {BIRTHS_MAX}",
            row=i + 1,
        )

    bad_sex = ~raw["sex"].isin(VALID_SEXES)
    if bad_sex.any():
        i = _first_true(bad_sex)
        raise ParseError(
            path,
            f"sex {raw['sex'].iloc[i]!r} is not one of {', '.join(VALID_SEXES)}",
            row=i + 1,
        )

    empty_name = raw["name"] == ""
    if empty_name.any():
        raise ParseError(path, "name is empty", row=_first_true(empty_name) + 1)


def _first_true(mask: pd.Series) -> int:
    return int(np.flatnonzero(mask.to_numpy(dtype=bool))[0])


# ── Many files ─────────────────────────────────────────────────────────────────

def load(
    directory: Path | str,
    years: Iterable[int],
    *,
    prefix: str = FILENAME_PREFIX,
    suffix: str = FILENAME_SUFFIX,
    delimiter: str = ",",
    text_dtype: str = "object",
    on_error: str = "raise",
) -> pd.DataFrame:
    """
    Load ``<directory>/<prefix><year><suffix>`` for every requested year.

    ``years`` is treated as a set: duplicates collapse and files are read in
    ascending year order. With ``on_error="raise"`` the first missing or
    malformed file aborts the whole load; ``on_error="skip"`` logs it and
    carries on with the remaining years.
    """
    directory = _check_directory(directory)
    sources = [
        (year, year_file_path(directory, year, prefix=prefix, suffix=suffix))
        for year in sorted({int(y) for y in years})
    ]
    return _ingest(sources, delimiter=delimiter, text_dtype=text_dtype, on_error=on_error)


def load_glob(
    directory: Path | str,
    *,
    pattern: str | None = None,
    prefix: str = FILENAME_PREFIX,
    suffix: str = FILENAME_SUFFIX,
    delimiter: str = ",",
    text_dtype: str = "object",
    on_error: str = "raise",
) -> pd.DataFrame:
    """
    Load every file in ``directory`` matching ``pattern`` (default
    ``<prefix>*<suffix>``), in filename order. Subdirectories are not searched.
    """
    _check_on_error(on_error)
    directory = _check_directory(directory)
    pattern = pattern or f"{prefix}*{suffix}"

    files = sorted((p for p in directory.glob(pattern) if p.is_file()), key=lambda p: p.name)
    if not files:
        logger.warning("No files matching %r in %s", pattern, directory)

    sources: List[Tuple[int, Path]] = []
    for p in files:
        try:
            sources.append((year_from_filename(p, prefix=prefix, suffix=suffix), p))
        except ParseError as exc:
            if on_error == "raise":
                raise
            logger.warning("Skipping %s: %s", p, exc.reason)

    return _ingest(sources, delimiter=delimiter, text_dtype=text_dtype, on_error=on_error)


def load_configured(config: LoaderConfig, *, discover: bool = False) -> pd.DataFrame:
    """Run ``load`` (or ``load_glob`` when ``discover``) with a ``LoaderConfig``."""
    options = dict(
        prefix=config.filename_prefix,
        suffix=config.filename_suffix,
        delimiter=config.delimiter,
        text_dtype=config.text_dtype,
        on_error=config.on_error,
    )
    if discover:
        return load_glob(config.data_dir, **options)
    return load(config.data_dir, config.years(), **options)


def _ingest(
    sources: List[Tuple[int, Path]],
    *,
    delimiter: str,
    text_dtype: str,
    on_error: str,
) -> pd.DataFrame:
    _check_on_error(on_error)
    _check_text_dtype(text_dtype)

    frames: List[pd.DataFrame] = []
    skipped: List[Path] = []
    for year, path in sources:
        try:
            frame = read_year_file(path, year, delimiter=delimiter, text_dtype=text_dtype)
        except (FileNotFoundError, ParseError) as exc:
            if on_error == "raise":
                raise
            logger.warning("Skipping %d (%s): %s", year, path, exc)
            skipped.append(path)
            continue
        frames.append(frame)

    non_empty = [f for f in frames if len(f)]
    if not non_empty:
        df = empty_dataset(text_dtype)
    else:
        df = pd.concat(non_empty, ignore_index=True)

    logger.info(
        "Loaded %d rows from %d files (%d skipped)",
        len(df),
        len(frames),
        len(skipped),
    )
    return df


def _check_directory(directory: Path | str) -> Path:
    directory = Path(directory)
    if not directory.exists():
        raise FileNotFoundError(f"Names directory not found: {directory}")
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")
    return directory


def _check_text_dtype(text_dtype: str) -> None:
    if text_dtype not in TEXT_DTYPES:
        raise ValueError(f"text_dtype must be one of {TEXT_DTYPES}, got {text_dtype!r}")


def _check_on_error(on_error: str) -> None:
    if on_error not in ON_ERROR_MODES:
        raise ValueError(f"on_error must be one of {ON_ERROR_MODES}, got {on_error!r}")


# ── Summary ────────────────────────────────────────────────────────────────────

def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Per-year row count, birth total and distinct-name count."""
    return (
        df.groupby("year", as_index=False)
        .agg(rows=("name", "size"), births=("births", "sum"), names=("name", "nunique"))
        .sort_values("year")
        .reset_index(drop=True)
    )
