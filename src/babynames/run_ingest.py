"""
Baby-names ingestion entry point.

Usage (from project root):

    python -m babynames.run_ingest --first-year 2000 --last-year 2010

This will:
  - Read `yob<year>.txt` for every requested year from the configured data dir
    (or every matching file with `--glob`)
  - Stamp each row with its year and concatenate into one table
  - Log a per-year summary and optionally write the table to CSV
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from babynames.config import LoaderConfig, load_loader_config
from babynames.data.errors import ParseError
from babynames.data.loader import TEXT_DTYPES, load_configured, summarize


logger = logging.getLogger(__name__)


def _setup_logging(level: str = "INFO") -> None:
    """Configure basic logging to stdout."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Load yearly baby-name files into a single table",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML loader config (default: config/babynames.yaml).",
    )
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding yob<year>.txt files.")
    parser.add_argument("--first-year", type=int, default=None)
    parser.add_argument("--last-year", type=int, default=None)
    parser.add_argument(
        "--glob",
        action="store_true",
        help="Discover files by wildcard instead of iterating first..last year.",
    )
    parser.add_argument(
        "--skip-errors",
        action="store_true",
        help="Warn and skip missing or malformed files instead of aborting.",
    )
    parser.add_argument("--text-dtype", choices=TEXT_DTYPES, default=None)
    parser.add_argument("--out", type=Path, default=None, help="Write the loaded table to this CSV.")
    parser.add_argument("--log-level", default="INFO")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.log_level)

    try:
        base = load_loader_config(args.config) if args.config else _default_config()
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Invalid config: %s", exc)
        return 1

    config = base.with_overrides(
        data_dir=args.data_dir,
        first_year=args.first_year,
        last_year=args.last_year,
        text_dtype=args.text_dtype,
        on_error="skip" if args.skip_errors else None,
    )
    logger.info("Using config: %s", config)

    try:
        df = load_configured(config, discover=args.glob)
    except ParseError as exc:
        logger.error("Failed to parse %s: %s", exc.path, exc.reason)
        return 1
    except (FileNotFoundError, NotADirectoryError) as exc:
        logger.error("Ingestion aborted: %s", exc)
        return 1

    summary = summarize(df)
    logger.info("Per-year summary:\n%s", summary.to_string(index=False))
    logger.info("Ingestion complete - %d rows x %d columns", len(df), df.shape[1])

    if args.out is not None:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(args.out, index=False)
        logger.info("Wrote %s", args.out)
    return 0


def _default_config() -> LoaderConfig:
    """Repository config when present, built-in defaults otherwise."""
    try:
        return load_loader_config()
    except FileNotFoundError:
        return LoaderConfig()


if __name__ == "__main__":
    sys.exit(main())
