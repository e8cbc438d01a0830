"""Errors raised while parsing yearly name files."""

from __future__ import annotations

from pathlib import Path


class ParseError(ValueError):
    """A name file does not match the ``name,sex,births`` schema."""

    def __init__(self, path: Path | str, reason: str, row: int | None = None) -> None:
        self.path = Path(path)
        self.reason = reason
        self.row = row
        where = f"{self.path}" if row is None else f"{self.path} (row {row})"
        super().__init__(f"{where}: {reason}")


class SchemaMismatchError(ParseError):
    """Rows carry a different number of fields than the three-column schema."""
