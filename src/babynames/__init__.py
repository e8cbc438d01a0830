"""Yearly baby-name ingestion."""

from .data.errors import ParseError, SchemaMismatchError
from .data.loader import load, load_glob

__all__ = ['load', 'load_glob', 'ParseError', 'SchemaMismatchError']
