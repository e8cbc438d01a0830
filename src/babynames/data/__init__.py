"""Loading and aggregating the yearly name files."""

from . import aggregate, errors, loader

__all__ = ["aggregate", "errors", "loader"]
